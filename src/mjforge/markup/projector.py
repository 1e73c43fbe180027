"""
MarkerProjector: carry source identities onto the compiled output.

For every mapping entry, the compiled elements bearing the entry's class are
collected and the best content match is annotated. Matching order is fixed:
single candidate, exact normalized content, substring containment, else skip.
"""

from typing import Dict, List, Optional

from mjforge.exceptions import MarkupParseError
from mjforge.logging_config import logger
from mjforge.schemas import MappingEntry

from .config import ANNOTATION_ATTRIBUTES
from .markers import element_kind
from .tree import CompiledTree, normalized_content


def _prefer_unclaimed(candidates: List, claimed: List):
    for element in candidates:
        if element not in claimed:
            return element
    return candidates[0]


def select_element(group: List, content_snapshot: str, claimed: Optional[List] = None):
    """
    Pick the compiled element for one mapping entry.

    Args:
        group: Compiled elements sharing the entry's class, in document order
        content_snapshot: Normalized source content of the entry
        claimed: Elements already annotated this pass; used only as a tie-break

    Returns:
        Selected element or None
    """
    claimed = claimed or []
    if not group:
        return None
    if len(group) == 1:
        return group[0]

    contents = [normalized_content(element) for element in group]

    exact = [el for el, content in zip(group, contents) if content == content_snapshot]
    if exact:
        return _prefer_unclaimed(exact, claimed)

    containing = [el for el, content in zip(group, contents) if content_snapshot in content]
    if containing:
        return _prefer_unclaimed(containing, claimed)

    return None


def annotate(element, entry: MappingEntry, index: int) -> None:
    element.set(ANNOTATION_ATTRIBUTES["enabled"], "true")
    element.set(ANNOTATION_ATTRIBUTES["logical_id"], entry.logical_id)
    element.set(ANNOTATION_ATTRIBUTES["index"], str(index))
    element.set(ANNOTATION_ATTRIBUTES["kind"], element_kind(entry.element_kind))


def project_markers(compiled_html: str, mappings: List[MappingEntry]) -> str:
    """
    Annotate compiled output with editable identifiers.

    Args:
        compiled_html: Output of the external transformer
        mappings: Mapping entries from the source, in extraction order

    Returns:
        Annotated HTML; the input unchanged when there are no mappings
        or the output cannot be parsed
    """
    if not mappings:
        return compiled_html

    try:
        tree = CompiledTree.parse(compiled_html)
    except MarkupParseError as e:
        logger.warning(f"Projection skipped: {e}")
        return compiled_html

    groups: Dict[str, List] = {}
    claimed: List = []
    skipped = 0

    for index, entry in enumerate(mappings):
        if entry.marker_value not in groups:
            groups[entry.marker_value] = tree.find_by_class(entry.marker_value)

        target = select_element(groups[entry.marker_value], entry.content_snapshot, claimed)
        if target is None:
            skipped += 1
            logger.warning(
                f"No compiled element matched '{entry.marker_value}' "
                f"(content: {entry.content_snapshot[:30]!r})"
            )
            continue

        if target in claimed:
            # One element, several markers: the last entry's identity wins
            logger.warning(
                f"Compiled element for '{entry.marker_value}' already annotated as "
                f"'{target.get(ANNOTATION_ATTRIBUTES['logical_id'])}'; overwriting"
            )

        annotate(target, entry, index)
        claimed.append(target)

    logger.debug(f"Projected {len(claimed)} marker(s), skipped {skipped}")
    return tree.serialize()
