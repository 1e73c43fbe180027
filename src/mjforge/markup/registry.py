"""
Registry of editable components read back from annotated compiled output.

This is what the interactive layer sees for one render pass.
"""

from typing import List, Optional

from mjforge.exceptions import MarkupParseError
from mjforge.logging_config import logger
from mjforge.schemas import RegistryEntry

from .config import ANNOTATION_ATTRIBUTES, DEFAULT_ELEMENT_KIND
from .tree import CompiledTree, text_content


def parse_editable_components(annotated_html: str) -> List[RegistryEntry]:
    """
    Build registry entries from elements flagged as editable.

    An entry without a numeric index falls back to its rank among
    flagged elements; an entry without an id is skipped.
    """
    if not annotated_html or not isinstance(annotated_html, str):
        return []

    try:
        tree = CompiledTree.parse(annotated_html)
    except MarkupParseError as e:
        logger.error(f"Registry parse failed: {e}")
        return []

    components: List[RegistryEntry] = []
    flagged = [
        el for el in tree.iter_elements()
        if el.get(ANNOTATION_ATTRIBUTES["enabled"]) == "true"
    ]

    for dom_index, element in enumerate(flagged):
        logical_id = element.get(ANNOTATION_ATTRIBUTES["logical_id"])
        if not logical_id:
            logger.warning(f"Editable element at index {dom_index} has no id")
            continue

        try:
            index = int(element.get(ANNOTATION_ATTRIBUTES["index"]))
        except (TypeError, ValueError):
            index = dom_index

        components.append(RegistryEntry(
            logical_id=logical_id,
            element_kind=element.get(ANNOTATION_ATTRIBUTES["kind"]) or DEFAULT_ELEMENT_KIND,
            tag_name=str(element.tag).lower(),
            content=text_content(element).strip(),
            attributes={str(k): str(v) for k, v in element.attrib.items()},
            positional_index=index,
        ))

    return components


def has_editable_components(annotated_html: str) -> bool:
    return len(parse_editable_components(annotated_html)) > 0


def get_editable_component(
    annotated_html: str,
    logical_id: str,
    index: Optional[int] = None
) -> Optional[RegistryEntry]:
    """
    Look up a component by logical id.

    With duplicate ids, `index` (the positional index echoed back by the
    interactive layer) selects the exact entry from the same pass.
    """
    for component in parse_editable_components(annotated_html):
        if component.logical_id != logical_id:
            continue
        if index is None or component.positional_index == index:
            return component
    return None
