"""
MappingExtractor: flat list of editable markers found in source markup.

Computed before the external transformation and consumed by the projector.
"""

from typing import List

from mjforge.exceptions import MarkupParseError
from mjforge.logging_config import logger
from mjforge.schemas import MappingEntry

from .markers import editable_markers, logical_id_of
from .tree import SourceTree, normalized_content


def extract_mappings_from_tree(tree: SourceTree) -> List[MappingEntry]:
    """
    Walk a parsed source tree in document order.

    Emits one entry per distinct marker value per element.
    """
    mappings: List[MappingEntry] = []

    for element in tree.iter_content_elements():
        markers = editable_markers(element)
        if not markers:
            continue

        content = normalized_content(element)
        for marker_value in markers:
            mappings.append(MappingEntry(
                marker_value=marker_value,
                logical_id=logical_id_of(marker_value),
                content_snapshot=content,
                element_kind=element.tag,
            ))

    return mappings


def extract_mappings(text: str) -> List[MappingEntry]:
    """
    Extract editable mappings from source markup.

    Args:
        text: Source markup

    Returns:
        Mapping entries in document order; empty if the markup cannot be parsed
    """
    try:
        tree = SourceTree.parse(text)
    except MarkupParseError as e:
        logger.warning(f"Mapping extraction skipped: {e}")
        return []

    mappings = extract_mappings_from_tree(tree)
    logger.debug(f"Extracted {len(mappings)} editable mapping(s)")
    return mappings


def distinct_markers(mappings: List[MappingEntry]) -> List[str]:
    """Distinct marker values, first-seen order."""
    seen: List[str] = []
    for entry in mappings:
        if entry.marker_value not in seen:
            seen.append(entry.marker_value)
    return seen
