"""
Default tagging of eligible elements.

Counters live for a single call and are passed through the traversal, so
repeated calls on the same text are deterministic. Calling this on every
keystroke would reassign ids as elements move; run it once per document load.
"""

from typing import Dict

from mjforge.exceptions import MarkupParseError
from mjforge.logging_config import logger

from .config import ELIGIBLE_KINDS
from .markers import add_marker, editable_markers, marker_for
from .tree import SourceTree


def auto_tag_tree(tree: SourceTree, counters: Dict[str, int]) -> int:
    """
    Assign `editable-<kind>-<n>` to eligible elements without a marker.

    Args:
        tree: Parsed source tree (mutated in place)
        counters: Per-kind counters, advanced as markers are assigned

    Returns:
        Number of elements tagged
    """
    tagged = 0
    for element in tree.iter_content_elements():
        kind = ELIGIBLE_KINDS.get(element.tag)
        if kind is None or editable_markers(element):
            continue

        counter = counters.get(kind, 1)
        add_marker(element, marker_for(f"{kind}-{counter}"))
        counters[kind] = counter + 1
        tagged += 1

    return tagged


def auto_tag(text: str) -> str:
    """
    Tag untagged text, button and image elements.

    Args:
        text: Source markup

    Returns:
        Tagged markup, or the input object itself when nothing was tagged
        or the markup cannot be parsed
    """
    try:
        tree = SourceTree.parse(text)
    except MarkupParseError as e:
        logger.warning(f"Auto-tagging skipped: {e}")
        return text

    counters = {kind: 1 for kind in ELIGIBLE_KINDS.values()}
    tagged = auto_tag_tree(tree, counters)

    if not tagged:
        return text

    logger.debug(f"Auto-tagged {tagged} element(s): {counters}")
    return tree.serialize()
