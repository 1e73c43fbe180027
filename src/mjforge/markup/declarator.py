"""
TagDeclarator: declare every editable marker in the document prelude.

The transformer only emits an output class for declared marker values, so
each marker gets `<mj-class name="editable-x" css-class="editable-x"/>`.
"""

from typing import List, Set

from lxml import etree

from mjforge.exceptions import MarkupParseError
from mjforge.logging_config import logger

from .config import MARKUP_CONFIG
from .extractor import distinct_markers, extract_mappings_from_tree
from .tree import SourceTree


def _append_child(parent, child) -> None:
    """Append child, reusing the sibling indentation already present in parent."""
    if len(parent):
        last = parent[-1]
        child.tail = last.tail
        last.tail = parent.text
    parent.append(child)


def declared_markers(tree: SourceTree) -> Set[str]:
    declared = set()
    prelude_tag = MARKUP_CONFIG["prelude_tag"]
    for prelude in tree.find_by_tag(prelude_tag):
        for child in prelude:
            if child.tag == MARKUP_CONFIG["declaration_tag"] and child.get("name"):
                declared.add(child.get("name"))
    return declared


def declare_markers_in_tree(tree: SourceTree) -> List[str]:
    """
    Add missing declarations to the tree in place.

    Returns:
        Marker values newly declared (empty when nothing to do or no head)
    """
    markers = distinct_markers(extract_mappings_from_tree(tree))
    if not markers:
        return []

    already = declared_markers(tree)
    missing = [m for m in markers if m not in already]
    if not missing:
        return []

    prelude = tree.find_first(MARKUP_CONFIG["prelude_tag"])
    if prelude is None:
        head = tree.find_first(MARKUP_CONFIG["head_tag"])
        if head is None:
            logger.debug("No document head to declare markers into")
            return []
        prelude = etree.Element(MARKUP_CONFIG["prelude_tag"])
        _append_child(head, prelude)

    for marker_value in missing:
        declaration = etree.Element(MARKUP_CONFIG["declaration_tag"])
        declaration.set("name", marker_value)
        declaration.set("css-class", marker_value)
        _append_child(prelude, declaration)

    return missing


def declare_markers(text: str) -> str:
    """
    Ensure every marker value used in the markup is declared.

    Idempotent: returns the input unchanged when all markers are already
    declared, when there is no head, or when the markup cannot be parsed.
    """
    try:
        tree = SourceTree.parse(text)
    except MarkupParseError as e:
        logger.warning(f"Marker declaration skipped: {e}")
        return text

    added = declare_markers_in_tree(tree)
    if not added:
        return text

    logger.debug(f"Declared {len(added)} marker(s): {added}")
    return tree.serialize()
