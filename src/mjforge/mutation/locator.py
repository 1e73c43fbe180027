"""
ComponentLocator: map a logical id (plus optional content hint) to a source element.

Logical ids are not unique, so candidates are narrowed by content:
exact normalized match, then substring containment, then document order.
"""

from typing import List, Optional

from mjforge.exceptions import ComponentNotFoundError
from mjforge.logging_config import logger
from mjforge.markup.config import MARKUP_CONFIG
from mjforge.markup.markers import editable_markers, has_marker, logical_id_of, marker_for
from mjforge.markup.tree import SourceTree, normalize_whitespace, normalized_content


class ComponentLocator:
    """
    Locate source elements addressed by weak identifiers.

    The first-in-order fallback is deterministic but can pick the wrong
    element when duplicates share content and no hint is given.
    """

    def find_candidates(self, tree: SourceTree, logical_id: str) -> List:
        """All elements whose marker attribute contains `editable-<logical_id>`."""
        marker_value = marker_for(logical_id)
        return [el for el in tree.iter_content_elements() if has_marker(el, marker_value)]

    def locate(
        self,
        tree: SourceTree,
        logical_id: str,
        content_hint: Optional[str] = None
    ):
        """
        Locate the authoritative element for a logical id.

        Args:
            tree: Parsed source tree
            logical_id: Id portion of the marker
            content_hint: Content seen by the interactive layer, if any

        Returns:
            The selected element

        Raises:
            ComponentNotFoundError: If no element carries the marker
        """
        candidates = self.find_candidates(tree, logical_id)

        if not candidates:
            logger.warning(f"Component '{logical_id}' not found")
            raise ComponentNotFoundError(logical_id)

        if len(candidates) == 1:
            return candidates[0]

        if content_hint is None:
            logger.debug(f"{len(candidates)} candidates for '{logical_id}', no hint: using first")
            return candidates[0]

        hint = normalize_whitespace(content_hint)
        contents = [normalized_content(el) for el in candidates]

        for element, content in zip(candidates, contents):
            if content == hint:
                return element

        for element, content in zip(candidates, contents):
            if hint in content:
                return element

        logger.debug(f"Hint matched none of {len(candidates)} candidates for '{logical_id}': using first")
        return candidates[0]

    def locate_image(self, tree: SourceTree, image_index: int):
        """
        Locate the N-th body image element in document order.

        Raises:
            ComponentNotFoundError: If the index is out of range
        """
        images = [
            el for el in tree.iter_content_elements()
            if el.tag == MARKUP_CONFIG["image_tag"]
        ]
        if image_index < 0 or image_index >= len(images):
            raise ComponentNotFoundError(
                f"image #{image_index}",
                f"document has {len(images)} image(s)",
            )
        return images[image_index]

    def existing_logical_ids(self, tree: SourceTree) -> set:
        ids = set()
        for element in tree.iter_elements():
            for marker_value in editable_markers(element):
                ids.add(logical_id_of(marker_value))
        return ids
