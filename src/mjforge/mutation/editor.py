"""
TreeEditor: structural edits on a parsed source tree.

Every operation touches only the addressed element (and, for delete and
duplicate, the whitespace that belongs to it). Untouched attributes and
siblings serialize back byte-for-byte.
"""

import copy
import random
import string
import time
from typing import Callable, Optional, Set

from mjforge.logging_config import logger
from mjforge.markup.markers import marker_for, replace_markers
from .config import MUTATION_CONFIG

ID_ALPHABET = string.ascii_lowercase + string.digits


class TreeEditor:
    """
    Perform in-place mutations on source tree elements.

    Clock and random source are injectable so generated ids are reproducible in tests.
    """

    def __init__(
        self,
        config: Optional[dict] = None,
        clock: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None
    ):
        self.config = {**MUTATION_CONFIG, **(config or {})}
        self.clock = clock or time.time
        self.rng = rng or random.Random()

    def set_text(self, element, content: str) -> None:
        """
        Replace the text content of an element.

        Attributes (marker included) and the element's own tail are kept;
        child markup, if any, is replaced by the plain text.
        """
        if len(element):
            logger.debug(f"Replacing {len(element)} child node(s) of <{element.tag}> with text")
            for child in list(element):
                element.remove(child)
        element.text = content

    def generate_copy_id(self, base_id: str, existing_ids: Optional[Set[str]] = None) -> str:
        """
        Derive `<base>-copy-<timestamp>-<random>` for a duplicate.

        Args:
            base_id: Logical id of the matched marker
            existing_ids: Ids already in the document; a colliding candidate is redrawn
        """
        existing_ids = existing_ids or set()
        length = self.config["copy_suffix_length"]
        while True:
            timestamp = int(self.clock() * 1000)
            suffix = "".join(self.rng.choice(ID_ALPHABET) for _ in range(length))
            new_id = f"{base_id}-copy-{timestamp}-{suffix}"
            if new_id not in existing_ids:
                return new_id

    def duplicate(self, element, new_id: str):
        """
        Deep-clone an element and insert it as the next sibling.

        The clone's editable tokens are replaced by `editable-<new_id>`.

        Returns:
            The inserted clone
        """
        parent = element.getparent()
        clone = copy.deepcopy(element)
        clone.tail = element.tail
        replace_markers(clone, marker_for(new_id))

        parent.insert(parent.index(element) + 1, clone)
        return clone

    def remove(self, element) -> None:
        """
        Remove an element and its subtree.

        The element's tail text is kept in place so surrounding text
        and indentation are not lost.
        """
        parent = element.getparent()
        tail = element.tail
        previous = element.getprevious()

        if tail:
            if previous is not None:
                previous.tail = (previous.tail or "") + tail
            else:
                parent.text = (parent.text or "") + tail

        parent.remove(element)

    def set_attribute(self, element, name: str, value: str) -> None:
        element.set(name, value)
