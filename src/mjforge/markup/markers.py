"""
Editable marker tokens.

A marker is an `editable-<logicalId>` token stored among the space-separated
values of the marker attribute. Logical ids are not unique per document.
"""

from typing import List, Optional

from .config import MARKUP_CONFIG, ELIGIBLE_KINDS, DEFAULT_ELEMENT_KIND


def marker_for(logical_id: str) -> str:
    return f"{MARKUP_CONFIG['marker_prefix']}{logical_id}"


def logical_id_of(marker_value: str) -> str:
    prefix = MARKUP_CONFIG["marker_prefix"]
    if marker_value.startswith(prefix):
        return marker_value[len(prefix):]
    return marker_value


def is_marker(token: str) -> bool:
    prefix = MARKUP_CONFIG["marker_prefix"]
    # A bare prefix carries no logical id
    return token.startswith(prefix) and len(token) > len(prefix)


def attribute_tokens(element) -> List[str]:
    value = element.get(MARKUP_CONFIG["marker_attribute"])
    if not value:
        return []
    return value.split()


def editable_markers(element) -> List[str]:
    """Distinct marker values on an element, in attribute order."""
    markers = []
    for token in attribute_tokens(element):
        if is_marker(token) and token not in markers:
            markers.append(token)
    return markers


def has_marker(element, marker_value: str) -> bool:
    """Token-set membership test on the marker attribute."""
    return marker_value in attribute_tokens(element)


def add_marker(element, marker_value: str) -> None:
    """Append a marker token, keeping any other values of the attribute."""
    tokens = attribute_tokens(element)
    tokens.append(marker_value)
    element.set(MARKUP_CONFIG["marker_attribute"], " ".join(tokens))


def replace_markers(element, marker_value: str) -> None:
    """
    Replace every editable token with a single marker.

    Non-editable values keep their position; the new marker takes the
    slot of the first editable token (or is appended if there was none).
    """
    tokens = attribute_tokens(element)
    result: List[str] = []
    placed = False
    for token in tokens:
        if is_marker(token):
            if not placed:
                result.append(marker_value)
                placed = True
            continue
        result.append(token)
    if not placed:
        result.append(marker_value)
    element.set(MARKUP_CONFIG["marker_attribute"], " ".join(result))


def element_kind(tag_name: Optional[str]) -> str:
    """Classify a source tag name into text / button / image."""
    return ELIGIBLE_KINDS.get(tag_name or "", DEFAULT_ELEMENT_KIND)
