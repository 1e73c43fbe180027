from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Literal

ErrorKind = Literal["parse", "not_found", "validation", "invalid_request"]


class MappingEntry(BaseModel):
    """
    One editable marker found on a source element before transformation.

    Recomputed on every render pass, never persisted.
    """
    marker_value: str  # e.g. "editable-greeting"
    logical_id: str  # marker value without the prefix
    content_snapshot: str  # whitespace-normalized text content
    element_kind: str  # source tag name, e.g. "mj-text"


class RegistryEntry(BaseModel):
    """
    An annotated compiled element as seen by the interactive layer.

    positional_index is only meaningful within the render pass that produced it.
    """
    logical_id: str
    element_kind: str = "text"  # "text", "button" or "image"
    tag_name: str
    content: str = ""
    attributes: Dict[str, str] = Field(default_factory=dict)
    positional_index: int


class MutationResult(BaseModel):
    """
    Result of a mutation on the source document.

    On failure `source` is the unmodified input text.
    """
    success: bool
    operation: Literal["update", "duplicate", "delete", "replace_image"]
    logical_id: Optional[str] = None
    source: str
    new_logical_id: Optional[str] = None  # Set by duplicate
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None


class RenderResult(BaseModel):
    """
    Output of one render pass: declared markup, mapping list,
    annotated compiled output and the registry built from it.
    """
    source: str
    declared_markup: str
    html: str
    mappings: List[MappingEntry] = Field(default_factory=list)
    components: List[RegistryEntry] = Field(default_factory=list)
    # Transformer diagnostics, passed through without interpretation
    diagnostics: List[Any] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


class AttributeTheme(BaseModel):
    """
    Custom theme rendered into the document's <mj-attributes> prelude.
    """
    name: str
    font_family: str = "Arial, sans-serif"
    text_color: str = "#000000"
    background_color: str = "#ffffff"
    accent_color: str = "#4c51bf"
