"""
mjforge - Editable component identity and mutation engine for MJML documents.

Tags source elements as editable, carries their identity through an external
MJML transformation, and edits the source addressed by those identities.
"""

__version__ = "0.4.0"

# Core exports
from mjforge.markup import (
    auto_tag,
    declare_markers,
    extract_mappings,
    project_markers,
    parse_editable_components,
    assemble_document,
)
from mjforge.mutation import MutationFacade, EditHistory, ContentPolicy
from mjforge.pipeline import RenderPipeline, EditSession
from mjforge.schemas import MappingEntry, RegistryEntry, MutationResult, RenderResult, AttributeTheme

__all__ = [
    "__version__",
    "auto_tag",
    "declare_markers",
    "extract_mappings",
    "project_markers",
    "parse_editable_components",
    "assemble_document",
    "MutationFacade",
    "EditHistory",
    "ContentPolicy",
    "RenderPipeline",
    "EditSession",
    "MappingEntry",
    "RegistryEntry",
    "MutationResult",
    "RenderResult",
    "AttributeTheme",
]
