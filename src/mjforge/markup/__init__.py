"""
Markup package: source/compiled trees and the identity pipeline.

Tags eligible elements, declares their markers, extracts mappings before
transformation and projects them onto the compiled output afterwards.
"""

from .tree import SourceTree, CompiledTree, normalize_whitespace, text_content
from .tagger import auto_tag
from .declarator import declare_markers
from .extractor import extract_mappings
from .projector import project_markers
from .registry import (
    parse_editable_components,
    has_editable_components,
    get_editable_component,
)
from .document import assemble_document, PRESET_THEMES
from .config import MARKUP_CONFIG, ELIGIBLE_KINDS, ANNOTATION_ATTRIBUTES

__all__ = [
    # Trees
    "SourceTree",
    "CompiledTree",
    "normalize_whitespace",
    "text_content",

    # Pipeline stages
    "auto_tag",
    "declare_markers",
    "extract_mappings",
    "project_markers",

    # Registry
    "parse_editable_components",
    "has_editable_components",
    "get_editable_component",

    # Documents
    "assemble_document",
    "PRESET_THEMES",

    # Configuration
    "MARKUP_CONFIG",
    "ELIGIBLE_KINDS",
    "ANNOTATION_ATTRIBUTES",
]
