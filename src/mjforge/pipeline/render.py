"""
RenderPipeline: one pass from source markup to the editable registry.

declare -> extract -> transform (external) -> project -> registry

The pass is pure: the same source text always yields the same output.
"""

from typing import Any, List, Protocol, Tuple

from mjforge.exceptions import MarkupParseError
from mjforge.logging_config import logger
from mjforge.markup.declarator import declare_markers_in_tree
from mjforge.markup.extractor import extract_mappings_from_tree
from mjforge.markup.projector import project_markers
from mjforge.markup.registry import parse_editable_components
from mjforge.markup.tree import SourceTree
from mjforge.schemas import RenderResult


class Transformer(Protocol):
    """External markup transformer: `(markup) -> (compiled_html, diagnostics)`."""

    def __call__(self, markup: str) -> Tuple[str, List[Any]]:
        ...


class RenderPipeline:
    """
    Run declare/extract around the external transformer and annotate its output.

    Auto-tagging is not part of a pass: it runs once per document load
    (see EditSession.load).
    """

    def __init__(self, transformer: Transformer):
        """
        Initialize pipeline.

        Args:
            transformer: Callable compiling markup to HTML plus diagnostics
        """
        self.transformer = transformer

    def prepare(self, source: str) -> Tuple[str, list]:
        """
        Declare markers and extract mappings from one parse of the source.

        Returns:
            (declared_markup, mappings)

        Raises:
            MarkupParseError: If the source is not well-formed
        """
        tree = SourceTree.parse(source)
        mappings = extract_mappings_from_tree(tree)
        added = declare_markers_in_tree(tree)
        declared = tree.serialize() if added else source
        return declared, mappings

    def render(self, source: str) -> RenderResult:
        """
        Render one pass.

        Parse failures fall back to transforming the raw source without
        annotations; transformer failures produce an empty output. Both are
        reported in `errors`, never raised.
        """
        errors: List[str] = []

        try:
            declared, mappings = self.prepare(source)
        except MarkupParseError as e:
            logger.warning(f"Render without annotations: {e}")
            errors.append(str(e))
            declared, mappings = source, []

        try:
            html, diagnostics = self.transformer(declared)
        except Exception as e:
            logger.error(f"Transformer failed: {e}")
            errors.append(f"Transformer failed: {e}")
            return RenderResult(
                source=source,
                declared_markup=declared,
                html="",
                mappings=mappings,
                errors=errors,
            )

        if diagnostics:
            logger.debug(f"Transformer reported {len(diagnostics)} diagnostic(s)")

        annotated = project_markers(html, mappings)
        components = parse_editable_components(annotated) if mappings else []

        return RenderResult(
            source=source,
            declared_markup=declared,
            html=annotated,
            mappings=mappings,
            components=components,
            diagnostics=list(diagnostics or []),
            errors=errors,
        )
