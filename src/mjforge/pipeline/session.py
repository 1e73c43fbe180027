"""
EditSession: the controller between the interactive layer and the core.

Owns the current source text and the undo history for one loaded document.
"""

from typing import Optional

from mjforge.logging_config import logger
from mjforge.markup.tagger import auto_tag
from mjforge.mutation.facade import MutationFacade
from mjforge.mutation.history import EditHistory
from mjforge.schemas import MutationResult, RenderResult

from .render import RenderPipeline


class EditSession:
    """
    Single-document, single-threaded edit session.

    Every successful mutation pushes the pre-mutation snapshot onto the
    history; failed mutations leave both source and history untouched.
    """

    def __init__(
        self,
        pipeline: Optional[RenderPipeline] = None,
        facade: Optional[MutationFacade] = None,
        history: Optional[EditHistory] = None
    ):
        self.pipeline = pipeline
        self.facade = facade or MutationFacade()
        self.history = history or EditHistory()
        self.template_id: Optional[str] = None
        self.source: str = ""
        self._loaded_source: str = ""

    def load(self, template_id: Optional[str], source: str, tag: bool = True) -> str:
        """
        Load a document, clearing the undo history.

        Args:
            template_id: Identifier from the persistence collaborator
            source: Stored source markup
            tag: Run default tagging (once per load, never per keystroke)

        Returns:
            The (possibly tagged) current source
        """
        if template_id != self.template_id:
            logger.debug(f"Switching document {self.template_id!r} -> {template_id!r}")
        self.history.clear()
        self.template_id = template_id
        self.source = auto_tag(source) if tag else source
        self._loaded_source = self.source
        return self.source

    def render(self) -> RenderResult:
        if self.pipeline is None:
            raise RuntimeError("EditSession has no render pipeline")
        return self.pipeline.render(self.source)

    def _apply(self, result: MutationResult) -> MutationResult:
        if result.success and result.source != self.source:
            self.history.push(self.source)
            self.source = result.source
        return result

    def update_content(
        self,
        logical_id: str,
        new_content: str,
        content_hint: Optional[str] = None
    ) -> MutationResult:
        return self._apply(
            self.facade.update_content(self.source, logical_id, new_content, content_hint)
        )

    def duplicate(self, logical_id: str, content_hint: Optional[str] = None) -> MutationResult:
        return self._apply(self.facade.duplicate_component(self.source, logical_id, content_hint))

    def delete(self, logical_id: str, content_hint: Optional[str] = None) -> MutationResult:
        return self._apply(self.facade.delete_component(self.source, logical_id, content_hint))

    def replace_image(self, image_index: int, new_url: str) -> MutationResult:
        return self._apply(self.facade.replace_image_source(self.source, image_index, new_url))

    def set_source(self, source: str) -> None:
        """Accept a direct edit of the source text (e.g. from a code editor)."""
        if source != self.source:
            self.history.push(self.source)
            self.source = source

    def undo(self) -> Optional[str]:
        """
        Restore the previous snapshot.

        Returns:
            The restored source, or None when there is nothing to undo
        """
        snapshot = self.history.pop()
        if snapshot is None:
            return None
        self.source = snapshot
        return snapshot

    @property
    def has_changes(self) -> bool:
        return self.source != self._loaded_source

    def mark_saved(self) -> None:
        """Record the current source as persisted."""
        self._loaded_source = self.source
