"""
MutationFacade: orchestrate component edits on source markup.

Main entry point for update / duplicate / delete / image replacement.
"""

from typing import Callable, Optional

from mjforge.exceptions import InvalidRequestError, MjforgeError
from mjforge.logging_config import logger
from mjforge.markup.tree import SourceTree
from mjforge.schemas import MutationResult

from .config import MUTATION_CONFIG, ContentPolicy
from .editor import TreeEditor
from .locator import ComponentLocator
from .validator import ContentValidator


class MutationFacade:
    """
    Main facade for component mutations.

    Orchestrates the pipeline for every operation:
    1. Check request parameters
    2. Validate content (update only, before any parsing)
    3. Parse the current source text (SourceTree)
    4. Locate the component (ComponentLocator)
    5. Mutate the tree (TreeEditor)
    6. Serialize

    Operations are atomic: a failure at any step returns the input text
    unchanged with a structured error. No MjforgeError escapes the facade.
    """

    def __init__(
        self,
        config: Optional[dict] = None,
        editor: Optional[TreeEditor] = None
    ):
        """
        Initialize mutation facade.

        Args:
            config: Optional config overrides
            editor: Optional pre-built editor (injectable clock/rng)
        """
        self.config = {**MUTATION_CONFIG, **(config or {})}
        self.locator = ComponentLocator()
        self.editor = editor or TreeEditor(self.config)
        self.validator = ContentValidator(ContentPolicy.from_config(self.config))

        logger.debug("MutationFacade initialized")

    def _execute(
        self,
        operation: str,
        source: str,
        logical_id: Optional[str],
        action: Callable[[SourceTree], Optional[str]],
        precheck: Optional[Callable[[], None]] = None
    ) -> MutationResult:
        try:
            if not source or not logical_id:
                raise InvalidRequestError(
                    "Missing required parameters: source text and component id are required"
                )

            if precheck:
                precheck()

            tree = SourceTree.parse(source)
            new_logical_id = action(tree)
            new_source = tree.serialize()

        except MjforgeError as e:
            logger.warning(f"{operation} '{logical_id}' failed: {e}")
            return MutationResult(
                success=False,
                operation=operation,
                logical_id=logical_id,
                source=source or "",
                error=str(e),
                error_kind=e.error_kind,
            )
        except Exception as e:
            logger.exception(f"Unexpected failure during {operation} of '{logical_id}'")
            return MutationResult(
                success=False,
                operation=operation,
                logical_id=logical_id,
                source=source or "",
                error=f"Failed to {operation} component: {e}",
            )

        logger.info(f"{operation} '{logical_id}' succeeded")
        return MutationResult(
            success=True,
            operation=operation,
            logical_id=logical_id,
            source=new_source,
            new_logical_id=new_logical_id,
        )

    def update_content(
        self,
        source: str,
        logical_id: str,
        new_content: str,
        content_hint: Optional[str] = None,
        policy: Optional[ContentPolicy] = None
    ) -> MutationResult:
        """
        Replace the text content of a component.

        Args:
            source: Current source markup
            logical_id: Id portion of the component's marker
            new_content: New text (trimmed before storage)
            content_hint: Content seen by the interactive layer, for duplicate ids
            policy: Optional per-call content policy

        Returns:
            MutationResult; on validation failure the tree is never parsed
        """
        sanitized = {}

        def precheck():
            sanitized["value"] = self.validator.validate(new_content, policy)

        def action(tree: SourceTree):
            element = self.locator.locate(tree, logical_id, content_hint)
            self.editor.set_text(element, sanitized["value"])
            return None

        return self._execute("update", source, logical_id, action, precheck)

    def duplicate_component(
        self,
        source: str,
        logical_id: str,
        content_hint: Optional[str] = None
    ) -> MutationResult:
        """
        Clone a component (with its subtree) right after the original.

        Returns:
            MutationResult with `new_logical_id` set to the clone's id
        """
        def action(tree: SourceTree):
            element = self.locator.locate(tree, logical_id, content_hint)
            existing = self.locator.existing_logical_ids(tree)
            new_id = self.editor.generate_copy_id(logical_id, existing)
            self.editor.duplicate(element, new_id)
            return new_id

        return self._execute("duplicate", source, logical_id, action)

    def delete_component(
        self,
        source: str,
        logical_id: str,
        content_hint: Optional[str] = None
    ) -> MutationResult:
        """Remove a component and its subtree from its parent."""
        def action(tree: SourceTree):
            element = self.locator.locate(tree, logical_id, content_hint)
            self.editor.remove(element)
            return None

        return self._execute("delete", source, logical_id, action)

    def replace_image_source(
        self,
        source: str,
        image_index: int,
        new_url: str
    ) -> MutationResult:
        """
        Point the N-th image (document order) at a new URL.

        Args:
            source: Current source markup
            image_index: Zero-based index among image elements
            new_url: New src value
        """
        def precheck():
            if not new_url:
                raise InvalidRequestError("Missing required parameter: new image URL")

        def action(tree: SourceTree):
            element = self.locator.locate_image(tree, image_index)
            self.editor.set_attribute(element, "src", new_url)
            return None

        return self._execute(
            "replace_image",
            source,
            f"image-{image_index}",
            action,
            precheck,
        )
