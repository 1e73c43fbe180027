"""
Unit tests for the mutation building blocks: validator, locator, editor, history.
"""

import random
import re

import pytest

pytestmark = [pytest.mark.mutation]
from mjforge.exceptions import ComponentNotFoundError, ConfigError, ContentValidationError
from mjforge.markup.tree import SourceTree
from mjforge.mutation import (
    ComponentLocator,
    ContentPolicy,
    ContentValidator,
    EditHistory,
    TreeEditor,
)

COPY_ID = re.compile(r"^greeting-copy-1700000000000-[a-z0-9]{5}$")

THEMED = (
    '<mjml><mj-head><mj-attributes>'
    '<mj-text mj-class="editable-greeting" color="#333"/>'
    '<mj-image padding="0"/>'
    '</mj-attributes></mj-head><mj-body>'
    '<mj-text mj-class="editable-greeting">Hi</mj-text>'
    '<mj-image src="body.png"/>'
    '</mj-body></mjml>'
)


class TestContentValidator:

    def test_trims_by_default(self):
        """Surrounding whitespace is stripped before storage."""
        assert ContentValidator().validate("  Hey  ") == "Hey"

    def test_rejects_whitespace_only(self):
        """Blank content is rejected and the minimum is reported."""
        with pytest.raises(ContentValidationError, match=r"empty \(minimum 1 character\)") as exc_info:
            ContentValidator().validate("   \n ")
        assert exc_info.value.limit == 1

    def test_rejects_over_limit(self):
        """Content above 5000 characters is rejected with the limit."""
        with pytest.raises(ContentValidationError) as exc_info:
            ContentValidator().validate("x" * 5001)
        assert "5000" in str(exc_info.value)
        assert exc_info.value.limit == 5000

    def test_accepts_exactly_the_limit(self):
        """5000 characters is still allowed."""
        assert len(ContentValidator().validate("x" * 5000)) == 5000

    def test_rejects_non_string(self):
        """Non-string content is a validation error."""
        with pytest.raises(ContentValidationError):
            ContentValidator().validate(42)

    def test_per_call_policy(self):
        """A per-call policy overrides the validator default."""
        policy = ContentPolicy(max_length=3, allow_empty=True, trim=False)
        validator = ContentValidator()
        assert validator.validate("", policy) == ""
        assert validator.validate(" a ", policy) == " a "
        with pytest.raises(ContentValidationError):
            validator.validate("abcd", policy)

    def test_policy_from_config_overrides(self):
        """Explicit overrides win; None overrides are ignored."""
        policy = ContentPolicy.from_config({"max_content_length": 10}, allow_empty=True, trim=None)
        assert policy.max_length == 10
        assert policy.allow_empty is True
        assert policy.trim is True


class TestComponentLocator:

    SOURCE = (
        '<mj-column>'
        '<mj-text mj-class="editable-greeting">Hi</mj-text>'
        '<mj-text mj-class="editable-greeting">Hello   there</mj-text>'
        '<mj-text mj-class="big editable-other">Other</mj-text>'
        '</mj-column>'
    )

    @pytest.fixture
    def tree(self):
        """Parsed source with a shared id and a multi-token element."""
        return SourceTree.parse(self.SOURCE)

    def test_token_membership_not_substring(self, tree):
        """Candidates match whole marker tokens only."""
        locator = ComponentLocator()
        assert len(locator.find_candidates(tree, "greeting")) == 2
        assert locator.find_candidates(tree, "greet") == []
        assert len(locator.find_candidates(tree, "other")) == 1

    def test_no_hint_uses_first(self, tree):
        """Without a hint the first candidate wins."""
        assert ComponentLocator().locate(tree, "greeting").text == "Hi"

    def test_exact_hint_after_normalization(self, tree):
        """Hint and content are whitespace-normalized before comparing."""
        element = ComponentLocator().locate(tree, "greeting", "  Hello there ")
        assert element.text == "Hello   there"

    def test_substring_hint(self, tree):
        """A hint contained in the content selects that element."""
        element = ComponentLocator().locate(tree, "greeting", "there")
        assert element.text == "Hello   there"

    def test_unmatched_hint_falls_back_to_first(self, tree):
        """An unmatched hint falls back to document order."""
        assert ComponentLocator().locate(tree, "greeting", "nothing like it").text == "Hi"

    def test_missing_id_raises(self, tree):
        """Unknown ids raise ComponentNotFoundError naming the id."""
        with pytest.raises(ComponentNotFoundError, match='"nope"'):
            ComponentLocator().locate(tree, "nope")

    def test_locate_image_range(self):
        """Images are indexed in document order with range checks."""
        tree = SourceTree.parse('<mj-image src="a"/><mj-text>x</mj-text><mj-image src="b"/>')
        locator = ComponentLocator()
        assert locator.locate_image(tree, 1).get("src") == "b"
        with pytest.raises(ComponentNotFoundError, match="2 image"):
            locator.locate_image(tree, 2)
        with pytest.raises(ComponentNotFoundError):
            locator.locate_image(tree, -1)

    def test_head_defaults_are_not_candidates(self):
        """Elements under <mj-head> are never located as components."""
        tree = SourceTree.parse(THEMED)
        locator = ComponentLocator()
        candidates = locator.find_candidates(tree, "greeting")
        assert [el.text for el in candidates] == ["Hi"]

    def test_head_image_default_not_counted(self):
        """Image defaults in <mj-attributes> do not shift image indexes."""
        tree = SourceTree.parse(THEMED)
        locator = ComponentLocator()
        assert locator.locate_image(tree, 0).get("src") == "body.png"
        with pytest.raises(ComponentNotFoundError, match="1 image"):
            locator.locate_image(tree, 1)

    def test_existing_logical_ids(self, tree):
        """All marker ids in the document are collected."""
        assert ComponentLocator().existing_logical_ids(tree) == {"greeting", "other"}


class TestTreeEditor:

    def test_copy_id_format(self, fixed_editor):
        """Copy ids are <base>-copy-<ms>-<5 chars>."""
        assert COPY_ID.match(fixed_editor.generate_copy_id("greeting"))

    def test_copy_id_collision_redrawn(self):
        """A colliding candidate id is drawn again."""
        first = TreeEditor(clock=lambda: 1700000000.0, rng=random.Random(0)).generate_copy_id("greeting")
        editor = TreeEditor(clock=lambda: 1700000000.0, rng=random.Random(0))
        second = editor.generate_copy_id("greeting", {first})
        assert second != first
        assert COPY_ID.match(second)

    def test_set_text_keeps_attributes_and_tail(self):
        """Only the text changes; attributes and tail stay."""
        tree = SourceTree.parse('<mj-text mj-class="editable-a" align="left"><b>old</b> text</mj-text>\n')
        element = next(tree.iter_elements())
        TreeEditor().set_text(element, "new")
        assert tree.serialize() == '<mj-text mj-class="editable-a" align="left">new</mj-text>\n'

    def test_duplicate_replaces_editable_tokens_only(self, fixed_editor):
        """The clone gets one new marker; plain tokens stay."""
        tree = SourceTree.parse('<mj-column><mj-text mj-class="big editable-a editable-b">A</mj-text></mj-column>')
        element = tree.find_first("mj-text")
        clone = fixed_editor.duplicate(element, "a-copy")
        assert clone.get("mj-class") == "big editable-a-copy"
        assert element.get("mj-class") == "big editable-a editable-b"
        assert clone.getprevious() is element

    def test_remove_keeps_following_text(self):
        """Tail text moves to the parent when there is no previous sibling."""
        tree = SourceTree.parse("<p>lead <x>gone</x> trail</p>")
        TreeEditor().remove(tree.find_first("x"))
        assert tree.serialize() == "<p>lead  trail</p>"

    def test_remove_appends_tail_to_previous_sibling(self):
        """Tail text moves onto the previous sibling's tail."""
        tree = SourceTree.parse("<p><a/>1<x/>2</p>")
        TreeEditor().remove(tree.find_first("x"))
        assert tree.serialize() == "<p><a/>12</p>"


class TestEditHistory:

    def test_capacity_evicts_oldest(self):
        """51 pushes leave 50, newest popped first."""
        history = EditHistory(capacity=50)
        for i in range(1, 52):
            history.push(f"snap-{i}")
        assert len(history) == 50
        assert history.snapshots()[0] == "snap-2"
        assert history.pop() == "snap-51"

    def test_default_capacity(self):
        """The default capacity is 50."""
        history = EditHistory()
        for i in range(60):
            history.push(str(i))
        assert len(history) == 50

    def test_invalid_capacity(self):
        """A capacity below 1 is a configuration error."""
        with pytest.raises(ConfigError):
            EditHistory(capacity=0)

    def test_equal_push_coalesced(self):
        """Pushing the current top again is a no-op."""
        history = EditHistory()
        assert history.push("a") is True
        assert history.push("a") is False
        assert history.push("b") is True
        assert history.snapshots() == ["a", "b"]

    def test_pop_empty_and_clear(self):
        """Empty pops return None; clear empties the stack."""
        history = EditHistory()
        assert history.pop() is None
        assert history.peek() is None
        assert not history.can_undo
        history.push("a")
        assert history.can_undo
        assert history.peek() == "a"
        history.clear()
        assert len(history) == 0
