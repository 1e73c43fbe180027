"""
Pytest configuration for the mjforge test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- A deterministic stand-in for the external MJML transformer
- Common source documents and fixtures
"""

import os
import html
import random

import pytest

from mjforge.logging_config import setup_logging
from mjforge.markup.markers import attribute_tokens
from mjforge.markup.tree import SourceTree, text_content
from mjforge.mutation import MutationFacade, TreeEditor


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Configure pytest for machine-mode operation."""
    os.environ.setdefault("MJFORGE_MACHINE_MODE", "1")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True)


@pytest.fixture(autouse=True)
def reset_cli_mode():
    from mjforge.cli.config import CLIConfig

    CLIConfig.reset()
    yield
    CLIConfig.reset()


# ============================================================================
# TRANSFORMER STAND-IN
# ============================================================================

def fake_transformer(markup):
    """
    Compile MJML to a flat HTML page.

    Only declared markers become output classes, like the real transformer.
    Text and buttons render as <div class=...><p>text</p></div>,
    images as <div class=...><img src=.../></div>.
    """
    tree = SourceTree.parse(markup)
    declared = {
        el.get("name"): el.get("css-class")
        for el in tree.find_by_tag("mj-class")
        if el.get("name")
    }

    parts = []
    for element in tree.iter_content_elements():
        if element.tag not in ("mj-text", "mj-button", "mj-image"):
            continue
        classes = [declared[t] for t in attribute_tokens(element) if t in declared]
        class_attr = f' class="{" ".join(classes)}"' if classes else ""
        if element.tag == "mj-image":
            src = html.escape(element.get("src", ""), quote=True)
            parts.append(f'<div{class_attr}><img src="{src}"></div>')
        else:
            content = html.escape(text_content(element))
            parts.append(f'<div{class_attr}><p>{content}</p></div>')

    page = (
        "<!DOCTYPE html><html><head><title>preview</title></head><body>"
        + "".join(parts)
        + "</body></html>"
    )
    return page, ["soft validation: ok"]


@pytest.fixture
def transformer():
    return fake_transformer


# ============================================================================
# SOURCE FIXTURES
# ============================================================================

GREETINGS = (
    '<mj-column>'
    '<mj-text mj-class="editable-greeting">Hi</mj-text>'
    '<mj-text mj-class="editable-greeting">Hello</mj-text>'
    '</mj-column>'
)

BODY = """<mj-section>
  <mj-column>
    <mj-text font-size="20px">Hello World</mj-text>
    <mj-button href="https://example.com">Click Me</mj-button>
    <mj-image src="https://example.com/a.png"/>
  </mj-column>
</mj-section>"""


@pytest.fixture
def greetings_source():
    return GREETINGS


@pytest.fixture
def body_source():
    return BODY


@pytest.fixture
def fixed_editor():
    """TreeEditor with a frozen clock and seeded random source."""
    return TreeEditor(clock=lambda: 1700000000.0, rng=random.Random(42))


@pytest.fixture
def facade(fixed_editor):
    return MutationFacade(editor=fixed_editor)
