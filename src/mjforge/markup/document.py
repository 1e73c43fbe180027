"""
Document assembly: wrap an edited body fragment into a full MJML document.

Themes are rendered as an <mj-attributes> prelude in the head, which is
also where marker declarations are added.
"""

from typing import Optional, Union
from xml.sax.saxutils import quoteattr, escape

from mjforge.schemas import AttributeTheme

PRESET_THEMES = {
    "default": "",
    "dark": """
      <mj-attributes>
        <mj-all font-family="Arial, sans-serif" />
        <mj-text color="#ffffff" />
        <mj-section background-color="#1a202c" />
        <mj-body background-color="#000000" />
      </mj-attributes>""",
    "brand": """
      <mj-attributes>
        <mj-all font-family="Georgia, serif" />
        <mj-text color="#2d3748" />
        <mj-button background-color="#4c51bf" color="white" border-radius="20px" />
        <mj-section background-color="#ebf8ff" />
      </mj-attributes>""",
}


def render_theme(theme: Union[str, AttributeTheme, None]) -> str:
    """
    Render a preset name or a custom theme as head markup.

    Unknown preset names render nothing.
    """
    if theme is None:
        return ""
    if isinstance(theme, str):
        return PRESET_THEMES.get(theme, "")

    return f"""
      <mj-attributes>
        <mj-all font-family={quoteattr(theme.font_family)} />
        <mj-text color={quoteattr(theme.text_color)} />
        <mj-body background-color={quoteattr(theme.background_color)} />
        <mj-button background-color={quoteattr(theme.accent_color)} color="#ffffff" />
        <mj-section background-color="#ffffff" />
      </mj-attributes>"""


def assemble_document(
    body: str,
    theme: Union[str, AttributeTheme, None] = None,
    preview: Optional[str] = "Email Preview"
) -> str:
    """
    Wrap body markup in the standard document structure.

    Args:
        body: Body fragment (sections, columns, components)
        theme: Preset name or AttributeTheme
        preview: Inbox preview text, omitted when None

    Returns:
        Full document markup
    """
    preview_markup = f"\n      <mj-preview>{escape(preview)}</mj-preview>" if preview is not None else ""
    return f"""<mjml>
    <mj-head>{preview_markup}{render_theme(theme)}
    </mj-head>
    <mj-body>
{body}
    </mj-body>
</mjml>"""
