"""Markdown conversion for Inkpost.

Post bodies are converted with mistune. Fenced code blocks are highlighted by
Pygments using inline styles, so the generated pages need no extra stylesheet
for code.

Key classes:
- MarkdownConverter: Converts Markdown text to an HTML fragment.
"""

from __future__ import annotations

import re

import mistune
from markupsafe import Markup
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

MARKDOWN_PLUGINS = ["strikethrough", "footnotes", "table", "url"]


def _generate_heading_id(text: str) -> str:
    """Generate a URL-friendly ID from heading text.

    Args:
        text: The heading text.

    Returns:
        URL-friendly slug suitable for anchor links.
    """
    slug = re.sub(r"<[^>]+>", "", text).lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-")


class _HighlightRenderer(mistune.HTMLRenderer):
    """Markdown renderer with heading anchors and Pygments code blocks.

    One instance renders one document; heading IDs are deduplicated per
    document only.
    """

    def __init__(self, formatter: HtmlFormatter):
        super().__init__(escape=False)
        self.formatter = formatter
        self._heading_id_counts: dict[str, int] = {}

    def heading(self, text: str, level: int, **attrs) -> str:
        base_id = _generate_heading_id(text) or "section"
        if base_id in self._heading_id_counts:
            self._heading_id_counts[base_id] += 1
            heading_id = f"{base_id}-{self._heading_id_counts[base_id]}"
        else:
            self._heading_id_counts[base_id] = 0
            heading_id = base_id
        return f'<h{level} id="{heading_id}">{text}</h{level}>\n'

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a fenced code block through Pygments.

        Args:
            code: The code content.
            info: Fence info string; its first word names the language.

        Returns:
            Highlighted HTML. Unknown or missing languages use the
            plain-text lexer so the block keeps the theme's styling.
        """
        language = info.split()[0] if info and info.strip() else ""
        lexer = TextLexer()
        if language:
            try:
                lexer = get_lexer_by_name(language, stripall=True)
            except ClassNotFound:
                pass
        return highlight(code, lexer, self.formatter)


class MarkdownConverter:
    """Converts Markdown to HTML with syntax-highlighted code blocks.

    The highlight style is fixed when the converter is built. The converter
    holds no per-document state, so one instance serves a whole build.

    Attributes:
        style: Name of the Pygments style used for code blocks.
    """

    def __init__(self, style: str = "gruvbox-dark"):
        """Initialize the converter.

        Args:
            style: Pygments style name.

        Raises:
            pygments.util.ClassNotFound: If the style does not exist.
        """
        self.style = style
        self._formatter = HtmlFormatter(
            style=style, noclasses=True, cssclass="highlight"
        )

    def convert(self, text: str) -> Markup:
        """Convert Markdown text to an HTML fragment.

        Args:
            text: Markdown source.

        Returns:
            Rendered HTML marked safe for templates.
        """
        markdown = mistune.create_markdown(
            renderer=_HighlightRenderer(self._formatter), plugins=MARKDOWN_PLUGINS
        )
        return Markup(markdown(text))
