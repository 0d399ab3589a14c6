"""Template rendering for Inkpost.

This module uses Jinja2 to merge page data into layouts. A layout is a body
template (``post.html``, ``index.html`` or ``about.html``) that pulls in the
shared ``header.html`` and ``footer.html`` fragments with ``{% include %}``.

Key classes:
- PageRenderer: Owns the Jinja2 environment and loads layouts.
- Layout: A loaded layout that renders data records to files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    select_autoescape,
)

__all__ = ["FRAGMENTS", "Layout", "PageRenderer"]

FRAGMENTS = ("header.html", "footer.html")
TEMPLATE_SUFFIX = ".html"


class TemplateData(Protocol):
    def template_context(self) -> dict[str, Any]: ...


class Layout:
    """A body template plus its shared fragments, ready to execute.

    Attributes:
        name: Layout name, e.g. ``post``.
        template: Compiled body template.
    """

    def __init__(self, name: str, template: Template):
        self.name = name
        self.template = template

    def render(self, data: TemplateData) -> str:
        """Execute the layout against a data record.

        Args:
            data: Object exposing ``template_context()``.

        Returns:
            Rendered HTML document.

        Raises:
            jinja2.UndefinedError: If the template uses a field the record lacks.
        """
        return self.template.render(**data.template_context())

    def write(self, data: TemplateData, target: Path) -> Path:
        """Render ``data`` and create or overwrite ``target`` with the result."""
        rendered = self.render(data)
        with open(target, "w", encoding="utf-8") as f:
            f.write(rendered)
        return target

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"Layout({self.name!r})"


class PageRenderer:
    """Template rendering engine using Jinja2.

    Templates are looked up in a single directory. HTML autoescaping is on,
    and undefined variables raise instead of rendering as empty strings.

    Attributes:
        template_dir: Directory containing layouts and fragments.
        env: Jinja2 environment.
    """

    def __init__(self, template_dir: Path):
        """Initialize the renderer.

        Args:
            template_dir: Directory with templates.
        """
        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def load_layout(self, name: str) -> Layout:
        """Load a layout and check its fragments.

        The body template and both fragments are parsed here, so a missing
        file or a syntax error surfaces before anything is written.

        Args:
            name: Layout name without extension (``post``, ``index``, ``about``).

        Returns:
            Layout wrapping the compiled body template.

        Raises:
            jinja2.TemplateNotFound: If any of the three files is missing.
            jinja2.TemplateSyntaxError: If any of them fails to parse.
        """
        template = self.env.get_template(f"{name}{TEMPLATE_SUFFIX}")
        for fragment in FRAGMENTS:
            self.env.get_template(fragment)
        return Layout(name, template)

    def render_to_file(self, name: str, data: TemplateData, target: Path) -> Path:
        """Load layout ``name`` and write ``data`` rendered with it to ``target``."""
        return self.load_layout(name).write(data, target)
