"""Post records and source discovery for Inkpost.

This module discovers post sources, reads them, and assembles the records
that templates are rendered against.

Key objects:
- Post: A fully converted post (metadata plus rendered HTML).
- IndexPage: Data for the index layout.
- StaticPage: Data for pages without per-post content, such as the about page.
- discover_posts, read_post: Locate and read post sources.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from markupsafe import Markup

from .collections import PostCollection
from .frontmatter import PostMetadata

POST_SUFFIX = ".md"


@dataclass(frozen=True)
class Post:
    """A post ready for rendering.

    Attributes:
        metadata: Validated front matter.
        content: Rendered HTML body, trusted and never re-escaped.
        page: Page identifier handed to templates.
        source: Path of the Markdown source.
    """

    metadata: PostMetadata
    content: Markup
    page: str = "post"
    source: Path | None = None

    @property
    def slug(self) -> str:
        return self.metadata.slug

    @property
    def url(self) -> str:
        """Link to the post relative to the site root."""
        return f"posts/{self.slug}.html"

    def template_context(self) -> dict[str, Any]:
        return {
            "post": self,
            "metadata": self.metadata,
            "content": self.content,
            "page": self.page,
        }


@dataclass(frozen=True)
class IndexPage:
    """Data for the index layout: every post, newest first."""

    posts: PostCollection
    page: str = "index"

    def template_context(self) -> dict[str, Any]:
        return {"posts": self.posts, "page": self.page}


@dataclass(frozen=True)
class StaticPage:
    """Data for a page that only needs an identifier and a title."""

    page: str
    title: str

    def template_context(self) -> dict[str, Any]:
        return {"page": self.page, "title": self.title}


def discover_posts(posts_dir: Path) -> list[Path]:
    """Find post sources directly inside ``posts_dir``.

    Args:
        posts_dir: Directory holding the posts.

    Returns:
        Paths of ``*.md`` files in sorted order. Subdirectories are not
        searched.
    """
    return sorted(p for p in posts_dir.glob(f"*{POST_SUFFIX}") if p.is_file())


def slug_from_path(path: Path) -> str:
    """Derive a slug by dropping the directory and the ``.md`` suffix."""
    name = path.name
    if name.endswith(POST_SUFFIX):
        name = name[: -len(POST_SUFFIX)]
    return name


def validate_slug(slug: str) -> str:
    """Reject slugs that could escape the posts directory.

    Raises:
        ValueError: If the slug is empty, ``.``/``..`` or holds a separator.
    """
    if slug in ("", ".", "..") or "/" in slug or "\\" in slug:
        raise ValueError(f"Invalid post slug: {slug!r}")
    return slug


def read_post(posts_dir: Path, slug: str) -> io.BytesIO:
    """Read ``<posts_dir>/<slug>.md`` fully into memory.

    Args:
        posts_dir: Directory holding the posts.
        slug: Post identifier.

    Returns:
        Readable byte stream over the file contents.

    Raises:
        OSError: If the file is missing or cannot be read.
        ValueError: If the slug is not a plain filename.
    """
    path = posts_dir / f"{validate_slug(slug)}{POST_SUFFIX}"
    with open(path, "rb") as f:
        return io.BytesIO(f.read())
