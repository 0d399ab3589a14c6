"""Site building functionality for Inkpost.

This module contains the core logic for building a static site from source
files. The stages run strictly in order and the first failure aborts the
build:

1. Recreate the output directory and its posts subdirectory.
2. Copy the stylesheet.
3. Load every post (read, split front matter, convert Markdown).
4. Sort posts newest first.
5. Render each post page, then the index page, then the about page.

Key functions:
- build_site: Main function to build the entire site.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import TemplateNotFound, TemplateSyntaxError
from pygments.util import ClassNotFound

from .assets import copy_stylesheet
from .collections import PostCollection
from .config import CONFIG_FILENAME, ConfigError, SiteConfig, load_config
from .content import (
    IndexPage,
    Post,
    StaticPage,
    discover_posts,
    read_post,
    slug_from_path,
)
from .frontmatter import FrontmatterError, parse_metadata, split_frontmatter
from .renderers import MarkdownConverter
from .templates import PageRenderer
from .utils import prepare_output_dir

STAGE_CONFIGURE = "configure"
STAGE_PREPARE = "prepare output"
STAGE_ASSETS = "copy assets"
STAGE_READ = "read post"
STAGE_PARSE = "parse front matter"
STAGE_CONVERT = "convert markdown"
STAGE_RENDER_POSTS = "render posts"
STAGE_RENDER_INDEX = "render index"
STAGE_RENDER_ABOUT = "render about"


class BuildError(Exception):
    """Error during site build with stage and file context.

    Attributes:
        stage: Name of the pipeline stage that failed.
        source_path: Path to the file involved, when one is known.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        stage: str,
        source_path: Path | None,
        message: str,
        original_error: Exception | None = None,
    ):
        self.stage = stage
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        location = f"{source_path}: " if source_path else ""
        super().__init__(f"{stage}: {location}{message}")


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        posts: Posts in index order, newest first.
        output_dir: Directory where the site was built.
        written: Every file written by the build, in write order.
    """

    posts: PostCollection
    output_dir: Path
    written: list[Path] = field(default_factory=list)


def build_site(project_root: Path, config: SiteConfig | None = None) -> BuildResult:
    """Build the entire static site.

    Args:
        project_root: Root directory of the project.
        config: Optional configuration; read from inkpost.yaml when omitted.

    Returns:
        BuildResult describing the posts and the written files.

    Raises:
        BuildError: On the first failing stage. Output written before the
            failure is left in place.
    """
    config_path = None
    try:
        if config is None:
            config_path = project_root / CONFIG_FILENAME
            config = load_config(project_root)
        config.check_paths(project_root)
    except (ConfigError, OSError) as exc:
        raise BuildError(
            STAGE_CONFIGURE, config_path, _format_error_message(exc), exc
        ) from exc
    try:
        converter = MarkdownConverter(config.highlight_style)
    except ClassNotFound as exc:
        raise BuildError(
            STAGE_CONFIGURE,
            None,
            f"Unknown highlight style: {config.highlight_style}",
            exc,
        ) from exc

    output_dir = config.resolve(project_root, "output_dir")
    try:
        posts_output = prepare_output_dir(output_dir)
    except OSError as exc:
        raise BuildError(
            STAGE_PREPARE, output_dir, _format_error_message(exc), exc
        ) from exc

    written: list[Path] = []
    try:
        written.append(copy_stylesheet(config, project_root, output_dir))
    except OSError as exc:
        src = config.resolve(project_root, "static_dir") / config.stylesheet
        raise BuildError(
            STAGE_ASSETS,
            src,
            f"Error copying styles: {_format_error_message(exc)}",
            exc,
        ) from exc

    loaded = _load_posts(config.resolve(project_root, "posts_dir"), converter)
    posts = PostCollection(loaded).sorted()

    renderer = PageRenderer(config.resolve(project_root, "template_dir"))
    written.extend(_render_posts(renderer, posts, posts_output))
    written.append(
        _render(
            renderer,
            "index",
            IndexPage(posts=posts),
            output_dir / "index.html",
            STAGE_RENDER_INDEX,
        )
    )
    written.append(
        _render(
            renderer,
            "about",
            StaticPage(page="about", title=config.about_title),
            output_dir / "about.html",
            STAGE_RENDER_ABOUT,
        )
    )
    return BuildResult(posts=posts, output_dir=output_dir, written=written)


def _load_posts(posts_dir: Path, converter: MarkdownConverter) -> list[Post]:
    """Read, split and convert every post in discovery order.

    Each step is tagged with its own stage so the report names what failed.
    """
    posts: list[Post] = []
    for path in discover_posts(posts_dir):
        slug = slug_from_path(path)
        try:
            stream = read_post(posts_dir, slug)
        except (OSError, ValueError) as exc:
            raise BuildError(
                STAGE_READ, path, _format_error_message(exc), exc
            ) from exc
        try:
            meta, body = split_frontmatter(stream)
            metadata = parse_metadata(meta, slug, path)
        except FrontmatterError as exc:
            raise BuildError(
                STAGE_PARSE, path, _format_error_message(exc), exc
            ) from exc
        try:
            content = converter.convert(body)
        except Exception as exc:
            raise BuildError(
                STAGE_CONVERT, path, _format_error_message(exc), exc
            ) from exc
        posts.append(Post(metadata=metadata, content=content, source=path))
    return posts


def _render_posts(
    renderer: PageRenderer, posts: PostCollection, target_dir: Path
) -> list[Path]:
    """Render each post with a single loaded post layout."""
    layout_path = renderer.template_dir / "post.html"
    try:
        layout = renderer.load_layout("post")
    except Exception as exc:
        raise BuildError(
            STAGE_RENDER_POSTS, layout_path, _format_template_error(exc), exc
        ) from exc
    written = []
    for post in posts:
        try:
            written.append(layout.write(post, target_dir / f"{post.slug}.html"))
        except Exception as exc:
            raise BuildError(
                STAGE_RENDER_POSTS,
                post.source or layout_path,
                _format_template_error(exc),
                exc,
            ) from exc
    return written


def _render(
    renderer: PageRenderer, name: str, data, target: Path, stage: str
) -> Path:
    try:
        return renderer.render_to_file(name, data, target)
    except Exception as exc:
        raise BuildError(
            stage,
            renderer.template_dir / f"{name}.html",
            _format_template_error(exc),
            exc,
        ) from exc


def _format_template_error(exc: Exception) -> str:
    """Describe a template failure, including the line for syntax errors."""
    if isinstance(exc, TemplateSyntaxError):
        where = f" in {exc.name}" if exc.name else ""
        return f"Template syntax error{where} on line {exc.lineno}: {exc.message}"
    if isinstance(exc, TemplateNotFound):
        return f"Template not found: {exc.name}"
    return _format_error_message(exc)


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    error_type = type(exc).__name__
    error_msg = str(exc)

    if error_type == "UndefinedError":
        return f"Undefined variable: {error_msg}"
    if isinstance(exc, (FrontmatterError, ConfigError)):
        return error_msg
    if isinstance(exc, FileNotFoundError):
        return f"File not found: {exc.filename or error_msg}"
    if isinstance(exc, PermissionError):
        return f"Permission denied: {exc.filename or error_msg}"

    return f"{error_type}: {error_msg}"
