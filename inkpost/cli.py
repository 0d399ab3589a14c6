"""Command-line interface for Inkpost.

This module defines the CLI commands using Click framework.

Commands:
- new: Scaffold a new Inkpost project.
- build: Build the site into the output directory.
- post: Create a new post with front matter, prompting for missing values.
"""

from __future__ import annotations

import shutil
from datetime import datetime, timezone
from pathlib import Path

import click
import questionary
import yaml

from . import __version__
from .config import ConfigError, load_config
from .content import POST_SUFFIX
from .utils import slugify

# Path to the starter project shipped with the package
_SCAFFOLD_DIR = Path(__file__).parent / "scaffold"


@click.group()
@click.version_option(version=__version__, prog_name="inkpost")
def cli():
    """Inkpost static blog generator."""


@cli.command()
@click.argument("name")
def new(name: str):
    """Scaffold a new Inkpost project."""
    target = Path(name).resolve()
    if target.exists() and any(target.iterdir()):
        raise click.ClickException(
            f"Refusing to initialize into non-empty directory: {target}"
        )
    _scaffold(target)
    click.echo(f"New Inkpost site created at {target}")


@cli.command()
def build():
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import BuildError, build_site

    try:
        result = build_site(project_root)
    except BuildError as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  Stage: {exc.stage}", fg="yellow"), err=True)
        if exc.source_path is not None:
            rel_path = _display_path(exc.source_path, project_root)
            click.echo(click.style(f"  File: {rel_path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    click.echo(f"Built {len(result.posts)} posts into {result.output_dir}")


@cli.command()
@click.argument("title", required=False)
def post(title: str | None):
    """Create a new post with front matter."""
    project_root = Path.cwd()
    try:
        config = load_config(project_root)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    posts_dir = config.resolve(project_root, "posts_dir")

    if not title:
        title = questionary.text(
            "Title:",
            validate=lambda x: len(x.strip()) > 0 or "Title cannot be empty",
            style=_questionary_style(),
        ).ask()
        if title is None:
            raise click.Abort()
    title = title.strip()

    slug = slugify(title)
    target_path = posts_dir / f"{slug}{POST_SUFFIX}"
    if target_path.exists():
        rel_path = _display_path(target_path, project_root)
        raise click.ClickException(
            f"A post with slug '{slug}' already exists: {rel_path}"
        )

    description = questionary.text(
        "Description (optional):", style=_questionary_style()
    ).ask()
    if description is None:
        raise click.Abort()

    tags = questionary.text(
        "Tags (comma separated, optional):", style=_questionary_style()
    ).ask()
    if tags is None:
        raise click.Abort()

    posts_dir.mkdir(parents=True, exist_ok=True)
    source = render_post_source(title, description.strip(), _split_tags(tags))
    target_path.write_text(source, encoding="utf-8")
    click.echo(f"Created {_display_path(target_path, project_root)}")


def render_post_source(
    title: str,
    description: str = "",
    tags: list[str] | None = None,
    date: datetime | None = None,
    language: str = "en",
) -> str:
    """Return the source text of a new post: YAML front matter and a heading."""
    meta = {
        "title": title,
        "description": description,
        "date": (date or datetime.now(timezone.utc)).replace(microsecond=0).isoformat(),
        "language": language,
        "tags": tags or [],
    }
    header = yaml.safe_dump(meta, sort_keys=False, allow_unicode=True)
    return f"---\n{header}---\n\n# {title}\n\n"


def _split_tags(raw: str) -> list[str]:
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def _display_path(path: Path, project_root: Path) -> Path:
    try:
        return path.relative_to(project_root)
    except ValueError:
        return path


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()


def _scaffold(root: Path) -> None:
    """Copy the starter project into ``root``.

    Args:
        root: Root directory for the new project.
    """
    for src_path in _SCAFFOLD_DIR.rglob("*"):
        if src_path.is_dir():
            continue
        rel_path = src_path.relative_to(_SCAFFOLD_DIR)
        dest_path = root / rel_path
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_path, dest_path)
