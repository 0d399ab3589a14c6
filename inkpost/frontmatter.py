"""Front matter handling for Inkpost.

A post starts with a metadata block followed by its Markdown body. Two block
styles are understood:

    ---                      +++
    title: Hello             title = "Hello"
    date: 2024-01-01         date = 2024-01-01
    ---                      +++

The first is parsed as YAML, the second as TOML. The body after the closing
delimiter is returned untouched.

Key objects:
- PostMetadata: Validated metadata of a single post.
- split_frontmatter: Separates the metadata block from the body.
- parse_metadata: Turns the raw mapping into PostMetadata.
"""

from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import IO, Any

import yaml

YAML_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<meta>.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)
TOML_FRONTMATTER_RE = re.compile(
    r"\A\+\+\+[ \t]*\r?\n(?P<meta>.*?)^\+\+\+[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)

REQUIRED_FIELDS = ("title", "date")


class FrontmatterError(ValueError):
    """Raised when a post's metadata block is missing or malformed."""


@dataclass(frozen=True)
class PostMetadata:
    """Metadata of a single post.

    Attributes:
        slug: Identifier derived from the source filename.
        title: Human-readable title.
        description: Short summary, may be empty.
        date: Publication date, always timezone-aware.
        language: Language tag such as ``en``, may be empty.
        tags: Tags in authored order, duplicates kept.
    """

    slug: str
    title: str
    description: str
    date: datetime
    language: str
    tags: tuple[str, ...] = ()


def split_frontmatter(source: str | bytes | IO[bytes]) -> tuple[dict[str, Any], str]:
    """Separate the metadata block from the Markdown body.

    Args:
        source: Raw post contents as text, bytes or a readable byte stream.

    Returns:
        Tuple of (metadata mapping, remaining body text).

    Raises:
        FrontmatterError: If the block is absent, unterminated or invalid.
    """
    text = _decode(source)
    if text.startswith("---"):
        return _parse_block(text, YAML_FRONTMATTER_RE, _load_yaml, "---")
    if text.startswith("+++"):
        return _parse_block(text, TOML_FRONTMATTER_RE, _load_toml, "+++")
    raise FrontmatterError("missing front matter block ('---' or '+++')")


def parse_metadata(
    meta: dict[str, Any], slug: str, source: Path | None = None
) -> PostMetadata:
    """Validate a raw metadata mapping and build PostMetadata.

    The ``slug`` argument always wins over a ``slug`` key in the mapping.
    Unknown keys are ignored.

    Args:
        meta: Mapping returned by split_frontmatter.
        slug: Slug derived from the post filename.
        source: Optional source path, only used in error messages.

    Returns:
        PostMetadata instance.

    Raises:
        FrontmatterError: If required fields are missing or have the wrong type.
    """
    where = f" in {source}" if source else ""
    missing = [name for name in REQUIRED_FIELDS if meta.get(name) in (None, "")]
    if missing:
        raise FrontmatterError(
            f"missing required field(s) {', '.join(missing)}{where}"
        )
    return PostMetadata(
        slug=slug,
        title=_text(meta, "title", where),
        description=_text(meta, "description", where),
        date=parse_date(meta["date"]),
        language=_language(meta, where),
        tags=_tags(meta.get("tags"), where),
    )


def parse_date(value: Any) -> datetime:
    """Normalize a front matter date into an aware datetime.

    Plain dates become midnight UTC and naive datetimes are taken as UTC, so
    dates from different posts always compare.

    Args:
        value: A date, datetime or ISO-8601 string.

    Returns:
        Timezone-aware datetime.

    Raises:
        FrontmatterError: If the value cannot be read as a date.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise FrontmatterError(f"invalid date {value!r}") from exc
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    raise FrontmatterError(f"invalid date {value!r}")


def _decode(source: str | bytes | IO[bytes]) -> str:
    if hasattr(source, "read"):
        source = source.read()
    if isinstance(source, bytes):
        try:
            source = source.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FrontmatterError(f"post is not valid UTF-8: {exc}") from exc
    return source.lstrip("\ufeff")


def _parse_block(text, pattern, loader, delimiter) -> tuple[dict[str, Any], str]:
    match = pattern.match(text)
    if not match:
        raise FrontmatterError(
            f"unterminated front matter, expected closing '{delimiter}'"
        )
    meta = loader(match.group("meta"))
    return meta, text[match.end() :]


def _load_yaml(block: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        raise FrontmatterError(f"invalid YAML front matter: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontmatterError("front matter must be a mapping")
    return data


def _load_toml(block: str) -> dict[str, Any]:
    try:
        return tomllib.loads(block)
    except tomllib.TOMLDecodeError as exc:
        raise FrontmatterError(f"invalid TOML front matter: {exc}") from exc


def _text(meta: dict[str, Any], key: str, where: str) -> str:
    value = meta.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise FrontmatterError(f"'{key}' must be a string{where}")
    return value


def _language(meta: dict[str, Any], where: str) -> str:
    # YAML 1.1 reads an unquoted `no` (Norwegian) as false.
    if meta.get("language") is False:
        return "no"
    return _text(meta, "language", where)


def _tags(value: Any, where: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
        raise FrontmatterError(f"'tags' must be a list of strings{where}")
    return tuple(value)
