"""Utility functions for Inkpost.

Key functions:
    slugify: Convert a title into a post slug.
    prepare_output_dir: Recreate the output directory and its posts folder.
"""

from __future__ import annotations

import re
import shutil
import unicodedata
from pathlib import Path


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated slug.

    Args:
        text: Title or filename stem.

    Returns:
        URL-friendly slug, ``untitled`` when nothing usable remains.

    Examples:
        >>> slugify("Hello, World!")
        'hello-world'
    """
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode()
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", normalized)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "untitled"


def prepare_output_dir(output_dir: Path, subdir: str = "posts") -> Path:
    """Remove ``output_dir`` and recreate it with an empty ``subdir``.

    Errors are not suppressed. A directory that cannot be removed, or a
    ``subdir`` that already exists after the recreation, raises.

    Args:
        output_dir: Directory to recreate.
        subdir: Name of the subdirectory to create inside it.

    Returns:
        Path of the created subdirectory.

    Raises:
        OSError: If removal or creation fails.
    """
    if output_dir.exists():
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / subdir
    target.mkdir()
    return target
