"""Static asset copying for Inkpost.

Assets are copied verbatim; there is no bundling or minification.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from .config import SiteConfig


def copy_file(src: Path, dest: Path) -> Path:
    """Copy ``src`` to ``dest`` byte for byte.

    Args:
        src: Source file.
        dest: Destination file, created or overwritten.

    Returns:
        The destination path.

    Raises:
        OSError: If the source cannot be read or the destination written.
            A failed copy may leave a truncated destination behind.
    """
    with open(src, "rb") as source, open(dest, "wb") as target:
        shutil.copyfileobj(source, target)
    return dest


def copy_stylesheet(config: SiteConfig, project_root: Path, output_dir: Path) -> Path:
    """Copy the configured stylesheet into the output root."""
    src = config.resolve(project_root, "static_dir") / config.stylesheet
    return copy_file(src, output_dir / config.stylesheet)
