"""Project configuration for Inkpost.

Every path used by a build is a fixed convention relative to the project
root. The defaults live on SiteConfig; an optional inkpost.yaml file at the
project root may override individual values.

Key objects:
- SiteConfig: Immutable set of paths and rendering options for one build.
- load_config: Reads inkpost.yaml (if present) on top of the defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "inkpost.yaml"
SOURCE_DIRS = ("posts_dir", "template_dir", "static_dir")


class ConfigError(ValueError):
    """Raised when inkpost.yaml cannot be used as configuration."""


@dataclass(frozen=True)
class SiteConfig:
    """Paths and options for a build.

    Attributes:
        output_dir: Directory that receives the generated site.
        posts_dir: Directory holding the ``*.md`` post sources.
        template_dir: Directory holding the page layouts and fragments.
        static_dir: Directory holding the stylesheet.
        stylesheet: Stylesheet filename, copied to the output root.
        highlight_style: Pygments style used for every code block.
        about_title: Title handed to the about page.
    """

    output_dir: str = "public"
    posts_dir: str = "posts"
    template_dir: str = "template"
    static_dir: str = "static"
    stylesheet: str = "style.css"
    highlight_style: str = "gruvbox-dark"
    about_title: str = "About me"

    def resolve(self, project_root: Path, name: str) -> Path:
        """Return the configured directory ``name`` under ``project_root``."""
        return project_root / getattr(self, name)

    def check_paths(self, project_root: Path) -> None:
        """Make sure the output directory can be wiped without touching sources.

        Raises:
            ConfigError: If ``output_dir`` is the project root or one of its
                parents, or overlaps a source directory.
        """
        root = project_root.resolve()
        output = self.resolve(root, "output_dir").resolve()
        if output == root or output in root.parents:
            raise ConfigError(
                f"'output_dir' ({self.output_dir}) must not contain the project root"
            )
        for name in SOURCE_DIRS:
            source = self.resolve(root, name).resolve()
            if output == source or output in source.parents or source in output.parents:
                raise ConfigError(
                    f"'output_dir' ({self.output_dir}) overlaps "
                    f"'{name}' ({getattr(self, name)})"
                )

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> SiteConfig:
        """Build a config from a mapping, ignoring unknown keys.

        Args:
            values: Raw key/value pairs, typically loaded from YAML.

        Returns:
            SiteConfig with the known keys applied over the defaults.

        Raises:
            ConfigError: If a known key holds something other than a string.
        """
        known = {f.name for f in fields(cls)}
        overrides: dict[str, str] = {}
        for key, value in values.items():
            if key not in known:
                continue
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"'{key}' must be a non-empty string")
            overrides[key] = value
        return replace(cls(), **overrides)


def load_config(project_root: Path) -> SiteConfig:
    """Load site configuration from inkpost.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        SiteConfig with file values applied over the defaults.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    config_path = project_root / CONFIG_FILENAME
    if not config_path.exists():
        return SiteConfig()
    with open(config_path, encoding="utf-8") as f:
        try:
            loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"{config_path}: invalid YAML: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ConfigError(f"{config_path}: expected a mapping at the top level")
    return SiteConfig.from_mapping(loaded)
