"""Terminal colour themes loaded from YAML or JSON files."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .color import RGBA, parse_color

__all__ = ["Theme", "ThemeError", "color_brightness", "theme_from_mapping", "load_theme"]

PALETTE_KEYS = tuple(f"color_{i:02d}" for i in range(1, 17))


class ThemeError(ValueError):
    """A theme file or mapping could not be read."""


def color_brightness(color: RGBA) -> float:
    """Perceived brightness of a colour, from 0 to 1."""
    return color.brightness()


@dataclass(frozen=True)
class Theme:
    """A named colour theme with an optional sixteen-colour palette."""

    name: str
    comment: str | None = None
    foreground: RGBA | None = None
    background: RGBA | None = None
    cursor: RGBA | None = None
    palette: tuple[RGBA, ...] | None = None

    def is_dark(self) -> bool:
        """Whether the theme has a dark background (or a light foreground)."""
        if self.background is not None:
            return color_brightness(self.background) <= 0.5
        if self.foreground is not None:
            return color_brightness(self.foreground) > 0.5
        return True


def _optional_color(data: Mapping[str, Any], key: str) -> RGBA | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ThemeError(f"{key}: expected a colour string, got {value!r}")
    try:
        return parse_color(value)
    except ValueError as err:
        raise ThemeError(f"{key}: {err}") from None


def theme_from_mapping(data: Any) -> Theme:
    """Build a theme from a decoded YAML or JSON document."""
    if not isinstance(data, Mapping):
        raise ThemeError("theme document must be a mapping")
    name = data.get("name")
    if not isinstance(name, str):
        raise ThemeError("theme requires a string 'name'")
    comment = data.get("comment")
    if comment is not None and not isinstance(comment, str):
        raise ThemeError("theme 'comment' must be a string")

    colors = [_optional_color(data, key) for key in PALETTE_KEYS]
    palette = None if any(c is None for c in colors) else tuple(colors)

    return Theme(
        name=name,
        comment=comment,
        foreground=_optional_color(data, "foreground"),
        background=_optional_color(data, "background"),
        cursor=_optional_color(data, "cursor"),
        palette=palette,
    )


def load_theme(path: str | Path) -> Theme:
    """Read a theme from a .yml, .yaml or .json file."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in (".yml", ".yaml", ".json"):
        raise ThemeError(f"unsupported theme file type: {path}")
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as err:
        raise ThemeError(f"Error while reading color theme file {path}: {err}") from err
    try:
        data = json.loads(content) if suffix == ".json" else yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as err:
        raise ThemeError(f"Error while reading color theme file {path}: {err}") from err
    try:
        return theme_from_mapping(data)
    except ThemeError as err:
        raise ThemeError(f"Error while reading color theme file {path}: {err}") from err