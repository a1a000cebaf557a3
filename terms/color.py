"""RGBA colours as used by terminal colour themes."""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["RGBA", "parse_color"]

_NAMED_COLORS: dict[str, tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "lime": (0, 255, 0),
    "green": (0, 128, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "cyan": (0, 255, 255),
    "aqua": (0, 255, 255),
    "magenta": (255, 0, 255),
    "fuchsia": (255, 0, 255),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "silver": (192, 192, 192),
    "maroon": (128, 0, 0),
    "olive": (128, 128, 0),
    "navy": (0, 0, 128),
    "purple": (128, 0, 128),
    "teal": (0, 128, 128),
    "orange": (255, 165, 0),
}

_FUNC_RE = re.compile(r"^(rgba?)\s*\((.*)\)$", re.IGNORECASE)


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


@dataclass(frozen=True)
class RGBA:
    """A colour with red, green, blue and alpha channels in the range 0..1."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def brightness(self) -> float:
        """Perceived brightness, weighted 299/587/114 over the colour channels."""
        return (self.red * 299.0 + self.green * 587.0 + self.blue * 114.0) / 1000.0

    def __str__(self) -> str:
        red, green, blue = (int(0.5 + _clamp(c) * 255.0) for c in (self.red, self.green, self.blue))
        if self.alpha > 0.999:
            return f"rgb({red},{green},{blue})"
        return f"rgba({red},{green},{blue},{_clamp(self.alpha):g})"


def _parse_hex(digits: str, text: str) -> RGBA:
    if not re.fullmatch(r"[0-9a-fA-F]+", digits):
        raise ValueError(f"invalid colour: {text!r}")
    if len(digits) in (3, 4):
        channels = [int(d * 2, 16) for d in digits]
    elif len(digits) in (6, 8):
        channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
    else:
        raise ValueError(f"invalid colour: {text!r}")
    red, green, blue, *rest = (c / 255.0 for c in channels)
    return RGBA(red, green, blue, rest[0] if rest else 1.0)


def _parse_channel(part: str, text: str) -> float:
    part = part.strip()
    try:
        if part.endswith("%"):
            return _clamp(float(part[:-1]) / 100.0)
        return _clamp(float(part) / 255.0)
    except ValueError:
        raise ValueError(f"invalid colour: {text!r}") from None


def _parse_alpha(part: str, text: str) -> float:
    part = part.strip()
    try:
        if part.endswith("%"):
            return _clamp(float(part[:-1]) / 100.0)
        return _clamp(float(part))
    except ValueError:
        raise ValueError(f"invalid colour: {text!r}") from None


def parse_color(text: str) -> RGBA:
    """Parse a colour written as a hex code, rgb()/rgba() or a colour name."""
    stripped = text.strip()
    if not stripped:
        raise ValueError("empty colour")
    if stripped.startswith("#"):
        return _parse_hex(stripped[1:], text)

    lowered = stripped.lower()
    if lowered == "transparent":
        return RGBA(0.0, 0.0, 0.0, 0.0)
    if lowered in _NAMED_COLORS:
        red, green, blue = (c / 255.0 for c in _NAMED_COLORS[lowered])
        return RGBA(red, green, blue)

    match = _FUNC_RE.match(stripped)
    if match is None:
        raise ValueError(f"invalid colour: {text!r}")
    func = match.group(1).lower()
    parts = match.group(2).split(",")
    expected = 4 if func == "rgba" else 3
    if len(parts) != expected:
        raise ValueError(f"invalid colour: {text!r}")
    red, green, blue = (_parse_channel(p, text) for p in parts[:3])
    alpha = _parse_alpha(parts[3], text) if func == "rgba" else 1.0
    return RGBA(red, green, blue, alpha)