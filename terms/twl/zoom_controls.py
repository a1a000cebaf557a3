"""Zoom buttons showing the current zoom level in percent."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

__all__ = ["ZoomControls", "ZOOM_SIGNALS"]

ZOOM_SIGNALS = ("zoom-in", "zoom-out", "zoom-reset", "zoom")


class ZoomControls:
    """Zoom out, reset and zoom in buttons around a percentage label."""

    CSS_NAME = "zoom_controls"

    def __init__(self, value: int = 100) -> None:
        self._handlers: dict[str, list[Callable[..., Any]]] = {name: [] for name in ZOOM_SIGNALS}
        self._value = 0
        self._label = ""
        self.value = value

    @property
    def value(self) -> int:
        """The current zoom, in percent."""
        return self._value

    @value.setter
    def value(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"zoom value must not be negative: {value}")
        self._value = value
        self._label = f"{value}%"

    @property
    def label(self) -> str:
        """The text on the reset button."""
        return self._label

    def connect(self, signal: str, callback: Callable[..., Any]) -> None:
        """Call callback(controls) on zoom-in, zoom-out or zoom-reset; callback(controls, value) on zoom."""
        if signal not in self._handlers:
            raise ValueError(f"unknown signal: {signal!r}")
        self._handlers[signal].append(callback)

    def _emit(self, signal: str, *args: Any) -> None:
        for callback in list(self._handlers[signal]):
            callback(self, *args)

    def zoom_in(self) -> None:
        """Emit zoom-in, as the zoom in button does."""
        self._emit("zoom-in")

    def zoom_out(self) -> None:
        """Emit zoom-out, as the zoom out button does."""
        self._emit("zoom-out")

    def zoom_reset(self) -> None:
        """Emit zoom-reset, as the percentage label button does."""
        self._emit("zoom-reset")