"""A three-way switch between the system, light and dark styles."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

__all__ = ["StyleSwitcher", "STYLE_PREFERENCES"]

log = logging.getLogger(__name__)

STYLE_PREFERENCES = ("system", "light", "dark")

PreferenceCallback = Callable[[str], Any]


class StyleSwitcher:
    """Three mutually exclusive selectors that together name a style preference."""

    CSS_NAME = "style_switcher"

    def __init__(self, preference: str = "system") -> None:
        self._active = {name: False for name in STYLE_PREFERENCES}
        self._preference = "system"
        self._handlers: list[PreferenceCallback] = []
        self.preference = preference

    @property
    def preference(self) -> str:
        """The selected style: 'system', 'light' or 'dark'."""
        return self._preference

    @preference.setter
    def preference(self, preference: str) -> None:
        if preference not in STYLE_PREFERENCES:
            log.warning("Invalid style preference: %r", preference)
            return
        for name in STYLE_PREFERENCES:
            self._active[name] = name == preference
        self._selection_changed()

    @property
    def selectors(self) -> dict[str, bool]:
        """Each selector's name mapped to whether it is active."""
        return dict(self._active)

    def on_selector_toggled(self, name: str, active: bool) -> None:
        """Handle a selector being switched on or off by the user."""
        if name not in self._active:
            raise ValueError(f"unknown style selector: {name!r}")
        self._active[name] = active
        if active:
            for other in STYLE_PREFERENCES:
                if other != name:
                    self._active[other] = False
        self._selection_changed()

    def connect(self, callback: PreferenceCallback) -> None:
        """Call callback(preference) whenever the selection changes."""
        self._handlers.append(callback)

    def _selection_changed(self) -> None:
        chosen = next((name for name in STYLE_PREFERENCES if self._active[name]), None)
        if chosen is not None:
            self._preference = chosen
        for callback in list(self._handlers):
            callback(self._preference)