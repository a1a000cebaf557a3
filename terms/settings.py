"""Application and keyboard shortcut settings held in memory with change notification."""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Callable, Mapping
from enum import IntEnum
from typing import Any

__all__ = [
    "StylePreference",
    "ColorScheme",
    "ScrollbackMode",
    "WorkingDirectoryMode",
    "Settings",
    "ShortcutSettings",
    "style_preference_from_int",
    "scrollback_mode_from_int",
    "working_directory_mode_from_int",
    "color_scheme_for",
    "style_preference_for",
]

log = logging.getLogger(__name__)

ChangeCallback = Callable[[str], Any]


class StylePreference(IntEnum):
    """The style the user asked for."""

    SYSTEM = 0
    LIGHT = 1
    DARK = 2


class ColorScheme(IntEnum):
    """The colour scheme requested from the style manager."""

    DEFAULT = 0
    FORCE_LIGHT = 1
    PREFER_LIGHT = 2
    PREFER_DARK = 3
    FORCE_DARK = 4


class ScrollbackMode(IntEnum):
    """How much scrollback a terminal keeps."""

    FIXED_SIZE = 0
    UNLIMITED = 1
    DISABLED = 2


class WorkingDirectoryMode(IntEnum):
    """Where a new terminal starts."""

    PREVIOUS_TERMINAL = 0
    HOME = 1
    CUSTOM = 2


def style_preference_from_int(value: int) -> StylePreference:
    """Map a stored number to a style preference; unknown values mean SYSTEM."""
    return {1: StylePreference.LIGHT, 2: StylePreference.DARK}.get(value, StylePreference.SYSTEM)


def scrollback_mode_from_int(value: int) -> ScrollbackMode:
    """Map a stored number to a scrollback mode; unknown values mean FIXED_SIZE."""
    return {1: ScrollbackMode.UNLIMITED, 2: ScrollbackMode.DISABLED}.get(value, ScrollbackMode.FIXED_SIZE)


def working_directory_mode_from_int(value: int) -> WorkingDirectoryMode:
    """Map a stored number to a working directory mode; unknown values mean PREVIOUS_TERMINAL."""
    return {1: WorkingDirectoryMode.HOME, 2: WorkingDirectoryMode.CUSTOM}.get(
        value, WorkingDirectoryMode.PREVIOUS_TERMINAL
    )


def color_scheme_for(preference: StylePreference) -> ColorScheme:
    """The colour scheme that realises a style preference."""
    if preference == StylePreference.LIGHT:
        return ColorScheme.FORCE_LIGHT
    if preference == StylePreference.DARK:
        return ColorScheme.FORCE_DARK
    return ColorScheme.DEFAULT


def style_preference_for(scheme: ColorScheme) -> StylePreference:
    """The style preference a colour scheme corresponds to."""
    if scheme in (ColorScheme.FORCE_LIGHT, ColorScheme.PREFER_LIGHT):
        return StylePreference.LIGHT
    if scheme in (ColorScheme.FORCE_DARK, ColorScheme.PREFER_DARK):
        return StylePreference.DARK
    return StylePreference.SYSTEM


class _Store:
    """Keyed values with defaults and per-key change callbacks."""

    def __init__(self, defaults: Mapping[str, Any]) -> None:
        self._defaults = {key: copy.deepcopy(value) for key, value in defaults.items()}
        self._values = copy.deepcopy(self._defaults)
        self._handlers: list[tuple[str | None, ChangeCallback]] = []

    def keys(self) -> list[str]:
        return list(self._defaults)

    def _check(self, key: str) -> None:
        if key not in self._defaults:
            raise KeyError(f"no such settings key: {key!r}")

    def get(self, key: str) -> Any:
        self._check(key)
        return copy.deepcopy(self._values[key])

    def set(self, key: str, value: Any) -> None:
        self._check(key)
        if self._values[key] == value:
            return
        self._values[key] = copy.deepcopy(value)
        for wanted, callback in list(self._handlers):
            if wanted is None or wanted == key:
                callback(key)

    def reset(self, key: str) -> None:
        self._check(key)
        self.set(key, self._defaults[key])

    def connect(self, key: str | None, callback: ChangeCallback) -> None:
        if key is not None:
            self._check(key)
        self._handlers.append((key, callback))


_MODIFIERS = {
    "shift": "Shift",
    "shft": "Shift",
    "control": "Ctrl",
    "ctrl": "Ctrl",
    "ctl": "Ctrl",
    "primary": "Ctrl",
    "alt": "Alt",
    "mod1": "Alt",
    "super": "Super",
    "hyper": "Hyper",
    "meta": "Meta",
}
_MODIFIER_ORDER = ("Shift", "Ctrl", "Alt", "Super", "Hyper", "Meta")
_KEY_LABELS = {
    "plus": "+",
    "minus": "-",
    "equal": "=",
    "comma": ",",
    "period": ".",
    "slash": "/",
    "backslash": "\\",
    "space": "Space",
}
_ACCEL_RE = re.compile(r"((?:<[^<>]+>)*)([A-Za-z0-9_]+)")


def _accel_label(accel: str) -> str | None:
    match = _ACCEL_RE.fullmatch(accel.strip())
    if match is None:
        return None
    modifiers = set()
    for name in re.findall(r"<([^<>]+)>", match.group(1)):
        modifier = _MODIFIERS.get(name.lower())
        if modifier is None:
            return None
        modifiers.add(modifier)
    key = match.group(2)
    if key in _KEY_LABELS:
        key_label = _KEY_LABELS[key]
    elif len(key) == 1:
        key_label = key.upper()
    else:
        key_label = key.replace("_", " ")
    return "+".join([m for m in _MODIFIER_ORDER if m in modifiers] + [key_label])


class ShortcutSettings:
    """Keyboard accelerators per action, keyed as '<group>-<action>'."""

    def __init__(self, defaults: Mapping[str, list[str]] | None = None) -> None:
        self._store = _Store({key: list(accels) for key, accels in (defaults or {}).items()})

    def reset(self, key: str) -> None:
        """Restore the default accelerators of one key."""
        self._store.reset(key)

    def reset_all(self) -> None:
        """Restore the default accelerators of every key."""
        for key in self._store.keys():
            self._store.reset(key)

    def action(self, key: str) -> str:
        """The action name for a settings key."""
        return key.replace("-", ".", 1)

    def key(self, action: str) -> str:
        """The settings key for an action name."""
        return action.replace(".", "-", 1)

    def keys(self) -> list[str]:
        """All shortcut keys."""
        return self._store.keys()

    def actions(self) -> list[str]:
        """All action names."""
        return [self.action(key) for key in self.keys()]

    def accels(self, key: str) -> list[str]:
        """The accelerators bound to a key."""
        return list(self._store.get(key))

    def entry(self, key: str) -> tuple[str, list[str]]:
        """The action name and accelerators of a key."""
        return self.action(key), self.accels(key)

    def entries(self) -> dict[str, list[str]]:
        """Every action mapped to its accelerators."""
        return dict(self.entry(key) for key in self.keys())

    def accel_in_use(self, accel: str) -> str | None:
        """The key that already uses an accelerator, if any."""
        return next((key for key in self.keys() if accel in self.accels(key)), None)

    def add_accel(self, key: str, accel: str) -> None:
        """Bind one more accelerator to a key."""
        log.info("Add accel %s for key %s", accel, key)
        self._store.set(key, [*self.accels(key), accel])

    def remove_accel(self, accel: str) -> None:
        """Unbind an accelerator from every key that uses it."""
        for key in self.keys():
            accels = self.accels(key)
            if accel in accels:
                self._store.set(key, [a for a in accels if a != accel])

    def accel_as_label(self, accel: str) -> str:
        """A human readable label for an accelerator."""
        label = _accel_label(accel)
        return "invalid shortcut" if label is None else label


class Settings:
    """Application settings with defaults, change callbacks and shortcut settings."""

    def __init__(
        self,
        defaults: Mapping[str, Any] | None = None,
        shortcuts: ShortcutSettings | Mapping[str, list[str]] | None = None,
    ) -> None:
        self._store = _Store(defaults or {})
        if isinstance(shortcuts, ShortcutSettings):
            self._shortcuts = shortcuts
        else:
            self._shortcuts = ShortcutSettings(shortcuts)

    def get(self, key: str) -> Any:
        """The current value of a key; KeyError if the key is unknown."""
        return self._store.get(key)

    def set(self, key: str, value: Any) -> None:
        """Change a key, calling its callbacks if the value differs."""
        self._store.set(key, value)

    def reset(self, key: str) -> None:
        """Restore a key to its default."""
        self._store.reset(key)

    def connect(self, key: str | None, callback: ChangeCallback) -> None:
        """Call callback(key) when the key (or any key, for None) changes."""
        self._store.connect(key, callback)

    def shell_command(self) -> str | None:
        """The custom shell command, if one is enabled and not empty."""
        command = self.get("custom-shell-command")
        if self.get("use-custom-command") and command:
            return command
        return None

    def reset_all(self) -> None:
        """Restore every key and every shortcut to its default."""
        for key in self._store.keys():
            self._store.reset(key)
        self._shortcuts.reset_all()

    def shortcuts(self) -> ShortcutSettings:
        """The keyboard shortcut settings."""
        return self._shortcuts