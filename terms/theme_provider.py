"""Loads colour themes and derives the application stylesheet from the active one."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from enum import IntEnum
from pathlib import Path
from typing import Any

from .color import RGBA
from .settings import (
    ColorScheme,
    Settings,
    color_scheme_for,
    style_preference_from_int,
)
from .theme import Theme, ThemeError, load_theme

__all__ = [
    "ThemePaletteColorIndex",
    "ThemeProvider",
    "user_themes_dir",
    "app_themes_dir",
    "load_color_themes",
    "load_all_color_themes",
    "generate_gtk_theme",
]

log = logging.getLogger(__name__)

_PROPERTIES = ("dark", "current-theme")


class ThemePaletteColorIndex(IntEnum):
    """Positions of the named colours in a sixteen-colour palette."""

    BACKGROUND = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    PURPLE = 5
    CYAN = 6
    FOREGROUND = 7
    LIGHT_BACKGROUND = 8
    LIGHT_RED = 9
    LIGHT_GREEN = 10
    LIGHT_YELLOW = 11
    LIGHT_BLUE = 12
    LIGHT_PURPLE = 13
    LIGHT_CYAN = 14
    LIGHT_FOREGROUND = 15


def user_themes_dir() -> Path:
    """The directory holding the user's own themes."""
    data_home = os.environ.get("XDG_DATA_HOME", "")
    base = Path(data_home) if os.path.isabs(data_home) else Path.home() / ".local" / "share"
    return base / "terms" / "themes"


def app_themes_dir() -> Path:
    """The directory holding the themes shipped with the application."""
    return Path(sys.prefix) / "share" / "terms" / "themes"


def _is_valid_theme_file(path: Path) -> bool:
    return path.is_file() and path.suffix in (".yml", ".yaml")


def load_color_themes(themes_dir: str | Path) -> list[Theme]:
    """Load every readable YAML theme in a directory; bad files are logged and skipped."""
    themes_dir = Path(themes_dir)
    if not themes_dir.exists():
        return []
    try:
        entries = sorted(themes_dir.iterdir())
    except OSError as err:
        log.error("Error reading directory: %s", err)
        return []
    themes = []
    for entry in entries:
        if not _is_valid_theme_file(entry):
            continue
        try:
            themes.append(load_theme(entry))
        except ThemeError as err:
            log.error("%s", err)
    return themes


def load_all_color_themes(app_dir: str | Path, user_dir: str | Path) -> dict[str, Theme]:
    """Themes by name; a user theme replaces an application theme of the same name."""
    return {theme.name: theme for theme in [*load_color_themes(app_dir), *load_color_themes(user_dir)]}


def generate_gtk_theme(theme: Theme, dark: bool) -> str:
    """A stylesheet that recolours the application to match a terminal theme."""
    background = theme.background if theme.background is not None else RGBA(0.0, 0.0, 0.0, 255.0)
    foreground = theme.foreground if theme.foreground is not None else RGBA(255.0, 255.0, 255.0, 255.0)
    parts = [
        f"""
@define-color window_bg_color         {background};
@define-color window_fg_color         {foreground};

@define-color card_fg_color           @window_fg_color;
@define-color headerbar_fg_color      @window_fg_color;
@define-color headerbar_border_color  @window_fg_color;
@define-color popover_fg_color        @window_fg_color;
@define-color dialog_fg_color         @window_fg_color;
@define-color dark_fill_bg_color      @headerbar_bg_color;
@define-color view_bg_color           @card_bg_color;
@define-color view_fg_color           @window_fg_color;

/* @define-color borders                 mix(@window_fg_color, @window_bg_color, 0.8); */
"""
    ]

    palette = theme.palette
    if palette is not None:
        index = ThemePaletteColorIndex
        if dark:
            surfaces = """
@define-color headerbar_bg_color    darker(@window_bg_color);
@define-color popover_bg_color      mix(@window_bg_color, white, 0.07);
@define-color dialog_bg_color       mix(@window_bg_color, white, 0.07);
@define-color card_bg_color         alpha(white, .08);
@define-color view_bg_color         darker(@window_bg_color);
"""
            destructive = palette[index.LIGHT_RED]
            success = palette[index.LIGHT_GREEN]
            accent = palette[index.LIGHT_BLUE]
            warning = palette[index.LIGHT_YELLOW]
            ssh_context = palette[index.LIGHT_PURPLE]
        else:
            surfaces = """
@define-color headerbar_bg_color    mix(@window_bg_color, @window_fg_color, .1);
@define-color popover_bg_color      mix(@window_bg_color, white, .1);
@define-color dialog_bg_color       @window_bg_color;
@define-color card_bg_color         alpha(white, .6);
"""
            destructive = palette[index.RED]
            success = palette[index.GREEN]
            accent = palette[index.BLUE]
            warning = palette[index.YELLOW]
            ssh_context = palette[index.PURPLE]
        parts.append(surfaces)
        parts.append(
            f"""
@define-color accent_color            {accent};
@define-color accent_bg_color         {accent};
@define-color accent_fg_color         white;
@define-color destructive_color       {destructive};
@define-color success_color           {success};
@define-color warning_color           {warning};

@define-color root_context_color    mix(@window_bg_color, {destructive}, 0.4);
@define-color ssh_context_color     mix(@window_bg_color, {ssh_context}, 0.6);
"""
        )

    parts.append(
        """
@define-color error_color             @destructive_color;
@define-color destructive_bg_color    @destructive_color;
@define-color success_bg_color        @success_color;
@define-color warning_bg_color        @warning_color;
"""
    )
    return "".join(parts)


def _ensure_dir_exists(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        log.error("Error creating directory: %s", err)


class ThemeProvider:
    """Tracks the light/dark style and the stylesheet for the selected theme."""

    def __init__(
        self,
        settings: Settings,
        app_dir: str | Path | None = None,
        user_dir: str | Path | None = None,
        dark: bool = False,
    ) -> None:
        self._settings = settings
        self._app_dir = Path(app_dir) if app_dir is not None else app_themes_dir()
        self._user_dir = Path(user_dir) if user_dir is not None else user_themes_dir()
        self._system_dark = dark
        self._color_scheme = ColorScheme.DEFAULT
        self._handlers: list[tuple[str, Callable[[str], Any]]] = []
        self.css: str | None = None

        _ensure_dir_exists(self._user_dir)
        self._themes = load_all_color_themes(self._app_dir, self._user_dir)

        settings.connect("theme-integration", lambda _key: self.apply_theming())
        settings.connect("theme-light", self._on_theme_light_changed)
        settings.connect("theme-dark", self._on_theme_dark_changed)
        settings.connect("style-preference", lambda _key: self.apply_theming())

        self.apply_theming()

    def themes(self) -> dict[str, Theme]:
        """All loaded themes by name."""
        return dict(self._themes)

    def theme(self, name: str) -> Theme | None:
        """The theme of that name, if loaded."""
        return self._themes.get(name)

    def is_dark(self) -> bool:
        """Whether the application currently uses the dark style."""
        if self._color_scheme == ColorScheme.FORCE_DARK:
            return True
        if self._color_scheme == ColorScheme.FORCE_LIGHT:
            return False
        return self._system_dark

    def set_system_dark(self, dark: bool) -> None:
        """Record the system's dark-style preference."""
        was_dark = self.is_dark()
        self._system_dark = dark
        if was_dark != self.is_dark():
            self._notify("dark")
            self._notify("current-theme")

    def current_theme_name(self) -> str:
        """The name of the theme chosen for the current style."""
        return self._settings.get("theme-dark" if self.is_dark() else "theme-light")

    def current_theme(self) -> Theme | None:
        """The theme chosen for the current style, if it is loaded."""
        return self._themes.get(self.current_theme_name())

    def apply_theming(self) -> None:
        """Apply the style preference and rebuild the stylesheet."""
        was_dark = self.is_dark()
        try:
            preference = style_preference_from_int(int(self._settings.get("style-preference")))
            log.info("Settings style preference: %s", preference.name)
            self._color_scheme = color_scheme_for(preference)

            theme = self.current_theme()
            log.info("Request to apply theme: %r", theme)
            if theme is None:
                return

            integration = bool(self._settings.get("theme-integration"))
            if integration and self.is_dark() != theme.is_dark():
                log.info("It is not safe to enable theme integration for this color scheme")
                self.css = None
            elif integration:
                log.info("Applying theme: %s", theme.name)
                self.css = generate_gtk_theme(theme, self.is_dark())
            else:
                self.css = None
        finally:
            if was_dark != self.is_dark():
                self._notify("dark")
                self._notify("current-theme")

    def connect(self, prop: str, callback: Callable[[str], Any]) -> None:
        """Call callback(prop) when 'dark' or 'current-theme' changes."""
        if prop not in _PROPERTIES:
            raise ValueError(f"unknown property: {prop!r}")
        self._handlers.append((prop, callback))

    def _notify(self, prop: str) -> None:
        for wanted, callback in list(self._handlers):
            if wanted == prop:
                callback(prop)

    def _on_theme_light_changed(self, _key: str) -> None:
        self.apply_theming()
        if not self.is_dark():
            self._notify("current-theme")

    def _on_theme_dark_changed(self, _key: str) -> None:
        self.apply_theming()
        if self.is_dark():
            self._notify("current-theme")