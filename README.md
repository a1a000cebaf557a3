# terms

The toolkit-free core of a terminal emulator: colour themes and the
stylesheet derived from them, settings and keyboard shortcuts, and a model of
a window split into panels with keyboard focus navigation.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `terms.color`: the frozen `RGBA` dataclass (channels from 0 to 1, with
  `brightness()`) and `parse_color`, which reads `#rgb`, `#rgba`, `#rrggbb`,
  `#rrggbbaa`, `rgb(...)`, `rgba(...)`, `transparent` and a few colour names.
  It raises `ValueError` on anything else.
- `terms.theme`: the `Theme` dataclass (name, comment, foreground, background,
  cursor and an optional 16-colour palette), `theme_from_mapping`, and
  `load_theme` for `.yml`, `.yaml` and `.json` files. The palette is set only
  when all of `color_01` to `color_16` are present. `Theme.is_dark()` judges by
  the background, then by the foreground, and is `True` when neither is set.
  Errors are raised as `ThemeError`.
- `terms.theme_provider`: `ThemeProvider` loads the YAML themes from an
  application and a user directory. A user theme replaces an application theme
  with the same name. The provider picks the current theme from the
  `theme-light` or `theme-dark` setting and keeps the stylesheet built by
  `generate_gtk_theme` in its `css` attribute. `css` is `None` when theme
  integration is off, or when the theme's darkness does not match the style.
  The provider also exports `ThemePaletteColorIndex`, `user_themes_dir`,
  `app_themes_dir`, `load_color_themes` and `load_all_color_themes`.
- `terms.settings`: `Settings` and `ShortcutSettings` are in-memory stores.
  Each key has a default, and `get`, `set`, `reset` and `reset_all` act on the
  values. `connect(key, callback)` registers a change callback. The module also
  defines the enums `StylePreference`, `ColorScheme`, `ScrollbackMode` and
  `WorkingDirectoryMode`, with functions that convert to and from them.
- `terms.envmap`: `EnvMap`, a mutable mapping of environment variables.
  `to_dict()` takes its contents and leaves it empty.
- `terms.pcre2`: `PCRE2Flags`, an `IntFlag` of PCRE2 compile options.
- `terms.twl.widget`: `Widget`, `Bin`, `Rect`, and the enums `Orientation`,
  `DirectionType`, `TextDirection` and `Propagation`. It covers a widget tree
  with allocation, bounds, expand propagation and focus.
- `terms.twl.focus`: `focus_sort` and `move_focus`, which provide tab and
  directional focus navigation among a widget's children.
- `terms.twl.paned`: `Paned`, a two-pane container with `replace` and
  `sibling`, and `make_twl_paned`.
- `terms.twl.panel`: `Panel`, a child under a header that can be hidden.
  `PanelHeader` holds the title, and `FadingLabel` is the title label.
- `terms.twl.panel_grid`: `PanelGrid` splits the selected panel, closes panels
  and lets the sibling take the freed space.
- `terms.twl.pack_box`: `PackBox`, with start, centre and end regions.
- `terms.twl.style_switcher`: `StyleSwitcher`, a system/light/dark selector.
- `terms.twl.zoom_controls`: `ZoomControls`, which emits `zoom-in`,
  `zoom-out` and `zoom-reset` and shows the zoom as a percentage label.

## Examples

```python
from terms.theme import load_theme

theme = load_theme("themes/solarized-dark.yaml")
print(theme.name, theme.is_dark())
```

```python
from terms.settings import Settings

settings = Settings(
    defaults={"use-custom-command": True, "custom-shell-command": "/bin/zsh"},
    shortcuts={"win-new-tab": ["<Ctrl><Shift>t"]},
)
assert settings.shell_command() == "/bin/zsh"

shortcuts = settings.shortcuts()
assert shortcuts.entries() == {"win.new-tab": ["<Ctrl><Shift>t"]}
assert shortcuts.accel_in_use("<Ctrl><Shift>t") == "win-new-tab"
assert shortcuts.accel_as_label("<Ctrl><Shift>t") == "Shift+Ctrl+T"
```

`ThemeProvider` needs settings that define `theme-integration`,
`theme-light`, `theme-dark` and `style-preference`:

```python
from terms.settings import Settings
from terms.theme_provider import ThemeProvider

settings = Settings(defaults={
    "theme-integration": True,
    "theme-light": "Light",
    "theme-dark": "Dark",
    "style-preference": 0,
})
provider = ThemeProvider(settings, app_dir="themes", user_dir="my-themes")
print(provider.current_theme_name(), provider.css is not None)
```

```python
from terms.twl.panel_grid import PanelGrid
from terms.twl.widget import Orientation, Widget

grid = PanelGrid()
first = grid.set_initial_child(Widget())
second = grid.split(Widget(), Orientation.HORIZONTAL)
assert len(grid.panels()) == 2
grid.close_panel(second)
assert grid.panels() == [first]
```

## What it does not do

This package is a library, not an application. It has no command to start.
It draws no windows and does not run a terminal or a shell. Settings and
shortcuts are kept in memory only and are not saved anywhere. The widgets in
`terms.twl` model layout, focus and signals. They do not render anything, and
`FadingLabel` measures text with a fixed width for each character.