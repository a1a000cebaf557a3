import pytest

from terms.color import parse_color
from terms.settings import Settings
from terms.theme import Theme, load_theme
from terms.theme_provider import (
    ThemePaletteColorIndex,
    ThemeProvider,
    generate_gtk_theme,
    load_all_color_themes,
    load_color_themes,
)

PALETTE = [f"#{i * 15:02x}{(255 - i * 15):02x}{i * 7:02x}" for i in range(16)]


def write_theme(directory, filename, name, background, foreground, comment=None, palette=True):
    lines = [f"name: {name}", f"background: '{background}'", f"foreground: '{foreground}'"]
    if comment:
        lines.append(f"comment: {comment}")
    if palette:
        lines += [f"color_{i + 1:02d}: '{color}'" for i, color in enumerate(PALETTE)]
    path = directory / filename
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def dirs(tmp_path):
    app = tmp_path / "app"
    user = tmp_path / "user"
    app.mkdir()
    write_theme(app, "light.yml", "Light", "#ffffff", "#000000")
    write_theme(app, "dark.yaml", "Dark", "#000000", "#ffffff")
    return app, user


@pytest.fixture
def settings():
    return Settings(
        {
            "theme-integration": True,
            "theme-light": "Light",
            "theme-dark": "Dark",
            "style-preference": 0,
        }
    )


def test_palette_index_constants():
    assert ThemePaletteColorIndex(9) == ThemePaletteColorIndex.LIGHT_RED
    assert ThemePaletteColorIndex(4) == ThemePaletteColorIndex.BLUE
    assert ThemePaletteColorIndex(0) == ThemePaletteColorIndex.BACKGROUND


def test_load_color_themes_skips_invalid(dirs):
    app, _ = dirs
    (app / "broken.yml").write_text("name: [unclosed\n", encoding="utf-8")
    (app / "notes.txt").write_text("name: Notes\n", encoding="utf-8")
    names = sorted(theme.name for theme in load_color_themes(app))
    assert names == ["Dark", "Light"]


def test_load_color_themes_missing_dir(tmp_path):
    assert load_color_themes(tmp_path / "missing") == []


def test_user_themes_override_app_themes(dirs):
    app, user = dirs
    user.mkdir()
    write_theme(user, "mine.yml", "Light", "#ffffff", "#000000", comment="mine")
    themes = load_all_color_themes(app, user)
    assert set(themes) == {"Light", "Dark"}
    assert themes["Light"].comment == "mine"


def test_provider_creates_user_dir_and_loads(dirs, settings):
    app, user = dirs
    provider = ThemeProvider(settings, app, user, dark=False)
    assert user.is_dir()
    assert set(provider.themes()) == {"Light", "Dark"}
    assert provider.theme("Dark") == load_theme(app / "dark.yaml")
    assert provider.theme("Missing") is None


def test_current_theme_follows_system_dark(dirs, settings):
    app, user = dirs
    provider = ThemeProvider(settings, app, user, dark=False)
    seen = []
    provider.connect("dark", seen.append)
    provider.connect("current-theme", seen.append)
    assert provider.current_theme_name() == "Light"
    provider.set_system_dark(True)
    assert provider.is_dark() is True
    assert provider.current_theme_name() == "Dark"
    assert provider.current_theme().name == "Dark"
    assert seen == ["dark", "current-theme"]
    provider.set_system_dark(True)
    assert seen == ["dark", "current-theme"]


def test_light_css_uses_normal_palette(dirs, settings):
    app, user = dirs
    provider = ThemeProvider(settings, app, user, dark=False)
    red = str(parse_color(PALETTE[ThemePaletteColorIndex.RED]))
    assert provider.css is not None
    assert f"@define-color destructive_color       {red};" in provider.css
    assert str(parse_color("#ffffff")) in provider.css


def test_style_preference_dark_uses_light_palette(dirs, settings):
    app, user = dirs
    provider = ThemeProvider(settings, app, user, dark=False)
    seen = []
    provider.connect("current-theme", seen.append)
    settings.set("style-preference", 2)
    assert provider.is_dark() is True
    assert seen == ["current-theme"]
    light_red = str(parse_color(PALETTE[ThemePaletteColorIndex.LIGHT_RED]))
    assert f"@define-color destructive_color       {light_red};" in provider.css


def test_unsafe_integration_gives_no_css(dirs, settings):
    app, user = dirs
    provider = ThemeProvider(settings, app, user, dark=False)
    settings.set("theme-light", "Dark")
    assert provider.css is None
    assert provider.current_theme_name() == "Dark"


def test_integration_disabled_gives_no_css(dirs, settings):
    app, user = dirs
    provider = ThemeProvider(settings, app, user, dark=False)
    settings.set("theme-integration", False)
    assert provider.css is None
    settings.set("theme-integration", True)
    assert provider.css is not None


def test_theme_light_change_notifies_when_light(dirs, settings):
    app, user = dirs
    provider = ThemeProvider(settings, app, user, dark=False)
    seen = []
    provider.connect("current-theme", seen.append)
    settings.set("theme-dark", "Light")
    assert seen == []
    settings.set("theme-light", "Dark")
    assert seen == ["current-theme"]


def test_connect_unknown_property(dirs, settings):
    app, user = dirs
    provider = ThemeProvider(settings, app, user)
    with pytest.raises(ValueError):
        provider.connect("colour", print)


def test_generate_without_palette_uses_defaults():
    css = generate_gtk_theme(Theme(name="Plain"), dark=True)
    assert "@define-color window_bg_color         rgb(0,0,0);" in css
    assert "@define-color window_fg_color         rgb(255,255,255);" in css
    assert "@define-color accent_color" not in css
    assert css.rstrip().endswith("@define-color warning_bg_color        @warning_color;")


def test_generate_dark_and_light_differ():
    palette = tuple(parse_color(c) for c in PALETTE)
    theme = Theme(name="T", background=parse_color("#000000"), palette=palette)
    dark_css = generate_gtk_theme(theme, dark=True)
    light_css = generate_gtk_theme(theme, dark=False)
    assert f"accent_color            {palette[ThemePaletteColorIndex.LIGHT_BLUE]};" in dark_css
    assert f"accent_color            {palette[ThemePaletteColorIndex.BLUE]};" in light_css
    assert "darker(@window_bg_color)" in dark_css
    assert "darker(@window_bg_color)" not in light_css