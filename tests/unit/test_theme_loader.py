"""Test theme loader functionality."""

import re

import pytest

from slide_deck.theme_loader import (
    AVAILABLE_THEMES,
    PALETTES,
    Theme,
    get_css,
    list_available_themes,
    resolve_palette,
    theme_previews,
    validate_theme,
)


def test_palette_fallback():
    assert resolve_palette("nonexistent-theme") == resolve_palette("default")


def test_known_palettes():
    assert resolve_palette("gaia").background == "101010"
    assert resolve_palette("uncover").title == "137CBD"
    assert resolve_palette("bespoke").background == "FAFAFA"
    assert resolve_palette("GAIA") == resolve_palette("gaia")


def test_every_theme_has_a_palette():
    assert set(PALETTES) == set(Theme)


@pytest.mark.parametrize("theme", list(Theme))
def test_palette_colors_are_hex(theme):
    palette = PALETTES[theme]
    for role in ("background", "title", "text", "accent"):
        assert re.fullmatch(r"[0-9A-F]{6}", getattr(palette, role))


def test_theme_from_id():
    assert Theme.from_id("uncover") is Theme.UNCOVER
    assert Theme.from_id(" Bespoke ") is Theme.BESPOKE
    assert Theme.from_id("unknown") is Theme.DEFAULT


def test_get_css_default():
    """Test that default theme loads and returns CSS content."""
    css = get_css("default")

    assert isinstance(css, str)
    assert "section" in css
    assert "data-marpit-pagination" in css


def test_get_css_invalid_theme():
    """Test that invalid theme names raise appropriate errors."""
    with pytest.raises(FileNotFoundError):
        get_css("nonexistent")

    # Invalid characters (path traversal attempt)
    with pytest.raises(ValueError):
        get_css("../evil")


def test_list_available_themes():
    themes = list_available_themes()

    assert themes == sorted(theme["id"] for theme in AVAILABLE_THEMES)


def test_validate_theme():
    assert validate_theme("default") is True
    assert validate_theme("bespoke") is True
    assert validate_theme("nonexistent") is False
    assert validate_theme("../evil") is False


def test_theme_previews():
    previews = theme_previews()

    assert set(previews) == {theme["id"] for theme in AVAILABLE_THEMES}
    assert "theme: gaia\n" in previews["gaia"]
    assert "$THEME$" not in previews["default"]
