"""Theme catalog: palettes for the PPTX writer and CSS for the HTML renderer."""
import re
from enum import Enum
from pathlib import Path
from typing import Dict, List

from .models import Palette

THEMES_DIR = Path(__file__).parent / "themes"


class Theme(Enum):
    """Known theme identifiers."""
    DEFAULT = "default"
    GAIA = "gaia"          # dark, high contrast
    UNCOVER = "uncover"    # light with accent
    BESPOKE = "bespoke"    # modern minimal

    @classmethod
    def from_id(cls, theme_id: str) -> "Theme":
        """Map a theme identifier to a :class:`Theme`; unknown ids give DEFAULT."""
        try:
            return cls(str(theme_id).strip().lower())
        except ValueError:
            return cls.DEFAULT


PALETTES: Dict[Theme, Palette] = {
    Theme.DEFAULT: Palette(background="FFFFFF", title="333333", text="666666", accent="4361EE"),
    Theme.GAIA: Palette(background="101010", title="FFFFFF", text="CCCCCC", accent="3B82F6"),
    Theme.UNCOVER: Palette(background="FFFFFF", title="137CBD", text="333333", accent="137CBD"),
    Theme.BESPOKE: Palette(background="FAFAFA", title="2563EB", text="333333", accent="3B82F6"),
}

AVAILABLE_THEMES = [
    {"id": Theme.DEFAULT.value, "name": "Default"},
    {"id": Theme.GAIA.value, "name": "Gaia"},
    {"id": Theme.UNCOVER.value, "name": "Uncover"},
    {"id": Theme.BESPOKE.value, "name": "Modern minimal"},
]


def resolve_palette(theme_id: str) -> Palette:
    """
    Look up the color palette for *theme_id*.

    Unknown identifiers fall back to the default palette; never raises.
    """
    return PALETTES[Theme.from_id(theme_id)]


# Theme ids double as CSS file stems, so keep them to a safe charset
_THEME_NAME_RE = re.compile(r"[A-Za-z0-9_-]+")


def _stylesheet_path(theme: str) -> Path:
    if not _THEME_NAME_RE.fullmatch(theme):
        raise ValueError(f"Invalid theme name: {theme!r}")
    return THEMES_DIR / f"{theme}.css"


def get_css(theme: str = "default") -> str:
    """
    Return the stylesheet the HTML renderer embeds for *theme*.

    Unlike :func:`resolve_palette` this is strict: the HTML renderer
    decides what to do about a missing stylesheet.

    Raises:
        ValueError: *theme* contains characters outside ``[A-Za-z0-9_-]``
        FileNotFoundError: No ``themes/<theme>.css`` ships with the package
    """
    css_path = _stylesheet_path(theme)
    if not css_path.is_file():
        raise FileNotFoundError(
            f"No stylesheet for theme '{theme}' (have: {', '.join(list_available_themes())})"
        )
    return css_path.read_text(encoding="utf-8")


def list_available_themes() -> List[str]:
    """Sorted ids of the themes with a stylesheet."""
    return sorted(path.stem for path in THEMES_DIR.glob("*.css") if path.is_file())


def validate_theme(theme: str) -> bool:
    """True when :func:`get_css` would succeed for *theme*."""
    try:
        return _stylesheet_path(theme).is_file()
    except ValueError:
        return False


SAMPLE_DECK = """---
marp: true
theme: $THEME$
paginate: true
---

# Sample presentation

---

## Highlights

- First point
- Second point
- Third point

---

## Table example

| Item | Description |
|------|-------------|
| Item 1 | Description 1 |
| Item 2 | Description 2 |

---

# Thank you!
"""


def theme_previews() -> Dict[str, str]:
    """Sample deck markdown for every available theme, keyed by theme id."""
    return {
        theme["id"]: SAMPLE_DECK.replace("$THEME$", theme["id"])
        for theme in AVAILABLE_THEMES
    }
