"""Slide Deck – top-level package

Converts a Markdown deck into themed HTML, PDF or PPTX slides. Exposes the
public API **and** sets up a minimal logging configuration so that every
sub-module can call

```python
import logging
logger = logging.getLogger(__name__)
```

and honour a single environment variable `SLIDEDECK_LOG_LEVEL`.
"""

from __future__ import annotations

import logging
import os

# ------------------------------------------------------------------
# Default logging – honour env var, otherwise INFO.
# ------------------------------------------------------------------
LOG_LEVEL = os.getenv("SLIDEDECK_LOG_LEVEL", "INFO").upper()
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

# Public API re-exports ------------------------------------------------
from .models import DEFAULT_CANVAS, Deck, Palette, Rect, Size, SlideModel, Table  # noqa: E402
from .front_matter import normalize, read_directives  # noqa: E402
from .splitter import split_slides  # noqa: E402
from .extractor import ContentExtractor, extract  # noqa: E402
from .layout_engine import LayoutEngine, LayoutMode, assign_layout  # noqa: E402
from .theme_loader import Theme, resolve_palette  # noqa: E402
from .deck import EmptyPresentationError, assemble, build_deck  # noqa: E402
from .generator import DeckGenerator  # noqa: E402

__all__ = [
    "DEFAULT_CANVAS",
    "Deck",
    "Palette",
    "Rect",
    "Size",
    "SlideModel",
    "Table",
    "normalize",
    "read_directives",
    "split_slides",
    "ContentExtractor",
    "extract",
    "LayoutEngine",
    "LayoutMode",
    "assign_layout",
    "Theme",
    "resolve_palette",
    "EmptyPresentationError",
    "assemble",
    "build_deck",
    "DeckGenerator",
]
