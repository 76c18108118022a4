"""
Deck assembly: fold laid-out slide models and a palette into a :class:`Deck`.
"""
import dataclasses
import logging
from pathlib import Path
from typing import Iterable, Optional

from .extractor import ContentExtractor
from .front_matter import normalize
from .layout_engine import LayoutEngine, LayoutMode
from .models import DEFAULT_CANVAS, Deck, Size, SlideModel
from .splitter import split_slides
from .theme_loader import resolve_palette

logger = logging.getLogger(__name__)


class EmptyPresentationError(ValueError):
    """Raised when a deck would contain no slides."""


def assemble(slides: Iterable[SlideModel], theme_id: str, canvas: Size = DEFAULT_CANVAS) -> Deck:
    """
    Build a deck from laid-out slide models.

    Args:
        slides: Slide models in presentation order
        theme_id: Theme identifier; unknown ids use the default palette
        canvas: Canvas the slides were laid out on

    Returns:
        Deck whose slides carry the total slide count

    Raises:
        EmptyPresentationError: If *slides* is empty
    """
    slides = list(slides)
    if not slides:
        raise EmptyPresentationError("Presentation has no slides")

    total = len(slides)
    palette = resolve_palette(theme_id)
    stamped = tuple(dataclasses.replace(slide, total=total) for slide in slides)
    return Deck(slides=stamped, theme=theme_id, palette=palette, canvas=canvas)


def build_deck(
    markdown: str,
    theme: str = "default",
    canvas: Size = DEFAULT_CANVAS,
    mode: LayoutMode = LayoutMode.STACK,
    base_dir: Optional[Path] = None,
) -> Deck:
    """
    Run the full pipeline: normalize, split, extract, lay out, assemble.

    Raises:
        EmptyPresentationError: If the document contains no slides
    """
    normalized = normalize(markdown, theme)
    extractor = ContentExtractor(base_dir=base_dir)
    engine = LayoutEngine(canvas=canvas, mode=mode)

    slides = [
        engine.assign(extractor.extract(text, index=index))
        for index, text in enumerate(split_slides(normalized))
    ]
    logger.debug("Built %d slide models (theme=%s, layout=%s)", len(slides), theme, engine.mode.value)
    return assemble(slides, theme, canvas=canvas)
