"""
Slide splitter: partition a deck document into raw per-slide markdown.
"""
from typing import List

from .front_matter import normalize_newlines, strip_front_matter

SLIDE_SEPARATOR = "---"


def _is_separator(line: str) -> bool:
    return line.strip() == SLIDE_SEPARATOR


def split_slides(markdown: str) -> List[str]:
    """
    Split markdown on ``---`` separator lines.

    The leading metadata block is dropped first so its delimiters are not
    mistaken for slide boundaries. Only lines that are exactly ``---``
    (ignoring surrounding whitespace) separate slides, so table delimiter
    rows like ``|---|---|`` stay inside their slide.

    Args:
        markdown: Markdown document, usually the output of ``normalize()``

    Returns:
        List of raw slide texts, empty and whitespace-only slides removed
    """
    if not markdown or not markdown.strip():
        return []

    body = strip_front_matter(normalize_newlines(markdown))

    slides = []
    current = []
    for line in body.split("\n"):
        if _is_separator(line):
            slides.append("\n".join(current))
            current = []
        else:
            current.append(line)
    slides.append("\n".join(current))

    return [slide.strip("\n") for slide in slides if slide.strip()]


def count_slides(markdown: str) -> int:
    """Number of non-empty slides in *markdown*."""
    return len(split_slides(markdown))
