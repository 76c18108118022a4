"""
Slide content extractor.

Turns the raw markdown of one slide into a :class:`SlideModel`. Extraction
is destructive and ordered: every step captures its matches and deletes them
from the working text before the next step runs, so a fragment is claimed
by at most one region::

    title -> subtitle -> unordered lists -> ordered lists -> tables -> images -> residual text

The order is the tie-break for lines that fit more than one pattern.
Malformed markdown never raises; unmatched regions stay empty.
"""
import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple

from .front_matter import normalize_newlines
from .models import SlideModel, Table
from .paths import resolve_asset

logger = logging.getLogger(__name__)

TITLE_RE = re.compile(r"^#[ \t]+(\S.*?)[ \t]*$\n?", re.MULTILINE)
SUBTITLE_RE = re.compile(r"^##[ \t]+(\S.*?)[ \t]*$\n?", re.MULTILINE)

# One match = one maximal run of consecutive item lines
UNORDERED_LIST_RE = re.compile(r"(?:^[ \t]*[-*+][ \t]+\S.*$(?:\n|\Z))+", re.MULTILINE)
ORDERED_LIST_RE = re.compile(r"(?:^[ \t]*\d+\.[ \t]+\S.*$(?:\n|\Z))+", re.MULTILINE)
UNORDERED_MARKER_RE = re.compile(r"^[ \t]*[-*+][ \t]+")
ORDERED_MARKER_RE = re.compile(r"^[ \t]*\d+\.[ \t]+")

# Two or more consecutive lines that start and end with a pipe
TABLE_RE = re.compile(r"(?:^[ \t]*\|.*\|[ \t]*$(?:\n|\Z)){2,}", re.MULTILINE)

IMAGE_RE = re.compile(r"!\[[^\]]*\]\(\s*([^)\s]+)(?:\s+[\"'][^\"']*[\"'])?\s*\)")

HEADING_MARKER_RE = re.compile(r"^[ \t]*#{1,6}[ \t]+", re.MULTILINE)

# (pattern, replacement) applied in order to the residual text
INLINE_MARKUP = [
    (re.compile(r"\*\*(.+?)\*\*"), r"\1"),             # strong
    (re.compile(r"__(.+?)__"), r"\1"),                 # strong
    (re.compile(r"\*(.+?)\*"), r"\1"),                 # emphasis
    (re.compile(r"(?<!\w)_(.+?)_(?!\w)"), r"\1"),      # emphasis, not snake_case
    (re.compile(r"~~(.+?)~~"), r"\1"),                 # strikethrough
    (re.compile(r"`(.+?)`"), r"\1"),                   # inline code
    (re.compile(r"\[(.+?)\]\((.+?)\)"), r"\1"),        # link -> text
]


def _remove_span(text: str, match) -> str:
    return text[:match.start()] + text[match.end():]


def strip_inline_markup(text: str) -> str:
    """Reduce emphasis, strong, strikethrough, code and links to plain text."""
    for pattern, replacement in INLINE_MARKUP:
        text = pattern.sub(replacement, text)
    return text


def split_table_row(line: str) -> List[str]:
    """Split ``| a | b |`` into ``["a", "b"]``; outer pipes are optional."""
    row = line.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|"):
        row = row[:-1]
    return [cell.strip() for cell in row.split("|")]


class ContentExtractor:
    """
    Ordered extraction pipeline.

    Each ``take_*`` method is a pure ``(text) -> (claimed, remainder)``
    step; :meth:`extract` threads the remainder through all of them.
    """

    def __init__(self, base_dir: Optional[Path] = None):
        """
        Args:
            base_dir: Directory used to resolve relative image paths. When
                ``None`` image references are kept as written.
        """
        self.base_dir = Path(base_dir) if base_dir is not None else None

    # ------------------------------------------------------------------
    # Headings
    # ------------------------------------------------------------------
    def take_title(self, text: str) -> Tuple[Optional[str], str]:
        match = TITLE_RE.search(text)
        if match is None:
            return None, text
        return match.group(1), _remove_span(text, match)

    def take_subtitle(self, text: str) -> Tuple[Optional[str], str]:
        match = SUBTITLE_RE.search(text)
        if match is None:
            return None, text
        return match.group(1), _remove_span(text, match)

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------
    def _take_lists(self, text: str, block_re, marker_re) -> Tuple[List[List[str]], str]:
        lists = []
        for match in block_re.finditer(text):
            items = [
                marker_re.sub("", line).strip()
                for line in match.group(0).split("\n")
                if line.strip()
            ]
            if items:
                lists.append(items)
        return lists, block_re.sub("", text)

    def take_unordered_lists(self, text: str) -> Tuple[List[List[str]], str]:
        return self._take_lists(text, UNORDERED_LIST_RE, UNORDERED_MARKER_RE)

    def take_ordered_lists(self, text: str) -> Tuple[List[List[str]], str]:
        return self._take_lists(text, ORDERED_LIST_RE, ORDERED_MARKER_RE)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------
    def take_tables(self, text: str) -> Tuple[List[Table], str]:
        """
        Row 1 is the header, row 2 the delimiter (dropped), the rest data.
        A table whose only rows are header and delimiter has no data rows.
        """
        tables = []
        for match in TABLE_RE.finditer(text):
            rows = [
                split_table_row(line)
                for line in match.group(0).split("\n")
                if line.strip()
            ]
            tables.append(Table(header=rows[0], rows=rows[2:]))
        return tables, TABLE_RE.sub("", text)

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------
    def take_images(self, text: str) -> Tuple[List[str], str]:
        images = [
            resolve_asset(match.group(1), base_dir=self.base_dir)
            for match in IMAGE_RE.finditer(text)
        ]
        return images, IMAGE_RE.sub("", text)

    # ------------------------------------------------------------------
    # Residual text
    # ------------------------------------------------------------------
    def take_body_text(self, text: str) -> str:
        """Clean up whatever the earlier steps left behind."""
        text = HEADING_MARKER_RE.sub("", text)
        lines = [line.rstrip() for line in text.split("\n")]
        text = re.sub(r"\n{3,}", "\n\n", "\n".join(lines)).strip()
        return strip_inline_markup(text)

    def extract(self, slide_text: str, index: int = 0) -> SlideModel:
        """
        Build the slide model for one slide.

        Args:
            slide_text: Raw markdown of a single slide
            index: 0-based position of the slide in the deck

        Returns:
            SlideModel without layout information
        """
        text = normalize_newlines(slide_text)

        title, text = self.take_title(text)
        subtitle, text = self.take_subtitle(text)
        unordered_lists, text = self.take_unordered_lists(text)
        ordered_lists, text = self.take_ordered_lists(text)
        tables, text = self.take_tables(text)
        images, text = self.take_images(text)
        body_text = self.take_body_text(text)

        logger.debug(
            "Slide %d: title=%r subtitle=%r lists=%d/%d tables=%d images=%d body=%d chars",
            index, title, subtitle, len(unordered_lists), len(ordered_lists),
            len(tables), len(images), len(body_text),
        )

        return SlideModel(
            index=index,
            title=title,
            subtitle=subtitle,
            body_text=body_text,
            unordered_lists=unordered_lists,
            ordered_lists=ordered_lists,
            tables=tables,
            images=images,
        )


def extract(slide_text: str, index: int = 0, base_dir: Optional[Path] = None) -> SlideModel:
    """
    Convenience function to extract a slide model from raw slide markdown.
    """
    return ContentExtractor(base_dir=base_dir).extract(slide_text, index=index)
