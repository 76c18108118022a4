"""
Data models for the slide deck pipeline.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Size:
    """Canvas size in inches."""
    width: float
    height: float


# 16:9 canvas used by the PPTX writer
DEFAULT_CANVAS = Size(10, 5.625)


@dataclass(frozen=True)
class Rect:
    """
    Position rectangle in canvas units (inches).
    """
    x: float
    y: float
    w: float
    h: float

    @property
    def bottom(self):
        return self.y + self.h

    @property
    def right(self):
        return self.x + self.w

    def overlaps(self, other: "Rect") -> bool:
        """Check whether two rectangles share any area."""
        return (
            self.x < other.right and other.x < self.right
            and self.y < other.bottom and other.y < self.bottom
        )


@dataclass
class Table:
    """A pipe table: header cells plus data rows (delimiter row dropped)."""
    header: List[str]
    rows: List[List[str]] = field(default_factory=list)

    @property
    def column_count(self):
        return len(self.header)

    def as_matrix(self) -> List[List[str]]:
        """Header followed by data rows, padded/truncated to the header width."""
        width = self.column_count
        matrix = [list(self.header)]
        for row in self.rows:
            cells = list(row[:width])
            cells.extend([""] * (width - len(cells)))
            matrix.append(cells)
        return matrix


@dataclass
class SlideModel:
    """
    Structured content of one slide.

    ``layout``, ``alignment`` and ``is_cover`` are filled by the layout
    engine, ``total`` by the deck assembler.
    """
    index: int
    title: Optional[str] = None
    subtitle: Optional[str] = None
    body_text: str = ""
    unordered_lists: List[List[str]] = field(default_factory=list)
    ordered_lists: List[List[str]] = field(default_factory=list)
    tables: List[Table] = field(default_factory=list)
    images: List[str] = field(default_factory=list)
    is_cover: bool = False
    layout: Dict[str, Rect] = field(default_factory=dict)
    alignment: str = "left"
    total: Optional[int] = None

    def has_content(self) -> bool:
        """True if any region besides title/subtitle is populated."""
        return bool(
            self.body_text
            or self.unordered_lists
            or self.ordered_lists
            or self.tables
            or self.images
        )

    def is_empty(self) -> bool:
        return not (self.title or self.subtitle or self.has_content())

    @property
    def page_number(self):
        return self.index + 1

    @property
    def page_label(self) -> str:
        """Pagination text, e.g. ``"2 / 5"``."""
        if self.total is None:
            return str(self.page_number)
        return f"{self.page_number} / {self.total}"

    @property
    def show_page_number(self):
        return not self.is_cover


@dataclass(frozen=True)
class Palette:
    """Four color roles as 6-hex-digit RGB strings (no leading ``#``)."""
    background: str
    title: str
    text: str
    accent: str


@dataclass(frozen=True)
class Deck:
    """
    Laid-out slides plus the resolved palette, ready for a renderer.
    """
    slides: Tuple[SlideModel, ...]
    theme: str
    palette: Palette
    canvas: Size = DEFAULT_CANVAS

    def __len__(self):
        return len(self.slides)

    def __iter__(self):
        return iter(self.slides)

    def __getitem__(self, item):
        return self.slides[item]

    @property
    def slide_count(self):
        return len(self.slides)
