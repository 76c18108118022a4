"""Layout engine: assign canvas rectangles to the regions of a slide model."""

import dataclasses
import logging
import math
from enum import Enum
from typing import Dict, List, Tuple

from .models import DEFAULT_CANVAS, Rect, Size, SlideModel

logger = logging.getLogger(__name__)


class LayoutMode(Enum):
    """How content regions share the space below the headings."""
    # Regions stack top-to-bottom with estimated heights
    STACK = "stack"
    # Every region computes its y from heading presence alone, so regions
    # of different kinds on one slide overlap
    LEGACY = "legacy"


# Vertical anchors as fractions of canvas height, horizontal as fractions of
# width. Derived from the 10in x 5.625in reference canvas.
INSET_X = 0.05
CONTENT_W = 0.90
TITLE_Y = 0.5 / 5.625
COVER_TITLE_Y = 2.5 / 5.625
TITLE_H = 0.6 / 5.625
COVER_TITLE_H = 0.8 / 5.625
SUBTITLE_Y = 1.2 / 5.625
SUBTITLE_H = 0.5 / 5.625
CONTENT_BOTTOM = 5.2 / 5.625
BODY_H = 3.0 / 5.625
BADGE_X = 9.0 / 10
BADGE_W = 0.5 / 10
BADGE_Y = 5.4 / 5.625
BADGE_H = 0.2 / 5.625

# Content height estimates in inches
LIST_ITEM_H = 0.3
BODY_LINE_H = 0.25
TABLE_ROW_H = 0.37
IMAGE_MAX_FRACTION = 0.45
CHARS_PER_INCH = 10
REGION_GAP = 0.1
MIN_REGION_H = 0.3


def detect_cover(model: SlideModel) -> bool:
    """First slide holding only headings."""
    return model.index == 0 and bool(model.title) and not model.has_content()


def _body_top(model: SlideModel) -> float:
    if model.title:
        return (2.0 if model.subtitle else 1.5) / 5.625
    return TITLE_Y


def _block_top(model: SlideModel) -> float:
    """Legacy anchor for tables and images."""
    if model.title:
        return (2.5 if model.subtitle else 2.0) / 5.625
    return 1.0 / 5.625


class LayoutEngine:
    """
    Computes region rectangles for slide models on a fixed canvas.
    """

    def __init__(self, canvas: Size = DEFAULT_CANVAS, mode: LayoutMode = LayoutMode.STACK):
        self.canvas = canvas
        self.mode = LayoutMode(mode)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _rect(self, x: float, y: float, w: float, h: float) -> Rect:
        """Build a rect from canvas fractions."""
        return Rect(
            x=round(x * self.canvas.width, 4),
            y=round(y * self.canvas.height, 4),
            w=round(w * self.canvas.width, 4),
            h=round(h * self.canvas.height, 4),
        )

    def _content_regions(self, model: SlideModel) -> List[Tuple[str, float]]:
        """(region name, estimated height in inches) in stacking order."""
        content_w = CONTENT_W * self.canvas.width
        chars_per_line = max(1, int(content_w * CHARS_PER_INCH))

        regions = []
        for i, items in enumerate(model.unordered_lists):
            regions.append((f"unordered_list_{i}", len(items) * LIST_ITEM_H))
        for i, items in enumerate(model.ordered_lists):
            regions.append((f"ordered_list_{i}", len(items) * LIST_ITEM_H))
        for i, table in enumerate(model.tables):
            regions.append((f"table_{i}", (1 + len(table.rows)) * TABLE_ROW_H))
        for i, _ in enumerate(model.images):
            regions.append((f"image_{i}", IMAGE_MAX_FRACTION * self.canvas.height))
        if model.body_text:
            lines = sum(
                max(1, math.ceil(len(line) / chars_per_line))
                for line in model.body_text.split("\n")
            )
            regions.append(("body", lines * BODY_LINE_H))
        return regions

    # ------------------------------------------------------------------
    # Headings
    # ------------------------------------------------------------------
    def _heading_layout(self, model: SlideModel, is_cover: bool) -> Dict[str, Rect]:
        layout = {}
        if model.title:
            if is_cover:
                layout["title"] = self._rect(INSET_X, COVER_TITLE_Y, CONTENT_W, COVER_TITLE_H)
            else:
                layout["title"] = self._rect(INSET_X, TITLE_Y, CONTENT_W, TITLE_H)

        if model.subtitle:
            if not model.title:
                y = TITLE_Y
            elif is_cover and self.mode is LayoutMode.STACK:
                # below the centered cover title
                y = COVER_TITLE_Y + COVER_TITLE_H + REGION_GAP / self.canvas.height
            else:
                y = SUBTITLE_Y
            layout["subtitle"] = self._rect(INSET_X, y, CONTENT_W, SUBTITLE_H)
        return layout

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------
    def _legacy_content_layout(self, model: SlideModel) -> Dict[str, Rect]:
        layout = {}
        body_top = _body_top(model)
        block_top = _block_top(model)
        for name, _ in self._content_regions(model):
            if name.startswith(("table_", "image_")):
                h = (5.0 / 5.625) if name.startswith("image_") else BODY_H
                layout[name] = self._rect(INSET_X, block_top, CONTENT_W, h)
            else:
                layout[name] = self._rect(INSET_X, body_top, CONTENT_W, BODY_H)
        return layout

    def _content_top(self, model: SlideModel, headings: Dict[str, Rect]) -> float:
        """First y (inches) free of the heading rects."""
        top = _body_top(model) * self.canvas.height
        for rect in headings.values():
            top = max(top, rect.bottom + REGION_GAP)
        return top

    def _stacked_content_layout(self, model: SlideModel, headings: Dict[str, Rect]) -> Dict[str, Rect]:
        layout = {}
        x = INSET_X * self.canvas.width
        w = CONTENT_W * self.canvas.width
        bottom = CONTENT_BOTTOM * self.canvas.height
        cursor = self._content_top(model, headings)
        overflow = []

        regions = self._content_regions(model)
        for position, (name, estimate) in enumerate(regions):
            # leave room for the minimum height of every later region
            later = len(regions) - position - 1
            reserved = later * (MIN_REGION_H + REGION_GAP)
            available = bottom - reserved - cursor
            h = max(MIN_REGION_H, min(estimate, available))
            if h > available:
                overflow.append(name)
            elif h < estimate:
                logger.debug("Slide %d: region %s shrunk to fit the canvas", model.index, name)
            layout[name] = Rect(x=round(x, 4), y=round(cursor, 4), w=round(w, 4), h=round(h, 4))
            cursor += h + REGION_GAP

        if overflow:
            logger.warning(
                "Slide %d: %d content regions run past the bottom margin (%s)",
                model.index, len(overflow), ", ".join(overflow),
            )
        return layout

    def assign(self, model: SlideModel) -> SlideModel:
        """
        Return a copy of *model* with ``is_cover``, ``alignment`` and
        ``layout`` filled in.
        """
        is_cover = detect_cover(model)

        layout = self._heading_layout(model, is_cover)
        if self.mode is LayoutMode.LEGACY:
            layout.update(self._legacy_content_layout(model))
        else:
            layout.update(self._stacked_content_layout(model, layout))

        if not is_cover:
            layout["page_number"] = self._rect(BADGE_X, BADGE_Y, BADGE_W, BADGE_H)

        return dataclasses.replace(
            model,
            is_cover=is_cover,
            alignment="center" if is_cover else "left",
            layout=layout,
        )


def assign_layout(
    model: SlideModel,
    canvas: Size = DEFAULT_CANVAS,
    mode: LayoutMode = LayoutMode.STACK,
) -> SlideModel:
    """
    Convenience function to lay out a single slide model.
    """
    return LayoutEngine(canvas=canvas, mode=mode).assign(model)
