#!/usr/bin/env python3
"""
PowerPoint renderer for converting a laid-out deck to PPTX slides.
"""

import base64
import logging
import os
from io import BytesIO
from typing import List, Tuple

import requests
from PIL import Image
from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import PP_ALIGN
from pptx.oxml import parse_xml
from pptx.oxml.ns import nsdecls, qn
from pptx.util import Inches, Pt

from .models import Deck, Palette, Rect, SlideModel, Table
from .paths import is_remote

logger = logging.getLogger(__name__)

# Font sizes in points
FONT_SIZES = {
    'cover_title': 36,
    'title': 24,
    'subtitle': 20,
    'body': 14,
    'table': 12,
    'page_number': 10,
}

IMAGE_TIMEOUT = 30

ALIGNMENTS = {
    'left': PP_ALIGN.LEFT,
    'center': PP_ALIGN.CENTER,
    'right': PP_ALIGN.RIGHT,
}


class PPTXRenderer:
    """
    Renderer for converting a :class:`Deck` to a PowerPoint presentation.
    """

    def __init__(self, debug: bool = False, image_timeout: float = IMAGE_TIMEOUT):
        self.debug = debug
        self.image_timeout = image_timeout

    def render(self, deck: Deck, output_path: str) -> str:
        """
        Render *deck* and save it to *output_path*.

        Raises:
            FileNotFoundError: A local image does not exist
            requests.HTTPError: A remote image could not be fetched
        """
        prs = Presentation()
        prs.slide_width = Inches(deck.canvas.width)
        prs.slide_height = Inches(deck.canvas.height)

        for model in deck:
            slide = prs.slides.add_slide(prs.slide_layouts[6])  # Blank layout
            self._render_slide(slide, model, deck.palette)

        prs.save(output_path)
        if self.debug:
            logger.info("Wrote %d slides to %s", len(deck), output_path)
        return str(output_path)

    # ------------------------------------------------------------------
    # Slide
    # ------------------------------------------------------------------
    def _render_slide(self, slide, model: SlideModel, palette: Palette):
        fill = slide.background.fill
        fill.solid()
        fill.fore_color.rgb = RGBColor.from_string(palette.background)

        layout = model.layout
        align = ALIGNMENTS.get(model.alignment, PP_ALIGN.LEFT)

        if model.title and 'title' in layout:
            size = FONT_SIZES['cover_title'] if model.is_cover else FONT_SIZES['title']
            self._add_text(slide, layout['title'], [model.title], size, palette.title,
                           bold=True, align=align)

        if model.subtitle and 'subtitle' in layout:
            self._add_text(slide, layout['subtitle'], [model.subtitle], FONT_SIZES['subtitle'],
                           palette.title, align=align)

        if model.body_text and 'body' in layout:
            self._add_text(slide, layout['body'], model.body_text.split("\n"),
                           FONT_SIZES['body'], palette.text)

        for i, items in enumerate(model.unordered_lists):
            self._add_list(slide, layout[f'unordered_list_{i}'], items, palette, ordered=False)

        for i, items in enumerate(model.ordered_lists):
            self._add_list(slide, layout[f'ordered_list_{i}'], items, palette, ordered=True)

        for i, table in enumerate(model.tables):
            self._add_table(slide, layout[f'table_{i}'], table, palette)

        for i, src in enumerate(model.images):
            self._add_image(slide, layout[f'image_{i}'], src)

        if model.show_page_number and 'page_number' in layout:
            self._add_text(slide, layout['page_number'], [model.page_label],
                           FONT_SIZES['page_number'], palette.text, align=PP_ALIGN.RIGHT)

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------
    def _add_textbox(self, slide, rect: Rect):
        textbox = slide.shapes.add_textbox(Inches(rect.x), Inches(rect.y), Inches(rect.w), Inches(rect.h))
        text_frame = textbox.text_frame
        text_frame.word_wrap = True
        return textbox

    def _style_run(self, run, size: float, color: str, bold: bool = False):
        run.font.size = Pt(size)
        run.font.bold = bold
        run.font.color.rgb = RGBColor.from_string(color)

    def _add_text(self, slide, rect: Rect, lines: List[str], size: float, color: str,
                  bold: bool = False, align=PP_ALIGN.LEFT):
        """Add a text box with one paragraph per line."""
        textbox = self._add_textbox(slide, rect)
        text_frame = textbox.text_frame
        for i, line in enumerate(lines):
            para = text_frame.paragraphs[0] if i == 0 else text_frame.add_paragraph()
            para.alignment = align
            run = para.add_run()
            run.text = line
            self._style_run(run, size, color, bold=bold)
        return textbox

    def _add_list(self, slide, rect: Rect, items: List[str], palette: Palette, ordered: bool):
        """Bullets and numbers are prepended as accent-colored runs."""
        textbox = self._add_textbox(slide, rect)
        text_frame = textbox.text_frame
        for i, item in enumerate(items):
            para = text_frame.paragraphs[0] if i == 0 else text_frame.add_paragraph()
            bullet_run = para.add_run()
            bullet_run.text = f"{i + 1}. " if ordered else "• "
            self._style_run(bullet_run, FONT_SIZES['body'], palette.accent)

            run = para.add_run()
            run.text = item
            self._style_run(run, FONT_SIZES['body'], palette.text)
        return textbox

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------
    def _add_table(self, slide, rect: Rect, table: Table, palette: Palette):
        matrix = table.as_matrix()
        rows = len(matrix)
        cols = max(1, table.column_count)

        table_shape = slide.shapes.add_table(
            rows, cols, Inches(rect.x), Inches(rect.y), Inches(rect.w), Inches(rect.h)
        )
        pptx_table = table_shape.table
        col_width = Inches(rect.w / cols)
        for column in pptx_table.columns:
            column.width = col_width

        for r, row in enumerate(matrix):
            for c, value in enumerate(row):
                cell = pptx_table.cell(r, c)
                cell.text = value
                for para in cell.text_frame.paragraphs:
                    for run in para.runs:
                        self._style_run(run, FONT_SIZES['table'], palette.text, bold=(r == 0))

        self._apply_table_borders(pptx_table, palette.accent)
        return table_shape

    def _apply_table_borders(self, table, color_hex: str):
        """Apply solid borders to every cell in the table using raw XML.

        Args:
            table: python-pptx table object
            color_hex: Hex string without '#', e.g. '4361EE'
        """
        color_hex = color_hex.lstrip('#').upper()

        def _solid_line_xml(side):
            return (
                f'<a:{side} w="6350" {nsdecls("a")}>'
                f'<a:solidFill><a:srgbClr val="{color_hex}"/></a:solidFill>'
                f'<a:prstDash val="solid"/>'
                f'</a:{side}>'
            )

        for row in table.rows:
            for cell in row.cells:
                tcPr = cell._tc.get_or_add_tcPr()
                for border_side in ("lnL", "lnR", "lnT", "lnB"):
                    existing = tcPr.find(qn(f'a:{border_side}'))
                    if existing is not None:
                        tcPr.remove(existing)
                    tcPr.append(parse_xml(_solid_line_xml(border_side)))

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------
    def _load_image(self, src: str):
        """Return a path or file-like object python-pptx can read."""
        if src.startswith("data:"):
            _, encoded = src.split(",", 1)
            return BytesIO(base64.b64decode(encoded))

        if is_remote(src):
            response = requests.get(src, timeout=self.image_timeout)
            response.raise_for_status()
            return BytesIO(response.content)

        if not os.path.exists(src):
            raise FileNotFoundError(f"Image file not found: {src}")
        return src

    def _fit_image(self, image_source, rect: Rect) -> Tuple[float, float, float, float]:
        """Scale the image into *rect* preserving aspect ratio, centered horizontally."""
        with Image.open(image_source) as img:
            width_px, height_px = img.size
        if hasattr(image_source, "seek"):
            image_source.seek(0)

        aspect = width_px / height_px if height_px else 1
        w = rect.w
        h = w / aspect
        if h > rect.h:
            h = rect.h
            w = h * aspect
        x = rect.x + (rect.w - w) / 2
        return x, rect.y, w, h

    def _add_image(self, slide, rect: Rect, src: str):
        try:
            image_source = self._load_image(src)
            x, y, w, h = self._fit_image(image_source, rect)
        except Exception as e:
            logger.error("Failed to load image %s: %s", src, e)
            raise

        if self.debug:
            logger.info("Adding image %s at (%.2f, %.2f) %.2fx%.2f in", src, x, y, w, h)
        return slide.shapes.add_picture(image_source, Inches(x), Inches(y), width=Inches(w), height=Inches(h))


def render_deck(deck: Deck, output_path: str, debug: bool = False) -> str:
    """
    Convenience function to write *deck* as a PPTX file.
    """
    return PPTXRenderer(debug=debug).render(deck, output_path)
