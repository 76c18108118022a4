#!/usr/bin/env python3
"""
Main deck generator module that ties the content pipeline to the exporters.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from .deck import EmptyPresentationError, build_deck
from .html_renderer import HTMLRenderer, RenderResult
from .layout_engine import LayoutMode
from .models import DEFAULT_CANVAS, Deck, Size
from .paths import prepare_workspace, with_suffix
from .pdf_exporter import PDFExporter, PDFOptions
from .pptx_renderer import PPTXRenderer

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("pptx", "html", "pdf")


class DeckGenerator:
    """
    Converts a markdown deck to PPTX, HTML or PDF.
    """

    def __init__(
        self,
        *,
        output_dir,
        theme: str = "default",
        base_dir: str = None,
        canvas: Size = DEFAULT_CANVAS,
        layout_mode: LayoutMode = LayoutMode.STACK,
        keep_tmp: bool = False,
        debug: bool = False,
    ):
        """Create a new :class:`DeckGenerator`.

        Parameters
        ----------
        output_dir
            Directory where exported files are written. *Required*.
        theme
            Theme identifier (``default`` / ``gaia`` / ``uncover`` / ``bespoke``).
        base_dir
            Base directory for resolving relative image paths in markdown.
            If None, defaults to current working directory.
        canvas
            Slide size in inches for the structured (PPTX) path.
        layout_mode
            ``LayoutMode.STACK`` or ``LayoutMode.LEGACY`` region placement.
        keep_tmp
            Leave the ``.sd_tmp`` scratch directory on disk.
        debug
            Enable verbose logging.
        """
        self.theme = theme
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()
        self.canvas = canvas
        self.layout_mode = LayoutMode(layout_mode)
        self.debug = debug

        self.paths = prepare_workspace(output_dir, keep_tmp=keep_tmp)

        self.html_renderer = HTMLRenderer(base_dir=self.base_dir, debug=debug)
        self.pptx_renderer = PPTXRenderer(debug=debug)
        self.pdf_exporter = PDFExporter(tmp_dir=self.paths["tmp_dir"], debug=debug)

    def _output_path(self, output_path, suffix: str) -> Path:
        path = with_suffix(output_path, suffix, output_dir=self.paths["output_dir"])
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def build(self, markdown_text: str) -> Deck:
        """Build the structured deck for *markdown_text*."""
        return build_deck(
            markdown_text,
            theme=self.theme,
            canvas=self.canvas,
            mode=self.layout_mode,
            base_dir=self.base_dir,
        )

    def render_html(self, markdown_text: str, theme: Optional[str] = None) -> RenderResult:
        """Render *markdown_text* to a themed HTML page.

        Raises:
            EmptyPresentationError: If the document has no slides
        """
        result = self.html_renderer.render(markdown_text, theme=theme or self.theme)
        if result.slide_count == 0:
            raise EmptyPresentationError("Presentation has no slides")
        return result

    def export_pptx(self, markdown_text: str, output_path="presentation.pptx") -> str:
        """Write a PPTX file and return its path."""
        path = self._output_path(output_path, ".pptx")
        deck = self.build(markdown_text)
        self.pptx_renderer.render(deck, str(path))
        logger.info("Exported PPTX with %d slides", len(deck))
        return str(path)

    def export_html(self, markdown_text: str, output_path="presentation.html") -> str:
        """Write the HTML deck and return its path."""
        path = self._output_path(output_path, ".html")
        result = self.render_html(markdown_text)
        path.write_text(result.html, encoding="utf-8")
        logger.info("Exported HTML with %d slides", result.slide_count)
        return str(path)

    async def export_pdf(self, markdown_text: str, output_path="presentation.pdf",
                         options: Optional[PDFOptions] = None) -> str:
        """Print the HTML deck to PDF and return its path."""
        path = self._output_path(output_path, ".pdf")
        result = self.render_html(markdown_text)
        await self.pdf_exporter.export(result.html, str(path), options)
        logger.info("Exported PDF with %d slides", result.slide_count)
        return str(path)

    def preview(self, markdown_text: str, theme: Optional[str] = None) -> Dict:
        """Write ``preview.html`` into the output directory.

        *theme* overrides the generator's theme for this preview only.

        Returns:
            dict with ``path`` and ``slide_count``
        """
        path = self._output_path("preview.html", ".html")
        result = self.render_html(markdown_text, theme)
        path.write_text(result.html, encoding="utf-8")
        return {"path": str(path), "slide_count": result.slide_count}

    async def generate(self, markdown_text: str, output_path: str = "presentation",
                       fmt: str = "pptx", pdf_options: Optional[PDFOptions] = None) -> str:
        """
        Export *markdown_text* in the requested format.

        Args:
            markdown_text: The markdown content to convert
            output_path: Destination file; the format's suffix is enforced
            fmt: One of ``pptx``, ``html``, ``pdf``
            pdf_options: Print settings for the PDF format

        Returns:
            str: Path to the written file
        """
        fmt = fmt.lower()
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported format '{fmt}'. Choose from {EXPORT_FORMATS}")

        if fmt == "pptx":
            path = self.export_pptx(markdown_text, output_path)
        elif fmt == "html":
            path = self.export_html(markdown_text, output_path)
        else:
            path = await self.export_pdf(markdown_text, output_path, pdf_options)

        if self.debug:
            logger.info("Generated %s saved to: %s (theme: %s)", fmt, path, self.theme)
        return path


def parse_canvas(value: str) -> Size:
    """Parse ``"10x5.625"`` into a :class:`Size`."""
    try:
        width, height = (float(part) for part in value.lower().split("x"))
    except ValueError:
        raise ValueError(f"Invalid canvas size '{value}', expected WIDTHxHEIGHT in inches")
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid canvas size '{value}', dimensions must be positive")
    return Size(width, height)


def main(argv=None):
    """Command-line entry point for the deck generator."""
    import argparse
    import asyncio
    import sys

    from .theme_loader import list_available_themes

    def _build_parser() -> argparse.ArgumentParser:
        p = argparse.ArgumentParser(prog="slidedeck", description="Convert a Markdown deck to PPTX, HTML or PDF.")
        p.add_argument("markdown", type=Path, help="Markdown file to convert")
        p.add_argument("--output", "-o", type=Path, default=Path("output/presentation"), help="Destination path (suffix added per format)")
        p.add_argument("--format", "-f", choices=EXPORT_FORMATS, default="pptx", help="Export format")
        p.add_argument("--theme", "-t", default="default", help=f"Theme to use ({', '.join(list_available_themes())})")
        p.add_argument("--layout", choices=[m.value for m in LayoutMode], default=LayoutMode.STACK.value, help="Region placement for PPTX export")
        p.add_argument("--canvas", default="10x5.625", help="PPTX slide size in inches, WIDTHxHEIGHT")
        p.add_argument("--asset-base", type=Path, help="Base directory for resolving relative image paths (default: parent of markdown file)")
        p.add_argument("--pdf-margin", type=float, default=0.5, help="PDF page margin in mm")
        p.add_argument("--pdf-scale", type=float, default=2.0, help="PDF render scale")
        p.add_argument("--pdf-format", default="A4", help="PDF paper format")
        p.add_argument("--pdf-orientation", choices=["landscape", "portrait"], default="landscape")
        p.add_argument("--keep-tmp", action="store_true", help="Keep .sd_tmp directory after run")
        p.add_argument("--debug", action="store_true", help="Enable verbose logging")
        return p

    async def _generate_async(args):
        md_path: Path = args.markdown
        if not md_path.exists():
            logger.error(f"Markdown file '{md_path}' not found")
            sys.exit(1)

        asset_base = args.asset_base if args.asset_base else md_path.parent
        markdown_text = md_path.read_text(encoding="utf-8")

        generator = DeckGenerator(
            output_dir=args.output.parent,
            theme=args.theme,
            base_dir=asset_base,
            canvas=parse_canvas(args.canvas),
            layout_mode=LayoutMode(args.layout),
            keep_tmp=args.keep_tmp,
            debug=args.debug,
        )
        pdf_options = PDFOptions(
            margin=args.pdf_margin,
            scale=args.pdf_scale,
            format=args.pdf_format,
            orientation=args.pdf_orientation,
        )

        try:
            output_path = await generator.generate(markdown_text, args.output, args.format, pdf_options)
        except EmptyPresentationError as e:
            logger.error("%s: %s", md_path, e)
            sys.exit(1)
        logger.info("Presentation written to %s", output_path)

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.getLogger("slide_deck").setLevel(logging.DEBUG)

    asyncio.run(_generate_async(args))


if __name__ == "__main__":
    main()
