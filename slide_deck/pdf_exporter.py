#!/usr/bin/env python3
"""
PDF export: print the rendered HTML deck with headless Chromium (pyppeteer).
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from pyppeteer import launch

logger = logging.getLogger(__name__)

# Chromium's accepted page.pdf() scale range
MIN_SCALE = 0.1
MAX_SCALE = 2.0


@dataclass
class PDFOptions:
    """Print settings. ``margin`` is in millimetres."""
    margin: float = 0.5
    scale: float = 2.0
    format: str = "A4"
    orientation: str = "landscape"
    print_background: bool = True

    def to_pyppeteer(self, output_path: Optional[str] = None) -> Dict:
        """Translate to the option dict accepted by ``page.pdf()``."""
        margin = f"{self.margin}mm"
        options = {
            'format': self.format.upper() if len(self.format) <= 2 else self.format.capitalize(),
            'landscape': self.orientation.lower() == "landscape",
            'scale': min(MAX_SCALE, max(MIN_SCALE, float(self.scale))),
            'printBackground': self.print_background,
            'margin': {'top': margin, 'right': margin, 'bottom': margin, 'left': margin},
        }
        if output_path is not None:
            options['path'] = str(output_path)
        return options


class PDFExporter:
    """
    Writes an HTML page to a scratch file and prints it to PDF.
    """

    def __init__(self, tmp_dir: Path, debug: bool = False):
        """
        Args:
            tmp_dir: Scratch directory for the intermediate HTML file
            debug: Enable verbose logging
        """
        self.tmp_dir = Path(tmp_dir)
        self.debug = debug

    async def export(self, html: str, output_path: str, options: Optional[PDFOptions] = None) -> str:
        """
        Print *html* to *output_path*.

        Returns:
            str: Path to the written PDF

        Raises:
            Any browser launch, navigation or write error, unchanged
        """
        options = options or PDFOptions()
        html_file_path = self.tmp_dir / "deck_print.html"
        html_file_path.write_text(html, encoding="utf-8")

        browser = await launch(
            headless=True,
            args=['--no-sandbox', '--disable-setuid-sandbox', '--allow-file-access-from-files'],
        )
        try:
            page = await browser.newPage()
            # networkidle0 waits for every image to load or fail
            await page.goto(html_file_path.as_uri(), {'waitUntil': 'networkidle0'})
            await page.emulateMedia('print')
            await page.pdf(options.to_pyppeteer(output_path))
        except Exception as e:
            logger.error("PDF export failed: %s", e)
            raise
        finally:
            await browser.close()

        if self.debug:
            logger.info("PDF written to %s", output_path)
        return str(output_path)
