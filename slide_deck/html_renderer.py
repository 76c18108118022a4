#!/usr/bin/env python3
"""
HTML renderer: normalized deck markdown to a self-contained slide page.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup
from jinja2 import DictLoader, Environment
from markdown_it import MarkdownIt
from mdit_py_plugins.front_matter import front_matter_plugin

from .front_matter import is_enabled, normalize, read_directives
from .paths import is_remote, resolve_asset
from .splitter import split_slides
from .theme_loader import Theme, get_css

logger = logging.getLogger(__name__)


PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="{{ lang }}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ title }}</title>
  <style>
    body {
      margin: 0;
      padding: 0;
      background-color: #f0f0f0;
    }
    .deck-container {
      width: 100%;
      height: 100%;
      overflow: auto;
    }
    /* theme: {{ theme }} */
{{ css }}
    @media print {
      body {
        background-color: white;
      }
      .deck-container {
        width: 100%;
        height: auto;
      }
      .deck-container > section {
        display: flex !important;
        page-break-after: always;
      }
    }
  </style>
  <script>
    document.addEventListener('DOMContentLoaded', () => {
      const sections = document.querySelectorAll('.deck-container > section');
      let currentSlide = 0;

      function goToSlide(index) {
        if (index >= 0 && index < sections.length) {
          sections[currentSlide].style.display = 'none';
          currentSlide = index;
          sections[currentSlide].style.display = 'flex';
        }
      }

      sections.forEach((section, index) => {
        section.style.display = index === 0 ? 'flex' : 'none';
      });

      document.addEventListener('keydown', (e) => {
        if (e.key === 'ArrowRight' || e.key === 'PageDown' || e.key === ' ') {
          goToSlide(currentSlide + 1);
        } else if (e.key === 'ArrowLeft' || e.key === 'PageUp') {
          goToSlide(currentSlide - 1);
        } else if (e.key === 'Home') {
          goToSlide(0);
        } else if (e.key === 'End') {
          goToSlide(sections.length - 1);
        }
      });

      let touchStartX = 0;
      document.addEventListener('touchstart', (e) => {
        touchStartX = e.touches[0].clientX;
      });
      document.addEventListener('touchend', (e) => {
        const diff = touchStartX - e.changedTouches[0].clientX;
        if (Math.abs(diff) > 50) {
          goToSlide(diff > 0 ? currentSlide + 1 : currentSlide - 1);
        }
      });
    });
  </script>
</head>
<body>
  <div class="deck-container">
{{ slides_html }}
  </div>
</body>
</html>
"""


@dataclass
class RenderResult:
    """Output of :meth:`HTMLRenderer.render`."""
    html: str
    raw_html: str
    css: str
    slide_count: int


class HTMLRenderer:
    """
    Renders deck markdown to HTML ``<section>`` slides with theme CSS.
    """

    def __init__(self, base_dir: Optional[Path] = None, title: str = "Presentation",
                 lang: str = "en", debug: bool = False):
        """
        Args:
            base_dir: Directory for resolving relative image paths. When set,
                local images are rewritten to absolute ``file://`` URLs so the
                page can be opened from anywhere.
            title: Document ``<title>``
            lang: Document language attribute
            debug: Enable verbose logging
        """
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self.title = title
        self.lang = lang
        self.debug = debug

        self.markdown_processor = MarkdownIt('commonmark', {'html': True})
        self.markdown_processor.enable(['table', 'strikethrough'])
        self.markdown_processor = self.markdown_processor.use(front_matter_plugin)

        self.jinja_env = Environment(loader=DictLoader({"deck.html": PAGE_TEMPLATE}))

    def _theme_css(self, theme: str) -> str:
        """CSS for *theme*; unknown themes use the default stylesheet."""
        try:
            return get_css(theme)
        except (FileNotFoundError, ValueError):
            fallback = Theme.from_id(theme).value
            logger.warning("Theme '%s' has no stylesheet, using '%s'", theme, fallback)
            return get_css(fallback)

    def _rewrite_image_sources(self, html: str) -> str:
        if self.base_dir is None:
            return html
        soup = BeautifulSoup(html, "html.parser")
        for img in soup.find_all("img"):
            src = img.get("src")
            if not src or is_remote(src):
                continue
            img["src"] = Path(resolve_asset(src, base_dir=self.base_dir)).as_uri()
        return str(soup)

    def render_slides(self, markdown: str, paginate: bool = True) -> str:
        """
        Render every slide of *markdown* to a ``<section>`` element.

        Args:
            markdown: Deck markdown (front matter optional)
            paginate: Stamp pagination data attributes on each section

        Returns:
            Concatenated section HTML
        """
        slides = split_slides(markdown)
        total = len(slides)
        sections = []
        for index, slide_md in enumerate(slides):
            body = self.markdown_processor.render(slide_md)
            attrs = [f'id="{index + 1}"']
            if paginate:
                attrs.append(f'data-marpit-pagination="{index + 1}"')
                attrs.append(f'data-marpit-pagination-total="{total}"')
            sections.append(f'<section {" ".join(attrs)}>\n{body}</section>')
        return self._rewrite_image_sources("\n".join(sections))

    def render(self, markdown: str, theme: str = "default") -> RenderResult:
        """
        Render deck markdown to a complete HTML page.

        Args:
            markdown: Raw deck markdown
            theme: Theme identifier written into the front matter

        Returns:
            RenderResult with the full page, section HTML, CSS and slide count
        """
        processed = normalize(markdown, theme)
        directives = read_directives(processed)
        theme_id = directives.get("theme", theme)
        paginate = is_enabled(directives.get("paginate", "true"))

        raw_html = self.render_slides(processed, paginate=paginate)
        css = self._theme_css(theme_id)

        html = self.jinja_env.get_template("deck.html").render(
            lang=self.lang,
            title=self.title,
            theme=theme_id,
            css=css,
            slides_html=raw_html,
        )

        slide_count = len(BeautifulSoup(raw_html, "html.parser").find_all("section"))
        if self.debug:
            logger.info("Rendered %d slides with theme '%s'", slide_count, theme_id)

        return RenderResult(html=html, raw_html=raw_html, css=css, slide_count=slide_count)
