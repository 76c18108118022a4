"""Test HTML rendering of decks."""

from bs4 import BeautifulSoup

from slide_deck.html_renderer import HTMLRenderer
from slide_deck.splitter import count_slides
from slide_deck.theme_loader import get_css


def test_render_basic_deck(sample_deck):
    result = HTMLRenderer().render(sample_deck, theme="default")

    assert result.slide_count == count_slides(sample_deck) == 3
    assert result.html.startswith("<!DOCTYPE html>")
    assert "<h1>Quarterly Review</h1>" in result.raw_html
    assert "<li>Risks</li>" in result.raw_html
    assert "<th>Metric</th>" in result.raw_html
    assert "<strong>preliminary</strong>" in result.raw_html


def test_front_matter_is_not_rendered(sample_deck):
    result = HTMLRenderer().render(sample_deck, theme="gaia")

    assert "marp: true" not in result.raw_html
    assert "paginate" not in result.raw_html


def test_pagination_attributes(sample_deck):
    result = HTMLRenderer().render(sample_deck)

    sections = BeautifulSoup(result.raw_html, "html.parser").find_all("section")
    assert [s["data-marpit-pagination"] for s in sections] == ["1", "2", "3"]
    assert {s["data-marpit-pagination-total"] for s in sections} == {"3"}


def test_pagination_disabled_by_directive():
    markdown = "---\npaginate: false\n---\n# One\n---\n# Two"

    result = HTMLRenderer().render(markdown)

    assert result.slide_count == 2
    assert "data-marpit-pagination" not in result.raw_html


def test_theme_css_embedded():
    result = HTMLRenderer().render("# Hi", theme="bespoke")

    assert result.css == get_css("bespoke")
    assert "@theme bespoke" in result.html


def test_unknown_theme_falls_back_to_default_css():
    result = HTMLRenderer().render("# Hi", theme="nonexistent")

    assert result.css == get_css("default")


def test_relative_images_resolved(tmp_path):
    renderer = HTMLRenderer(base_dir=tmp_path)

    result = renderer.render("![pic](img/pic.png)\n\n![remote](https://example.com/a.png)")

    img_sources = [img["src"] for img in BeautifulSoup(result.raw_html, "html.parser").find_all("img")]
    assert img_sources[0] == (tmp_path / "img" / "pic.png").resolve().as_uri()
    assert img_sources[1] == "https://example.com/a.png"


def test_page_title_and_language():
    result = HTMLRenderer(title="Board deck", lang="fr").render("# Hi")

    assert "<title>Board deck</title>" in result.html
    assert '<html lang="fr">' in result.html
