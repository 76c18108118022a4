"""Test PDF print option mapping (no browser is launched)."""

import pytest

from slide_deck.pdf_exporter import PDFExporter, PDFOptions


def test_default_options():
    options = PDFOptions().to_pyppeteer()

    assert options == {
        'format': 'A4',
        'landscape': True,
        'scale': 2.0,
        'printBackground': True,
        'margin': {'top': '0.5mm', 'right': '0.5mm', 'bottom': '0.5mm', 'left': '0.5mm'},
    }


def test_output_path_included_when_given(tmp_path):
    target = tmp_path / "deck.pdf"

    options = PDFOptions().to_pyppeteer(target)

    assert options['path'] == str(target)


@pytest.mark.parametrize(
    "fmt,expected",
    [("a4", "A4"), ("A3", "A3"), ("letter", "Letter"), ("LEGAL", "Legal")],
)
def test_paper_format_normalized(fmt, expected):
    assert PDFOptions(format=fmt).to_pyppeteer()['format'] == expected


def test_portrait_orientation():
    assert PDFOptions(orientation="Portrait").to_pyppeteer()['landscape'] is False


@pytest.mark.parametrize("scale,expected", [(5, 2.0), (0.01, 0.1), (1.25, 1.25)])
def test_scale_clamped(scale, expected):
    assert PDFOptions(scale=scale).to_pyppeteer()['scale'] == expected


def test_custom_margin():
    margin = PDFOptions(margin=10).to_pyppeteer()['margin']

    assert set(margin.values()) == {"10mm"}


def test_exporter_scratch_dir(tmp_path):
    exporter = PDFExporter(tmp_dir=str(tmp_path))

    assert exporter.tmp_dir == tmp_path
