"""Test layout engine functionality."""

import itertools

import pytest

from slide_deck.extractor import extract
from slide_deck.layout_engine import LayoutEngine, LayoutMode, assign_layout, detect_cover
from slide_deck.models import DEFAULT_CANVAS, Size


def test_cover_detection():
    assert assign_layout(extract("# Title", index=0)).is_cover is True
    assert assign_layout(extract("# Title", index=1)).is_cover is False


def test_cover_allows_subtitle():
    model = assign_layout(extract("# Title\n## Tagline", index=0))

    assert model.is_cover is True
    assert model.layout["subtitle"].y > model.layout["title"].bottom


@pytest.mark.parametrize("text", ["# Title\nbody", "# Title\n- a", "# Title\n![x](x.png)", "## Only sub"])
def test_not_a_cover(text):
    assert detect_cover(extract(text, index=0)) is False


def test_cover_title_is_centered_vertically():
    model = assign_layout(extract("# Title"))

    title = model.layout["title"]
    assert title.y == pytest.approx(2.5)
    assert model.alignment == "center"
    assert "page_number" not in model.layout


def test_regular_slide_title_near_top():
    model = assign_layout(extract("# Title\nbody", index=2))

    assert model.layout["title"].y == pytest.approx(0.5)
    assert model.layout["title"].x == pytest.approx(0.5)
    assert model.layout["title"].w == pytest.approx(9.0)
    assert model.alignment == "left"


def test_subtitle_position():
    with_title = assign_layout(extract("# T\n## S\nbody", index=1))
    without_title = assign_layout(extract("## S\nbody", index=1))

    assert with_title.layout["subtitle"].y == pytest.approx(1.2)
    assert without_title.layout["subtitle"].y == pytest.approx(0.5)


@pytest.mark.parametrize(
    "text,expected_top",
    [
        ("# T\n## S\nbody", 2.0),
        ("# T\nbody", 1.5),
        ("body", 0.5),
        ("## S\nbody", 1.1),
    ],
)
def test_content_starts_below_headings(text, expected_top):
    model = assign_layout(extract(text, index=1))

    assert model.layout["body"].y == pytest.approx(expected_top)


def test_page_number_badge_bottom_right():
    model = assign_layout(extract("# T\nbody", index=1))

    badge = model.layout["page_number"]
    assert badge.x == pytest.approx(9.0)
    assert badge.y == pytest.approx(5.4)


def test_stacked_regions_do_not_overlap():
    text = """# T
## S
- a
- b

| h | v |
|---|---|
| x | 1 |

![img](img.png)

Closing text."""
    model = assign_layout(extract(text, index=1), mode=LayoutMode.STACK)

    content = [model.layout[name] for name in ("unordered_list_0", "table_0", "image_0", "body")]
    for first, second in zip(content, content[1:]):
        assert first.y < second.y
    for first, second in itertools.combinations(content, 2):
        assert not first.overlaps(second)
    assert all(rect.bottom <= 5.2 + 1e-6 for rect in content)


def test_stack_order_lists_tables_images_body():
    text = "Body first in source\n\n![i](i.png)\n\n| a | b |\n|---|---|\n\n1. one\n\n- bullet"
    model = assign_layout(extract(text, index=1))

    order = sorted(
        (name for name in model.layout if name not in ("page_number",)),
        key=lambda name: model.layout[name].y,
    )
    assert order == ["unordered_list_0", "ordered_list_0", "table_0", "image_0", "body"]


def test_legacy_mode_overlaps_regions():
    model = assign_layout(extract("# T\n- a\n\nbody text", index=1), mode=LayoutMode.LEGACY)

    assert model.layout["unordered_list_0"].y == model.layout["body"].y
    assert model.layout["unordered_list_0"].overlaps(model.layout["body"])


def test_legacy_table_anchor():
    model = assign_layout(extract("# T\n| a | b |\n|---|---|", index=1), mode="legacy")

    assert model.layout["table_0"].y == pytest.approx(2.0)


def test_layout_scales_with_canvas():
    engine = LayoutEngine(canvas=Size(20, 11.25))
    model = engine.assign(extract("# T\nbody", index=1))

    assert model.layout["title"].y == pytest.approx(1.0)
    assert model.layout["title"].w == pytest.approx(18.0)


def test_layout_returns_copy():
    original = extract("# T", index=0)

    laid_out = assign_layout(original, DEFAULT_CANVAS)

    assert original.layout == {}
    assert original.is_cover is False
    assert laid_out.index == original.index


def test_subtitle_only_slide_stacks_content_below_subtitle():
    model = assign_layout(extract("## Sub\n- a\n- b", index=1))

    subtitle = model.layout["subtitle"]
    items = model.layout["unordered_list_0"]
    assert not subtitle.overlaps(items)
    assert items.y >= subtitle.bottom


def test_crowded_slide_never_covers_headings(caplog):
    text = "# T\n## S\n" + "\n\n".join(f"![img{i}](img{i}.png)" for i in range(12))

    with caplog.at_level("WARNING", logger="slide_deck.layout_engine"):
        model = assign_layout(extract(text, index=1))

    headings = [model.layout["title"], model.layout["subtitle"]]
    images = [model.layout[f"image_{i}"] for i in range(12)]
    for image in images:
        assert image.y >= headings[1].bottom
        assert not any(image.overlaps(heading) for heading in headings)
    for first, second in itertools.combinations(images, 2):
        assert not first.overlaps(second)
    assert "run past the bottom margin" in caplog.text


def test_legacy_subtitle_only_keeps_original_anchor():
    model = assign_layout(extract("## Sub\n- a", index=1), mode=LayoutMode.LEGACY)

    assert model.layout["unordered_list_0"].y == model.layout["subtitle"].y
