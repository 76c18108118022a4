"""Test slide splitting."""

from slide_deck.front_matter import normalize
from slide_deck.splitter import count_slides, split_slides


def test_split_normalized_document():
    normalized = normalize("# Title\n\n---\n\n## Sub\n- a\n- b", "default")

    slides = split_slides(normalized)

    assert slides == ["# Title", "## Sub\n- a\n- b"]


def test_split_without_front_matter():
    slides = split_slides("# A\ntext\n---\n# B")

    assert slides == ["# A\ntext", "# B"]


def test_separator_with_surrounding_whitespace():
    assert len(split_slides("# A\n  ---  \n# B")) == 2


def test_table_delimiter_does_not_split():
    markdown = "# Table\n\n| a | b |\n|---|---|\n| 1 | 2 |"

    slides = split_slides(markdown)

    assert len(slides) == 1
    assert "|---|---|" in slides[0]


def test_empty_content_handling():
    assert split_slides("") == []
    assert split_slides("   \n\n   ") == []
    assert split_slides("---\n\n---") == []


def test_empty_slides_are_dropped():
    slides = split_slides("# A\n---\n\n---\n   \n---\n# B\n---\n")

    assert slides == ["# A", "# B"]


def test_count_slides(sample_deck):
    assert count_slides(sample_deck) == 3
    assert count_slides(normalize(sample_deck, "gaia")) == 3


def test_split_crlf_document():
    normalized = normalize("---\r\nmarp: true\r\ntheme: gaia\r\n---\r\n# A\r\n", "gaia")

    assert split_slides(normalized) == ["# A"]
    assert split_slides("# A\r\n---\r\n# B\r\n") == ["# A", "# B"]
