"""Tests for appending user-authored sections."""

from brandguide.core.custom_sections import (
    CUSTOM_SECTION_LIMIT,
    CUSTOM_SECTION_PLACEHOLDER,
    count_custom_sections,
    insert_custom_section,
)
from brandguide.core.section_parser import parse_sections

BASE_MD = "## About Brand\n\nAbout.\n\n## Brand Voice\n\nVoice.\n"


def test_appends_section_at_end():
    result = insert_custom_section(BASE_MD, "  Social Media Voice  ")

    assert result == (
        "## About Brand\n\nAbout.\n\n## Brand Voice\n\nVoice."
        f"\n\n## Social Media Voice\n\n{CUSTOM_SECTION_PLACEHOLDER}"
    )
    sections = parse_sections(result)
    assert sections[-1].id == "social-media-voice"
    assert sections[-1].title == "Social Media Voice"


def test_blank_title_is_noop():
    assert insert_custom_section(BASE_MD, "") == BASE_MD
    assert insert_custom_section(BASE_MD, "   \t ") == BASE_MD


def test_title_truncated_to_60_chars():
    result = insert_custom_section(BASE_MD, "x" * 100)
    assert parse_sections(result)[-1].title == "x" * 60


def test_insert_into_empty_document():
    result = insert_custom_section("", "Email Guidelines")
    assert result == f"## Email Guidelines\n\n{CUSTOM_SECTION_PLACEHOLDER}"


def test_duplicate_titles_are_not_deduplicated():
    once = insert_custom_section(BASE_MD, "Email")
    twice = insert_custom_section(once, "Email")
    titles = [s.title for s in parse_sections(twice)]
    assert titles.count("Email") == 2


def test_count_ignores_catalog_sections():
    assert count_custom_sections(BASE_MD) == 0
    assert count_custom_sections("") == 0
    assert count_custom_sections(BASE_MD + "\n## Email\n\nx\n\n## 25 Core Rules\n\ny") == 1


def test_ceiling_is_noop():
    doc = BASE_MD
    for i in range(CUSTOM_SECTION_LIMIT):
        doc = insert_custom_section(doc, f"Custom {i}")
    assert count_custom_sections(doc) == CUSTOM_SECTION_LIMIT

    assert insert_custom_section(doc, "One too many") == doc


def test_custom_limit_argument():
    doc = insert_custom_section(BASE_MD, "First", limit=1)
    assert count_custom_sections(doc) == 1
    assert insert_custom_section(doc, "Second", limit=1) == doc


def test_ceiling_applies_to_catalog_titles():
    doc = BASE_MD
    for i in range(CUSTOM_SECTION_LIMIT):
        doc = insert_custom_section(doc, f"Custom {i}")
    # The ceiling counts existing custom sections, whatever the new title is
    assert insert_custom_section(doc, "About Us") == doc


def test_multiline_title_inserts_one_section():
    doc = "\n\n".join(f"## Extra {i}\n\nx" for i in range(4))

    result = insert_custom_section(doc, "a\n## b\n## c\n## d\n## e\n## f")

    assert count_custom_sections(result) == 5
    assert parse_sections(result)[-1].title == "a ## b ## c ## d ## e ## f"


def test_title_whitespace_collapsed_before_truncation():
    result = insert_custom_section(BASE_MD, "Social\r\n\tMedia   " + "y" * 80)
    title = parse_sections(result)[-1].title
    assert title.startswith("Social Media y")
    assert len(title) == 60
