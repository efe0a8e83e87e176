"""Tests for reading and replacing single sections."""

import pytest

from brandguide.core.section_access import (
    get_section,
    replace_section,
    section_spans,
    splice_section,
)
from brandguide.core.section_parser import UNSECTIONED_ID, parse_sections

SCENARIO_MD = """## About Brand

This is about the brand.

## Brand Voice

Voice traits here."""

THREE_SECTIONS_MD = """## About Brand

About body.
  (indented line kept)

## Brand Voice

Old voice.

## Style Rules


Rules body with odd spacing.
"""


class TestGetSection:
    def test_returns_heading_and_body(self):
        assert get_section(SCENARIO_MD, "brand-voice") == "## Brand Voice\n\nVoice traits here."
        assert get_section(SCENARIO_MD, "about") == "## About Brand\n\nThis is about the brand."

    def test_h1_section_rendered_as_h2(self):
        assert get_section("# Intro\n\nHello", "intro") == "## Intro\n\nHello"

    def test_unknown_id(self):
        assert get_section(SCENARIO_MD, "unknown") == ""

    def test_empty_document(self):
        assert get_section("", "about") == ""

    def test_empty_id(self):
        assert get_section(SCENARIO_MD, "") == ""

    def test_document_without_headings(self):
        assert get_section("Plain text.", UNSECTIONED_ID) == "## Style Guide\n\nPlain text."


class TestReplaceSection:
    def test_scenario_replace_first_section(self):
        result = replace_section(SCENARIO_MD, "about", "## About Brand\n\nUpdated.")
        parsed = parse_sections(result)

        assert [(s.id, s.content) for s in parsed] == [
            ("about", "Updated."),
            ("brand-voice", "Voice traits here."),
        ]

    @pytest.mark.parametrize(
        "md",
        [SCENARIO_MD, THREE_SECTIONS_MD, "", "No headings here.", "## ---\n\nx"],
    )
    def test_unknown_id_is_noop(self, md):
        assert replace_section(md, "nonexistent-id", "## X\n\nY") == md

    def test_empty_id_is_noop(self):
        assert replace_section(SCENARIO_MD, "", "## X\n\nY") == SCENARIO_MD

    def test_replacing_middle_preserves_neighbours_verbatim(self):
        result = replace_section(THREE_SECTIONS_MD, "brand-voice", "## Brand Voice\n\nNew voice.")

        # Bytes before the replaced span are untouched
        head = THREE_SECTIONS_MD[: THREE_SECTIONS_MD.index("## Brand Voice")]
        assert result.startswith(head)
        # Bytes after the replaced span are untouched
        tail = THREE_SECTIONS_MD[THREE_SECTIONS_MD.index("## Style Rules"):]
        assert result.endswith(tail)

        parsed = parse_sections(result)
        original = parse_sections(THREE_SECTIONS_MD)
        assert [s.id for s in parsed] == ["about", "brand-voice", "style-rules"]
        assert parsed[0].content == original[0].content
        assert parsed[1].content == "New voice."
        assert parsed[2].content == original[2].content

    def test_replacing_last_section(self):
        result = replace_section(SCENARIO_MD, "brand-voice", "\n\n## Brand Voice\n\nLast.\n\n")
        assert result == "## About Brand\n\nThis is about the brand.\n\n## Brand Voice\n\nLast."

    def test_new_markdown_is_stripped(self):
        result = replace_section(SCENARIO_MD, "about", "   ## About Brand\n\nX   \n\n")
        assert result.startswith("## About Brand\n\nX\n\n## Brand Voice")

    def test_document_without_headings_replaced_wholesale(self):
        result = replace_section("Old plain text.", UNSECTIONED_ID, "  ## Intro\n\nNew.  ")
        assert result == "## Intro\n\nNew."

    def test_preamble_before_first_heading_kept(self):
        md = "Preamble.\n\n## About\n\nOld."
        assert replace_section(md, "about", "## About\n\nNew.") == "Preamble.\n\n## About\n\nNew."

    def test_does_not_mutate_input(self):
        original = str(SCENARIO_MD)
        replace_section(SCENARIO_MD, "about", "## About Brand\n\nUpdated.")
        assert SCENARIO_MD == original

    def test_duplicate_heading_targets_right_span(self):
        md = "## Notes\n\nfirst\n\n## Notes\n\nsecond"
        result = replace_section(md, "notes-1", "## Notes\n\nchanged")
        assert result == "## Notes\n\nfirst\n\n## Notes\n\nchanged"


class TestSectionSpans:
    def test_spans_cover_heading_to_next_heading(self):
        spans = section_spans(SCENARIO_MD)
        start, end = spans["about"]
        assert SCENARIO_MD[start:end] == "## About Brand\n\nThis is about the brand.\n\n"
        assert spans["brand-voice"][1] == len(SCENARIO_MD)

    def test_no_headings_spans_whole_document(self):
        assert section_spans("Plain text.") == {UNSECTIONED_ID: (0, 11)}

    def test_empty_document(self):
        assert section_spans("") == {}
        assert section_spans("  \n ") == {}

    def test_splice_section(self):
        assert splice_section("## A\n\na\n\n## B\n\nb", 0, 9, " ## A\n\nz ") == "## A\n\nz\n\n## B\n\nb"
