"""Tests for whole-document scanning."""

import pytest

from fountainkit.parser.document import (
    count_words,
    estimate_page_count,
    format_character_name,
    format_location_name,
    get_character_count,
    get_current_scene_characters,
    get_current_scene_context,
    get_current_scene_heading,
    get_visible_line_number,
    parse_content_for_import,
    should_auto_import,
    split_scenes,
)

SCRIPT = (
    "INT. HOUSE - DAY\n"
    "@location: house\n"
    "SARAH\n"
    "Hello there.\n"
    "Sarah walks to the window slowly.\n"
    "\n"
    "EXT. YARD - NIGHT\n"
    "BOB\n"
    "Hi.\n"
)


@pytest.mark.unit
class TestSplitScenes:
    """Test split_scenes."""

    def test_blocks(self):
        """Test blocks run from heading to the line before the next heading."""
        blocks = split_scenes(SCRIPT)
        assert [b.heading for b in blocks] == ["INT. HOUSE - DAY", "EXT. YARD - NIGHT"]
        assert (blocks[0].start_index, blocks[0].end_index) == (0, 5)
        assert (blocks[1].start_index, blocks[1].end_index) == (6, 9)
        assert blocks[0].lines == [
            "SARAH",
            "Hello there.",
            "Sarah walks to the window slowly.",
            "",
        ]

    def test_text_before_first_heading(self):
        """Test a preamble belongs to no scene."""
        assert split_scenes("FADE IN:\nJust prose.") == []


@pytest.mark.unit
class TestCursorContext:
    """Test the cursor-relative scene helpers."""

    def test_heading_at_cursor(self):
        """Test the closest heading above the cursor is found."""
        assert get_current_scene_heading(SCRIPT, len(SCRIPT)) == "EXT. YARD - NIGHT"
        assert get_current_scene_heading(SCRIPT, SCRIPT.index("EXT.")) == "INT. HOUSE - DAY"
        assert get_current_scene_heading("Just text", 4) is None

    def test_characters_at_cursor(self):
        """Test speakers between the heading and the cursor."""
        assert get_current_scene_characters(SCRIPT, SCRIPT.index("EXT.")) == ["SARAH"]
        assert get_current_scene_characters(SCRIPT, len(SCRIPT)) == ["BOB"]
        assert get_current_scene_characters("Just text", 4) == []

    def test_context(self):
        """Test heading, speakers and story beats are bundled."""
        context = get_current_scene_context(SCRIPT, SCRIPT.index("EXT."))
        assert context.scene_heading == "INT. HOUSE - DAY"
        assert context.characters == ["SARAH"]
        assert context.story_beats == ["Sarah walks to the window slowly."]

    def test_visible_line_number(self):
        """Test directive lines are not counted."""
        assert get_visible_line_number(SCRIPT, SCRIPT.index("SARAH")) == 2
        assert get_visible_line_number(SCRIPT, 0) == 1


@pytest.mark.unit
class TestImport:
    """Test paste import scanning."""

    PASTED = (
        "INT. HOUSE - DAY\n"
        "SARAH\n"
        "Hello.\n"
        "\n"
        "EXT. YARD - NIGHT\n"
        "BOB: Hi there.\n"
        "\n"
        "INT. HOUSE - NIGHT\n"
        "SARAH\n"
        "Back again.\n"
    )

    def test_should_auto_import(self):
        """Test any scene heading triggers an import."""
        assert should_auto_import("FADE IN:\nINT. HOUSE - DAY")
        assert not should_auto_import("Just some words.")

    def test_parse_content_for_import(self):
        """Test locations, characters and scenes are collected once each."""
        summary = parse_content_for_import(self.PASTED)
        assert summary.locations == ["HOUSE", "YARD"]
        assert summary.characters == ["SARAH", "BOB"]
        assert [s.characters for s in summary.scenes] == [["SARAH"], ["BOB"], ["SARAH"]]
        assert [(s.start_line, s.end_line) for s in summary.scenes] == [
            (0, 3),
            (4, 6),
            (7, 10),
        ]
        assert summary.scenes[1].location == "YARD"

    def test_name_formatting(self):
        """Test location and character display helpers."""
        assert format_location_name("coffee shop - day") == "COFFEE SHOP"
        assert format_location_name("Kitchen") == "KITCHEN"
        assert format_character_name("MARY ANN") == "Mary Ann"


@pytest.mark.unit
class TestDocumentStats:
    """Test page, word and character counts."""

    @pytest.mark.parametrize(("lines", "pages"), [(1, 1), (55, 1), (56, 2), (111, 3)])
    def test_page_count(self, lines, pages):
        """Test pages are estimated at 55 lines each."""
        assert estimate_page_count("\n".join(["x"] * lines)) == pages

    def test_empty_text_is_one_page(self):
        """Test an empty document still counts as a page."""
        assert estimate_page_count("") == 1

    def test_word_count(self):
        """Test words are split on any whitespace."""
        assert count_words("  Hello   there\nfriend ") == 3
        assert count_words("") == 0

    def test_character_count(self):
        """Test counts with and without whitespace."""
        counts = get_character_count("INT. CAFE - DAY\n\nJohn waits.")
        assert (counts.with_spaces, counts.without_spaces) == (28, 22)
