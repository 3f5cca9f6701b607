"""Tests for the AI response validators."""

import json

import pytest

from fountainkit.ai.json_validator import (
    ValidationResult,
    find_duplicate_lines,
    validate_dialogue_content,
    validate_director_content,
    validate_director_modal_content,
    validate_rewrite_content,
    validate_screenplay_content,
    validate_screenwriter_content,
)
from fountainkit.config import FountainKitSettings, set_settings


def content_response(lines, **extra):
    """Build a continuation envelope."""
    return json.dumps({"content": lines, **extra})


def scene(heading="INT. LAB - NIGHT", lines=5):
    """Build one director scene."""
    return {"heading": heading, "content": [f"Beat {i}." for i in range(1, lines + 1)]}


@pytest.mark.unit
class TestValidationResult:
    """Test the result container."""

    def test_to_dict(self):
        """Test serialization drops raw JSON."""
        result = ValidationResult(valid=False, errors=["bad"], raw_json={"a": 1})
        assert result.to_dict() == {"valid": False, "content": "", "errors": ["bad"]}

    def test_rewritten_text_alias(self):
        """Test rewrite results expose their text."""
        assert ValidationResult(valid=True, content="x").rewritten_text == "x"


@pytest.mark.unit
class TestParsingErrors:
    """Test failures shared by all validators."""

    @pytest.mark.parametrize("raw", ["", None, 42])
    def test_empty_or_not_string(self, raw):
        """Test empty and non-string input."""
        result = validate_screenplay_content(raw)
        assert not result.valid
        assert result.errors == ["Response is empty or not a string"]

    def test_unparseable(self):
        """Test invalid JSON reports the parser error and a preview."""
        result = validate_screenplay_content("not json at all")
        assert not result.valid
        assert result.errors[0].startswith("JSON parsing failed: ")
        assert result.errors[1] == "Attempted to parse: not json at all..."

    def test_malformed_envelope_with_valid_inner_object(self):
        """Test an inner object that fits the envelope does not rescue broken JSON."""
        raw = 'Sure: {"wrapper": {"content": ["He waits."], "lineCount": 1}, }'
        result = validate_screenplay_content(raw)
        assert not result.valid
        assert result.content == ""
        assert result.errors[0].startswith("JSON parsing failed: ")

    @pytest.mark.parametrize("raw", ["[1, 2]", '"text"', "3"])
    def test_not_an_object(self, raw):
        """Test arrays and primitives are rejected."""
        result = validate_rewrite_content(raw)
        assert result.errors == [
            "Response must be a JSON object, not an array or primitive"
        ]


@pytest.mark.unit
class TestValidateScreenplayContent:
    """Test continuation content validation."""

    def test_valid_with_blank_lines(self):
        """Test items are joined and internal blank entries kept."""
        raw = content_response(["Sarah waits.", "", "SARAH", "Hi."], lineCount=4)
        result = validate_screenplay_content(raw)
        assert result.valid
        assert result.errors == []
        assert result.content == "Sarah waits.\n\nSARAH\nHi."

    def test_edges_trimmed(self):
        """Test leading and trailing blank entries are trimmed."""
        result = validate_screenplay_content(content_response(["", "Action.", ""]))
        assert result.content == "Action."

    def test_fenced_response(self):
        """Test a fenced response is accepted."""
        raw = "Here:\n```json\n" + content_response(["He runs."]) + "\n```"
        assert validate_screenplay_content(raw).content == "He runs."

    def test_missing_content(self):
        """Test a missing field."""
        result = validate_screenplay_content('{"lines": ["a"]}')
        assert result.errors == ['Missing required field: "content"']

    def test_content_not_array(self):
        """Test a string instead of an array."""
        result = validate_screenplay_content('{"content": "text"}')
        assert result.errors == ['Field "content" must be an array']

    def test_empty_array(self):
        """Test an empty array."""
        result = validate_screenplay_content('{"content": []}')
        assert result.errors == ['Field "content" must have at least 1 item']

    def test_too_many_items(self):
        """Test the ten item limit."""
        result = validate_screenplay_content(content_response(["x."] * 11))
        assert not result.valid
        assert result.errors[0].startswith('Field "content" must have at most 10 items')

    def test_scene_heading_forbidden(self):
        """Test headings inside continuation content."""
        raw = content_response(["Action.", "INT. HOUSE - DAY", "# EXT. YARD"])
        result = validate_screenplay_content(raw)
        assert result.errors == [
            "Content item 1 contains a scene heading (forbidden)",
            "Content item 2 contains a scene heading (forbidden)",
        ]

    def test_non_string_item(self):
        """Test items must be strings."""
        result = validate_screenplay_content(content_response([1, "ok"]))
        assert result.errors == ["Content item 0 must be a string"]

    def test_line_count_mismatch(self):
        """Test lineCount must match the array length."""
        result = validate_screenplay_content(content_response(["a", "b"], lineCount=3))
        assert result.errors == [
            'Field "lineCount" (3) does not match content.length (2)'
        ]

    @pytest.mark.parametrize("count", ["2", True])
    def test_line_count_not_number(self, count):
        """Test lineCount must be numeric."""
        result = validate_screenplay_content(content_response(["a", "b"], lineCount=count))
        assert result.errors == ['Field "lineCount" must be a number']

    def test_collects_every_violation(self):
        """Test all errors are reported together."""
        raw = content_response(["INT. HOUSE - DAY"] * 11, lineCount=3)
        result = validate_screenplay_content(raw)
        assert len(result.errors) == 2
        assert "lineCount" in result.errors[1]

    def test_duplicate_of_context(self):
        """Test long lines repeating the context are flagged."""
        context = "INT. HOUSE - DAY\n\nSarah walks into the kitchen slowly.\nHi."
        raw = content_response(
            ["sarah   walks into the KITCHEN slowly.", "Hi.", "Something new happens here."]
        )
        result = validate_screenplay_content(raw, context)
        assert result.errors == [
            "Content item 0 is a duplicate of content before cursor"
        ]

    def test_substring_is_not_duplicate(self):
        """Test containment alone does not count as a duplicate."""
        context = "Sarah walks into the kitchen slowly."
        raw = content_response(["Sarah walks into the kitchen slowly and sits."])
        assert validate_screenplay_content(raw, context).valid

    def test_screenwriter_alias(self):
        """Test the screenwriter validator shares the envelope."""
        result = validate_screenwriter_content(content_response(["Go."]))
        assert result.valid
        assert result.content == "Go."


@pytest.mark.unit
class TestValidateDirectorContent:
    """Test director content validation."""

    @pytest.mark.parametrize(
        ("length", "scene_count", "limit"),
        [("short", None, 15), ("full", None, 50), ("multiple", 2, 100)],
    )
    def test_length_limits(self, length, scene_count, limit):
        """Test the item limit for each generation length."""
        ok = validate_director_content(
            content_response(["x."] * limit), None, length, scene_count
        )
        assert ok.valid
        too_long = validate_director_content(
            content_response(["x."] * (limit + 1)), None, length, scene_count
        )
        assert too_long.errors == [
            f'Field "content" must have at most {limit} items (got {limit + 1})'
        ]

    def test_multiple_uses_configured_scene_count(self):
        """Test the default scene count comes from settings."""
        set_settings(FountainKitSettings(default_scene_count=1, _env_file=None))
        result = validate_director_content(
            content_response(["x."] * 51), generation_length="multiple"
        )
        assert not result.valid

    def test_headings_allowed(self):
        """Test directors may open new scenes."""
        raw = content_response(["INT. HOUSE - DAY", "", "John enters."])
        result = validate_director_content(raw)
        assert result.valid
        assert result.content == "INT. HOUSE - DAY\n\nJohn enters."

    def test_duplicate_heading_location(self):
        """Test a heading repeating a location already written is rejected."""
        context = "INT. HOUSE - DAY\nAction here."
        raw = content_response(["INT. HOUSE - NIGHT", "New action."])
        result = validate_director_content(raw, context)
        assert result.errors == [
            "Content item 0 is a duplicate scene heading from content before cursor"
        ]

    def test_duplicate_heading_without_time(self):
        """Test identical headings without a time are duplicates."""
        raw = content_response(["INT. HOUSE", "New action."])
        assert not validate_director_content(raw, "int. house").valid

    def test_new_location_accepted(self):
        """Test a heading for a new location passes."""
        raw = content_response(["EXT. GARDEN - DAY", "New action."])
        assert validate_director_content(raw, "INT. HOUSE - DAY").valid


@pytest.mark.unit
class TestValidateRewriteContent:
    """Test rewrite validation."""

    def test_valid(self):
        """Test leading whitespace is removed and the rest kept."""
        result = validate_rewrite_content('{"rewrittenText": "  \\nNew text.\\n"}')
        assert result.valid
        assert result.rewritten_text == "New text.\n"

    @pytest.mark.parametrize(
        ("payload", "error"),
        [
            ("{}", 'Missing required field: "rewrittenText"'),
            ('{"rewrittenText": ""}', 'Missing required field: "rewrittenText"'),
            ('{"rewrittenText": 5}', 'Field "rewrittenText" must be a string'),
            ('{"rewrittenText": "   "}', 'Field "rewrittenText" cannot be empty'),
        ],
    )
    def test_invalid(self, payload, error):
        """Test each rewrite violation."""
        assert validate_rewrite_content(payload).errors == [error]


@pytest.mark.unit
class TestValidateDirectorModalContent:
    """Test multi-scene director validation."""

    def test_single_scene(self):
        """Test one scene renders as heading, blank line, content."""
        raw = json.dumps({"scenes": [scene(lines=5)], "totalLines": 5})
        result = validate_director_modal_content(raw)
        assert result.valid
        assert result.content == (
            "INT. LAB - NIGHT\n\nBeat 1.\nBeat 2.\nBeat 3.\nBeat 4.\nBeat 5."
        )

    def test_scenes_separated_by_blank_line(self):
        """Test multiple scenes are joined with a blank line."""
        raw = json.dumps({"scenes": [scene(), scene("EXT. ROOF - DAY")]})
        result = validate_director_modal_content(raw, expected_scene_count=2)
        assert result.valid
        assert "Beat 5.\n\nEXT. ROOF - DAY\n\nBeat 1." in result.content

    def test_scene_count_must_match(self):
        """Test the number of scenes must equal the requested count."""
        raw = json.dumps({"scenes": [scene(), scene("EXT. ROOF - DAY")]})
        result = validate_director_modal_content(raw, expected_scene_count=1)
        assert result.errors == ["Expected 1 scene(s), got 2"]

    def test_at_most_three_scenes(self):
        """Test the scene limit."""
        raw = json.dumps({"scenes": [scene()] * 4})
        result = validate_director_modal_content(raw, expected_scene_count=4)
        assert result.errors == ['Field "scenes" must have at most 3 scenes']

    def test_missing_scenes(self):
        """Test a missing scenes array."""
        result = validate_director_modal_content('{"content": []}')
        assert result.errors == ['Missing required field: "scenes"']

    def test_scene_violations(self):
        """Test heading and content checks inside a scene."""
        raw = json.dumps(
            {
                "scenes": [
                    {"heading": "THE LAB", "content": ["One.", "Two."]},
                ]
            }
        )
        result = validate_director_modal_content(raw)
        assert result.errors == [
            "Scene 1: Heading must start with INT./EXT./I/E.",
            "Scene 1: Content must have at least 5 lines",
        ]

    def test_synopses_and_act_breaks(self):
        """Test synopsis and act break lines are rejected."""
        bad = scene()
        bad["content"][1] = "= The plan forms"
        bad["content"][3] = "# ACT TWO"
        result = validate_director_modal_content(json.dumps({"scenes": [bad]}))
        assert result.errors == [
            "Scene 1, line 2: Synopses (lines starting with =) are not allowed "
            "in scene content",
            "Scene 1, line 4: Act breaks (lines starting with #) are not allowed "
            "in scene content",
        ]

    def test_total_lines_mismatch_is_not_an_error(self):
        """Test a wrong totalLines is tolerated."""
        raw = json.dumps({"scenes": [scene()], "totalLines": 99})
        assert validate_director_modal_content(raw).valid

    def test_duplicate_heading(self):
        """Test a scene repeating a heading in the context is rejected."""
        raw = json.dumps({"scenes": [scene("INT. LAB - DAY")]})
        result = validate_director_modal_content(raw, "INT. LAB - NIGHT\nStuff.")
        assert result.errors == [
            "Scene 1: Scene heading is a duplicate of content before cursor"
        ]


@pytest.mark.unit
class TestValidateDialogueContent:
    """Test dialogue validation."""

    def test_valid(self):
        """Test exchanges render as Fountain dialogue blocks."""
        raw = json.dumps(
            {
                "dialogue": [
                    {"character": "SARAH", "line": "Hi.", "subtext": " nervous "},
                    {"character": "JOHN", "line": "Hey.", "subtext": ""},
                ],
                "breakdown": "They meet.",
            }
        )
        result = validate_dialogue_content(raw)
        assert result.valid
        assert result.content == "SARAH\n(nervous)\nHi.\n\nJOHN\nHey."

    def test_exchange_violations(self):
        """Test field checks inside an exchange."""
        raw = json.dumps(
            {
                "dialogue": [
                    {"character": "Sarah", "line": "   "},
                    {"line": "Hey.", "subtext": 3},
                    "oops",
                ]
            }
        )
        result = validate_dialogue_content(raw)
        assert result.errors == [
            "Dialogue exchange 1: Character name must be in ALL CAPS",
            'Dialogue exchange 1: Field "line" cannot be empty',
            'Dialogue exchange 2: Missing required field "character"',
            'Dialogue exchange 2: Field "subtext" must be a string',
            "Dialogue exchange 3 must be an object",
        ]

    def test_breakdown_must_be_string(self):
        """Test the optional breakdown field type."""
        raw = json.dumps(
            {"dialogue": [{"character": "A", "line": "B"}], "breakdown": ["x"]}
        )
        assert validate_dialogue_content(raw).errors == [
            'Field "breakdown" must be a string'
        ]

    def test_empty_dialogue(self):
        """Test an empty exchange list."""
        assert validate_dialogue_content('{"dialogue": []}').errors == [
            'Field "dialogue" must have at least 1 exchange'
        ]


@pytest.mark.unit
class TestFindDuplicateLines:
    """Test duplicate detection."""

    def test_normalized_exact_match(self):
        """Test case and whitespace are ignored."""
        context = "The rain   falls on the empty street."
        items = ["the rain falls on the EMPTY street.", "A new line entirely here."]
        assert find_duplicate_lines(items, context) == [0]

    def test_short_lines_ignored(self):
        """Test lines under the minimum length never count."""
        assert find_duplicate_lines(["Yes."], "Yes.") == []

    def test_min_length_override(self):
        """Test the minimum length can be lowered."""
        assert find_duplicate_lines(["Yes."], "Yes.", min_length=2) == [0]

    def test_non_strings_skipped(self):
        """Test non-string items are ignored."""
        assert find_duplicate_lines([None, 5], "anything at all here") == []
