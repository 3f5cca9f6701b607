"""Tests for Fountain formatting issue detection."""

import pytest

from fountainkit.models import FormatIssue, FormatReport
from fountainkit.normalizer.format_validator import (
    canonical_scene_heading,
    get_issue_summary,
    line_kinds,
    validate_fountain_content,
)


def only_issue(content):
    """Validate and return the single issue found."""
    issues = validate_fountain_content(content).issues
    assert len(issues) == 1, issues
    return issues[0]


@pytest.mark.unit
class TestCanonicalSceneHeading:
    """Test canonical_scene_heading."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("int. kitchen - night", "INT. KITCHEN - NIGHT"),
            ("INT. KITCHEN", "INT. KITCHEN - DAY"),
            ("ext yard - dusk", "EXT. YARD - DUSK"),
            ("i/e car", "I./E. CAR - DAY"),
            ("INT. KITCHEN - NIGHT", "INT. KITCHEN - NIGHT"),
            ("INT.", "INT."),
        ],
    )
    def test_canonical(self, line, expected):
        """Test headings are uppercased and completed."""
        assert canonical_scene_heading(line) == expected


@pytest.mark.unit
class TestValidateFountainContent:
    """Test validate_fountain_content."""

    def test_clean_script(self, sample_script):
        """Test a well formatted script has no issues."""
        report = validate_fountain_content(sample_script)
        assert report.is_valid
        assert not report.has_auto_fixable_issues

    def test_colon_dialogue(self):
        """Test NAME: line dialogue is split into cue and line."""
        issue = only_issue("INT. CAFE - DAY\n\nJohn: Hello there.\n")
        assert issue == FormatIssue(
            line_number=3,
            severity="warning",
            type="character",
            description=(
                'Character name "John" uses colon format. '
                "Put the name on its own line in ALL CAPS."
            ),
            original_text="John: Hello there.",
            suggested_fix="JOHN\nHello there.",
        )

    def test_colon_transition_ignored(self):
        """Test a transition with text after the colon is not dialogue."""
        assert validate_fountain_content("He exits.\n\nCUT TO: BLACK").is_valid

    def test_lowercase_heading(self):
        """Test lowercase headings are flagged with the uppercase form."""
        issue = only_issue("int. kitchen - night")
        assert (issue.line_number, issue.severity, issue.type) == (1, "warning", "scene_heading")
        assert issue.suggested_fix == "INT. KITCHEN - NIGHT"

    def test_heading_without_time(self):
        """Test a heading without a time of day gets DAY suggested."""
        issue = only_issue("INT. KITCHEN")
        assert issue.severity == "info"
        assert issue.description == "Scene heading missing time of day."
        assert issue.suggested_fix == "INT. KITCHEN - DAY"

    def test_dash_dialogue(self):
        """Test NAME - line dialogue is flagged."""
        issue = only_issue("He ducks.\n\nJOHN - Get down!")
        assert (issue.line_number, issue.type) == (3, "dialogue")
        assert issue.suggested_fix == "JOHN\nGet down!"

    def test_quoted_dialogue(self):
        """Test prose dialogue becomes a cue and a line."""
        issue = only_issue('He ducks.\n\n"Run," says Mary')
        assert issue.type == "dialogue"
        assert issue.suggested_fix == "MARY\nRun"

    def test_title_case_cue(self):
        """Test a title-case name above a line of dialogue is flagged."""
        issue = only_issue("She turns.\n\nSarah\nWhere were you?")
        assert (issue.line_number, issue.type) == (3, "character")
        assert issue.suggested_fix == "SARAH"

    def test_bare_location(self):
        """Test a stand-alone location gets a heading suggested."""
        issue = only_issue("He waits.\n\nCoffee Shop\n\nShe enters.")
        assert (issue.line_number, issue.severity, issue.type) == (3, "info", "scene_heading")
        assert issue.suggested_fix == "INT. COFFEE SHOP - DAY"

    def test_spacing(self):
        """Test missing blank lines after a heading and before a cue."""
        issues = validate_fountain_content(
            "INT. HOUSE - DAY\nJohn enters.\nJOHN\nHello."
        ).issues
        assert [(i.line_number, i.type, i.suggested_fix) for i in issues] == [
            (1, "spacing", "INT. HOUSE - DAY\n"),
            (2, "spacing", "John enters.\n"),
        ]
        assert issues[0].description == "Scene heading should be followed by a blank line."
        assert issues[1].description == "Character name should be preceded by a blank line."

    def test_directives_skipped(self):
        """Test directive lines under a heading are not spacing problems."""
        assert validate_fountain_content(
            "INT. HOUSE - DAY\n@location: house\n\nJohn enters."
        ).is_valid

    def test_dialogue_not_reinterpreted(self):
        """Test a colon inside dialogue is left alone."""
        assert validate_fountain_content("JOHN\nListen: we go now.").is_valid

    def test_empty(self):
        """Test empty text has no issues."""
        assert validate_fountain_content("").is_valid


@pytest.mark.unit
class TestFormatReport:
    """Test report helpers."""

    def test_summary_counts_every_type(self):
        """Test the summary lists all types, including unused ones."""
        issues = validate_fountain_content("INT. HOUSE - DAY\nJohn enters.\nJOHN\nHello.").issues
        assert get_issue_summary(issues) == {
            "character": 0,
            "scene_heading": 0,
            "dialogue": 0,
            "spacing": 2,
            "general": 0,
        }

    def test_empty_report(self):
        """Test an empty report is valid and has nothing to fix."""
        report = FormatReport()
        assert report.is_valid
        assert not report.has_auto_fixable_issues

    def test_to_dict(self):
        """Test serialization includes the computed flags."""
        data = validate_fountain_content("int. kitchen - night").to_dict()
        assert data["is_valid"] is False
        assert data["has_auto_fixable_issues"] is True
        assert data["issues"][0]["suggested_fix"] == "INT. KITCHEN - NIGHT"


@pytest.mark.unit
class TestLineKinds:
    """Test line_kinds."""

    def test_kinds(self):
        """Test blank and directive lines have no kind."""
        lines = ["INT. HOUSE - DAY", "@location: house", "", "JOHN", "Hello."]
        kinds = [kind.value if kind else None for kind in line_kinds(lines)]
        assert kinds == ["scene_heading", None, None, "character", "dialogue"]
