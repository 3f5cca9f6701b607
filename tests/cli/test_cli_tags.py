"""Tests for the tags commands."""

import pytest


@pytest.mark.integration
class TestTagsCommands:
    """Test fountainkit tags."""

    def test_extract_json(self, cli_invoke, fixtures_dir):
        """Test scenes and directives as JSON."""
        result = cli_invoke("tags", "extract", str(fixtures_dir / "coffee_shop.fountain"), "--json")
        result.assert_success()
        scenes = result.parse_json()
        assert [s["scene_heading"] for s in scenes] == [
            "INT. COFFEE SHOP - DAY",
            "EXT. STREET - NIGHT",
            "INT. APARTMENT - CONTINUOUS",
        ]
        assert scenes[0]["characters"] == ["sarah", "john"]
        assert scenes[0]["start_line"] == 1

    def test_extract_table(self, cli_invoke, fixtures_dir):
        """Test the scene table."""
        result = cli_invoke("tags", "extract", str(fixtures_dir / "coffee_shop.fountain"))
        result.assert_success().assert_contains("Scenes", "coffee-shop", "17-24")

    def test_extract_no_scenes(self, cli_invoke):
        """Test a document without headings."""
        result = cli_invoke("tags", "extract", input="Just prose.")
        result.assert_success().assert_contains("No scene headings found")

    def test_strip(self, cli_invoke, fixtures_dir):
        """Test directives are removed."""
        result = cli_invoke("tags", "strip", str(fixtures_dir / "coffee_shop.fountain"))
        result.assert_success()
        assert "@" not in result.stdout
        assert result.stdout.startswith("INT. COFFEE SHOP - DAY\n\nSarah sits")

    def test_inject(self, cli_invoke):
        """Test directives are written under the heading."""
        result = cli_invoke(
            "tags",
            "inject",
            "--heading",
            "INT. HOUSE - DAY",
            "-c",
            "sarah",
            "-c",
            "john",
            "-l",
            "house",
            input="INT. HOUSE - DAY\n@characters: old\n\nAction.",
        )
        result.assert_success()
        assert result.stdout == (
            "INT. HOUSE - DAY\n@location: house\n@characters: sarah, john\n\nAction.\n"
        )

    def test_sync(self, cli_invoke, fixtures_dir, sample_script, tmp_path):
        """Test directives are rebuilt from a project file."""
        stripped = tmp_path / "stripped.fountain"
        stripped.write_text(
            "\n".join(line for line in sample_script.split("\n") if not line.startswith("@")),
            encoding="utf-8",
        )
        target = tmp_path / "synced.fountain"
        result = cli_invoke(
            "tags",
            "sync",
            "--project",
            str(fixtures_dir / "project.json"),
            str(stripped),
            "-o",
            str(target),
        )
        result.assert_success()
        synced = target.read_text(encoding="utf-8")
        assert "@location: coffee-shop\n@characters: sarah, john\n" in synced
        assert "@location: street\n@characters: john\n" in synced

    def test_sync_bad_project(self, cli_invoke, tmp_path):
        """Test an invalid project file is reported."""
        project = tmp_path / "project.json"
        project.write_text("{not json", encoding="utf-8")
        result = cli_invoke("tags", "sync", "-p", str(project), input="INT. A - DAY")
        result.assert_failure(exit_code=1).assert_contains("not valid JSON")

    def test_sync_wrong_shape(self, cli_invoke, tmp_path):
        """Test a project file with the wrong structure is reported."""
        project = tmp_path / "project.json"
        project.write_text('{"scenes": [{"heading": "INT. A"}]}', encoding="utf-8")
        result = cli_invoke("tags", "sync", "-p", str(project), input="INT. A - DAY")
        result.assert_failure(exit_code=1).assert_contains("unexpected shape")
