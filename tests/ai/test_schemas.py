"""Tests for response envelope schemas."""

import pytest

from fountainkit.ai.schemas import (
    SCHEMAS,
    build_response_format,
    get_schema,
    supports_structured_outputs,
    validate_against_schema,
)
from fountainkit.config import FountainKitSettings, set_settings
from fountainkit.exceptions import ValidationError


@pytest.mark.unit
class TestSchemas:
    """Test schema lookup and response_format payloads."""

    @pytest.mark.parametrize("kind", sorted(SCHEMAS))
    def test_response_format(self, kind):
        """Test every envelope builds a valid response_format."""
        response_format = build_response_format(kind)
        assert response_format["type"] == "json_schema"
        assert response_format["json_schema"]["name"] == f"screenplay_{kind}"
        assert response_format["json_schema"]["schema"] == SCHEMAS[kind]

    def test_max_items_override(self):
        """Test the content limit can be raised for long generations."""
        response_format = build_response_format("director", max_items=150)
        schema = response_format["json_schema"]["schema"]
        assert schema["properties"]["content"]["maxItems"] == 150
        assert SCHEMAS["director"]["properties"]["content"]["maxItems"] == 50

    @pytest.mark.parametrize(
        ("length", "scene_count", "limit"),
        [("short", None, 15), ("full", None, 50), ("multiple", 2, 100)],
    )
    def test_director_limit_follows_length(self, length, scene_count, limit):
        """Test the director item limit matches the validator's limit."""
        schema = get_schema("director", generation_length=length, scene_count=scene_count)
        assert schema["properties"]["content"]["maxItems"] == limit

    def test_director_multiple_uses_configured_scene_count(self):
        """Test multiple-scene limits default to the configured scene count."""
        set_settings(FountainKitSettings(_env_file=None, default_scene_count=2))
        response_format = build_response_format("director", generation_length="multiple")
        schema = response_format["json_schema"]["schema"]
        assert schema["properties"]["content"]["maxItems"] == 100

    def test_custom_name(self):
        """Test the schema name can be chosen by the caller."""
        response_format = build_response_format("rewrite", name="rewrite_v2")
        assert response_format["json_schema"]["name"] == "rewrite_v2"

    def test_unknown_kind(self):
        """Test unknown envelopes raise with a hint."""
        with pytest.raises(ValidationError) as exc_info:
            get_schema("poem")
        assert "Unknown response schema: poem" in str(exc_info.value)
        assert exc_info.value.hint


@pytest.mark.unit
class TestValidateAgainstSchema:
    """Test structural checks with jsonschema."""

    def test_conforming_payload(self):
        """Test a valid payload has no errors."""
        assert validate_against_schema({"content": ["a"], "lineCount": 1}, "content") == []

    def test_missing_required(self):
        """Test a missing property is reported at the root."""
        errors = validate_against_schema({}, "rewrite")
        assert errors == ["(root): 'rewrittenText' is a required property"]

    def test_nested_location(self):
        """Test nested errors carry their path."""
        payload = {"dialogue": [{"character": "A", "line": 5}]}
        errors = validate_against_schema(payload, "dialogue")
        assert len(errors) == 1
        assert errors[0].startswith("dialogue/0/line: ")


@pytest.mark.unit
class TestSupportsStructuredOutputs:
    """Test model capability detection."""

    @pytest.mark.parametrize(
        "model_id",
        [
            "claude-3-5-sonnet-20241022",
            "anthropic/claude-sonnet-4",
            "claude-opus-4-1",
            "gpt-4o-2024-08-06",
            "GPT-5",
            "o1-preview",
            "o3-mini",
            "gpt-4-turbo",
            "google/gemini-2.5-pro",
            "gemini-2.0-flash",
        ],
    )
    def test_supported(self, model_id):
        """Test models that accept response_format."""
        assert supports_structured_outputs(model_id)

    @pytest.mark.parametrize(
        "model_id",
        ["claude-haiku-4-5", "claude-3-haiku-20240307", "llama-3-70b", "", None],
    )
    def test_unsupported(self, model_id):
        """Test models that need prompt-only JSON."""
        assert not supports_structured_outputs(model_id)
