"""JSON Schema documents for the AI response envelopes.

The schemas mirror the structural part of the validators in
``json_validator``. They are handed to providers that accept a
``response_format`` so the model is constrained up front; the validators
still run afterwards because bounds such as duplicate detection cannot be
expressed as schema.
"""

from __future__ import annotations

import copy
from typing import Any, Literal

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError

from fountainkit.ai.json_validator import GenerationLength, director_max_lines
from fountainkit.config import get_settings
from fountainkit.exceptions import ValidationError

EnvelopeKind = Literal["content", "director", "rewrite", "scenes", "dialogue"]

_STRING_ARRAY = {"type": "array", "items": {"type": "string"}}

CONTENT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "content": {**_STRING_ARRAY, "minItems": 1, "maxItems": 10},
        "lineCount": {"type": "integer"},
    },
    "required": ["content"],
}

DIRECTOR_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "content": {**_STRING_ARRAY, "minItems": 1, "maxItems": 50},
        "lineCount": {"type": "integer"},
    },
    "required": ["content"],
}

REWRITE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {"rewrittenText": {"type": "string", "minLength": 1}},
    "required": ["rewrittenText"],
}

SCENES_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "scenes": {
            "type": "array",
            "minItems": 1,
            "maxItems": 3,
            "items": {
                "type": "object",
                "properties": {
                    "heading": {"type": "string", "minLength": 1},
                    "content": {**_STRING_ARRAY, "minItems": 5, "maxItems": 50},
                },
                "required": ["heading", "content"],
            },
        },
        "totalLines": {"type": "integer"},
    },
    "required": ["scenes"],
}

DIALOGUE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "dialogue": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "properties": {
                    "character": {"type": "string", "minLength": 1},
                    "line": {"type": "string", "minLength": 1},
                    "subtext": {"type": "string"},
                },
                "required": ["character", "line"],
            },
        },
        "breakdown": {"type": "string"},
    },
    "required": ["dialogue"],
}

SCHEMAS: dict[str, dict[str, Any]] = {
    "content": CONTENT_SCHEMA,
    "director": DIRECTOR_SCHEMA,
    "rewrite": REWRITE_SCHEMA,
    "scenes": SCENES_SCHEMA,
    "dialogue": DIALOGUE_SCHEMA,
}


def get_schema(
    kind: str,
    max_items: int | None = None,
    *,
    generation_length: GenerationLength = "full",
    scene_count: int | None = None,
) -> dict[str, Any]:
    """Return a copy of the schema for ``kind``.

    The director ``content`` limit follows ``generation_length`` the same
    way ``validate_director_content`` does, unless ``max_items`` is given.

    Args:
        kind: Envelope name, one of ``SCHEMAS``
        max_items: Explicit override for the ``content`` item limit
        generation_length: Director generation length
        scene_count: Scenes for ``multiple``; defaults to the configured count

    Raises:
        ValidationError: If the kind is unknown
    """
    if kind not in SCHEMAS:
        raise ValidationError(
            message=f"Unknown response schema: {kind}",
            hint=f"Use one of: {', '.join(SCHEMAS)}",
        )
    schema = copy.deepcopy(SCHEMAS[kind])
    if max_items is None and kind == "director":
        if scene_count is None:
            scene_count = get_settings().default_scene_count
        max_items = director_max_lines(generation_length, scene_count)
    if max_items is not None and "content" in schema["properties"]:
        schema["properties"]["content"]["maxItems"] = max_items
    return schema


def build_response_format(
    kind: str,
    *,
    name: str | None = None,
    max_items: int | None = None,
    generation_length: GenerationLength = "full",
    scene_count: int | None = None,
) -> dict[str, Any]:
    """Build a ``response_format`` payload for providers with structured outputs."""
    schema = get_schema(
        kind,
        max_items=max_items,
        generation_length=generation_length,
        scene_count=scene_count,
    )
    try:
        Draft202012Validator.check_schema(schema)
    except SchemaError as e:
        raise ValidationError(
            message=f"Invalid response schema for {kind}: {e.message}",
        ) from e
    return {
        "type": "json_schema",
        "json_schema": {
            "name": name or f"screenplay_{kind}",
            "strict": False,
            "schema": schema,
        },
    }


def validate_against_schema(payload: Any, kind: str) -> list[str]:
    """Return schema violations for ``payload``, empty when it conforms."""
    validator = Draft202012Validator(get_schema(kind))
    errors = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: list(e.path)):
        location = "/".join(str(part) for part in error.path) or "(root)"
        errors.append(f"{location}: {error.message}")
    return errors


def supports_structured_outputs(model_id: str | None) -> bool:
    """Whether a model accepts a JSON Schema ``response_format``.

    Haiku models are excluded; they fall back to prompt-only JSON.
    """
    if not model_id:
        return False
    model = model_id.lower()

    if any(
        name in model
        for name in (
            "claude-3-5",
            "claude-sonnet-4",
            "claude-opus-4",
            "claude-3-opus",
            "claude-3-sonnet",
        )
    ):
        return True
    if "claude-haiku-4" in model or "claude-3-haiku" in model:
        return False
    if (
        "gpt-4o" in model
        or "gpt-5" in model
        or model.startswith(("o1", "o3"))
        or "gpt-4-turbo" in model
    ):
        return True
    return any(name in model for name in ("gemini-2.5", "gemini-3", "gemini-2.0"))
