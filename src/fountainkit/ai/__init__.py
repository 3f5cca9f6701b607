"""Validation of AI-generated screenplay JSON."""

from fountainkit.ai.extraction import extract_json_payload
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
from fountainkit.ai.retry import build_retry_prompt, generate_with_validation
from fountainkit.ai.schemas import (
    build_response_format,
    supports_structured_outputs,
    validate_against_schema,
)

__all__ = [
    "ValidationResult",
    "build_response_format",
    "build_retry_prompt",
    "extract_json_payload",
    "find_duplicate_lines",
    "generate_with_validation",
    "supports_structured_outputs",
    "validate_against_schema",
    "validate_dialogue_content",
    "validate_director_content",
    "validate_director_modal_content",
    "validate_rewrite_content",
    "validate_screenplay_content",
    "validate_screenwriter_content",
]
