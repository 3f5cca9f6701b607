"""Text normalization for Fountain screenplays."""

from fountainkit.normalizer.corrector import (
    correct_fountain_content,
    normalize_character_names,
    quick_correct,
    smart_format,
)
from fountainkit.normalizer.encoding import (
    detect_encoding_issues,
    fix_character_encoding,
)
from fountainkit.normalizer.format_validator import (
    get_issue_summary,
    validate_fountain_content,
)
from fountainkit.normalizer.pipeline import normalize_screenplay_text
from fountainkit.normalizer.spacing import (
    enforce_fountain_spacing,
    format_fountain_spacing,
)
from fountainkit.normalizer.whitespace import normalize_whitespace

__all__ = [
    "correct_fountain_content",
    "detect_encoding_issues",
    "enforce_fountain_spacing",
    "fix_character_encoding",
    "format_fountain_spacing",
    "get_issue_summary",
    "normalize_character_names",
    "normalize_screenplay_text",
    "normalize_whitespace",
    "quick_correct",
    "smart_format",
    "validate_fountain_content",
]
