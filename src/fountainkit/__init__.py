"""fountainkit: normalization and structural tagging for Fountain screenplays.

fountainkit repairs mojibake, unwraps soft-wrapped lines and enforces the
blank-line conventions of the Fountain format, reads and writes the
``@location:``/``@characters:`` scene directives, and validates JSON
screenplay content produced by language models.
"""

from .ai import (
    ValidationResult,
    build_retry_prompt,
    validate_dialogue_content,
    validate_director_content,
    validate_director_modal_content,
    validate_rewrite_content,
    validate_screenplay_content,
    validate_screenwriter_content,
)
from .config import FountainKitSettings, get_logger, get_settings
from .models import ElementKind, SceneHeadingFieldInfo, SceneHeadingParts, SceneTags
from .normalizer import (
    enforce_fountain_spacing,
    fix_character_encoding,
    normalize_screenplay_text,
    normalize_whitespace,
)
from .parser import (
    build_scene_heading,
    classify,
    detect_scene_heading_field,
    format_scene_heading_type,
    parse_scene_heading,
)
from .tags import (
    extract_tags,
    inject_tags,
    match_character_names,
    match_scene_heading,
    remove_tags,
)

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    "ElementKind",
    "FountainKitSettings",
    "SceneHeadingFieldInfo",
    "SceneHeadingParts",
    "SceneTags",
    "ValidationResult",
    "__version__",
    "build_retry_prompt",
    "build_scene_heading",
    "classify",
    "detect_scene_heading_field",
    "enforce_fountain_spacing",
    "extract_tags",
    "fix_character_encoding",
    "format_scene_heading_type",
    "get_logger",
    "get_settings",
    "inject_tags",
    "match_character_names",
    "match_scene_heading",
    "normalize_screenplay_text",
    "normalize_whitespace",
    "parse_scene_heading",
    "remove_tags",
    "validate_dialogue_content",
    "validate_director_content",
    "validate_director_modal_content",
    "validate_rewrite_content",
    "validate_screenplay_content",
    "validate_screenwriter_content",
]
