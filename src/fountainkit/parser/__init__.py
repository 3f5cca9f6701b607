"""Fountain line classification, scene headings and document scanning."""

from fountainkit.parser.elements import (
    classify,
    clean_character_name,
    is_character_cue,
    is_parenthetical,
    is_scene_heading,
    is_tag_line,
    is_transition,
)
from fountainkit.parser.scene_heading import (
    TIME_OF_DAY_OPTIONS,
    build_scene_heading,
    detect_scene_heading_field,
    expand_scene_heading,
    format_scene_heading_type,
    get_next_scene_heading_field,
    get_previous_scene_heading_field,
    parse_scene_heading,
    update_scene_heading_parts,
)

__all__ = [
    "TIME_OF_DAY_OPTIONS",
    "build_scene_heading",
    "classify",
    "clean_character_name",
    "detect_scene_heading_field",
    "expand_scene_heading",
    "format_scene_heading_type",
    "get_next_scene_heading_field",
    "get_previous_scene_heading_field",
    "is_character_cue",
    "is_parenthetical",
    "is_scene_heading",
    "is_tag_line",
    "is_transition",
    "parse_scene_heading",
    "update_scene_heading_parts",
]
