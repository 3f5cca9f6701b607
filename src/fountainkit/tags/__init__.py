"""Scene relationship directives: extraction, injection and matching."""

from fountainkit.tags.fountain_tags import (
    assign_scene_ids,
    extract_character_names,
    extract_tags,
    inject_tags,
    is_fountain_tag,
    match_character_names,
    match_scene_heading,
    remove_tags,
    update_script_tags,
)
from fountainkit.tags.similarity import similarity

__all__ = [
    "assign_scene_ids",
    "extract_character_names",
    "extract_tags",
    "inject_tags",
    "is_fountain_tag",
    "match_character_names",
    "match_scene_heading",
    "remove_tags",
    "similarity",
    "update_script_tags",
]
