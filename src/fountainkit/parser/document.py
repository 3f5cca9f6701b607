"""Whole-document scans: scene blocks, cursor context and paste import."""

from __future__ import annotations

import math
import re

from fountainkit.config import get_logger
from fountainkit.models import (
    CharacterCount,
    ElementKind,
    ImportedScene,
    ImportSummary,
    SceneBlock,
    SceneContext,
)
from fountainkit.parser.elements import (
    classify,
    clean_character_name,
    is_scene_heading,
    is_tag_line,
)
from fountainkit.parser.scene_heading import parse_scene_heading

logger = get_logger(__name__)

MIN_STORY_BEAT_LENGTH = 10
LINES_PER_PAGE = 55

# "ANNA: Hello there" style dialogue from chat transcripts and loose drafts
_COLON_DIALOGUE_RE = re.compile(r"^([A-Z][A-Z\s']{0,28}?):\s*(\S.*)$")

_TIME_SUFFIX_RE = re.compile(
    r"\s*-\s*(DAY|NIGHT|MORNING|AFTERNOON|EVENING|DAWN|DUSK|CONTINUOUS|LATER|SAME TIME)$",
    re.IGNORECASE,
)


def collect_character_names(lines: list[str]) -> list[str]:
    """Distinct cue names among ``lines`` in order of first appearance."""
    content = [line.strip() for line in lines if line.strip() and not is_tag_line(line)]
    names: list[str] = []
    for index, line in enumerate(content):
        prev_line = content[index - 1] if index > 0 else None
        next_line = content[index + 1] if index + 1 < len(content) else None
        if classify(line, prev_line, next_line) is not ElementKind.CHARACTER:
            continue
        name = clean_character_name(line)
        if name and name not in names:
            names.append(name)
    return names


def split_scenes(document: str) -> list[SceneBlock]:
    """Split a document into scene blocks.

    Each block runs from its heading to the line before the next heading.
    Directive lines are left out of ``lines``; text before the first heading
    belongs to no scene.
    """
    lines = document.split("\n")
    blocks: list[SceneBlock] = []
    current: SceneBlock | None = None

    for index, line in enumerate(lines):
        if is_scene_heading(line):
            if current is not None:
                current.end_index = index - 1
                blocks.append(current)
            current = SceneBlock(heading=line.strip(), start_index=index, end_index=index)
            continue
        if current is not None and not is_tag_line(line):
            current.lines.append(line)

    if current is not None:
        current.end_index = len(lines) - 1
        blocks.append(current)
    return blocks


def _current_scene_lines(content: str, cursor_position: int) -> tuple[str, list[str]] | None:
    lines = content[:cursor_position].split("\n")
    for index in range(len(lines) - 1, -1, -1):
        if is_scene_heading(lines[index]):
            return lines[index].strip(), lines[index + 1 :]
    return None


def get_current_scene_heading(content: str, cursor_position: int) -> str | None:
    """Return the closest scene heading at or above the cursor."""
    found = _current_scene_lines(content, cursor_position)
    return found[0] if found else None


def get_current_scene_characters(content: str, cursor_position: int) -> list[str]:
    """Return the characters who speak between the scene heading and the cursor."""
    found = _current_scene_lines(content, cursor_position)
    return collect_character_names(found[1]) if found else []


def get_current_scene_story_beats(content: str, cursor_position: int) -> list[str]:
    """Return the substantial action lines between the scene heading and the cursor."""
    found = _current_scene_lines(content, cursor_position)
    if not found:
        return []
    content_lines = [
        line.strip() for line in found[1] if line.strip() and not is_tag_line(line)
    ]
    beats = []
    for index, line in enumerate(content_lines):
        prev_line = content_lines[index - 1] if index > 0 else None
        next_line = content_lines[index + 1] if index + 1 < len(content_lines) else None
        kind = classify(line, prev_line, next_line)
        if kind is ElementKind.ACTION and len(line) > MIN_STORY_BEAT_LENGTH:
            beats.append(line)
    return beats


def get_current_scene_context(content: str, cursor_position: int) -> SceneContext:
    """Bundle heading, characters and story beats for prompt building."""
    return SceneContext(
        scene_heading=get_current_scene_heading(content, cursor_position),
        characters=get_current_scene_characters(content, cursor_position),
        story_beats=get_current_scene_story_beats(content, cursor_position),
    )


def get_visible_line_number(content: str, position: int) -> int:
    """1-based line number of ``position`` counting only non-directive lines."""
    lines = content[:position].split("\n")
    return sum(1 for line in lines if not is_tag_line(line))


def should_auto_import(content: str) -> bool:
    """Return True if pasted text contains at least one scene heading."""
    return any(is_scene_heading(line) for line in content.split("\n"))


def format_location_name(location: str) -> str:
    """Uppercase a location and drop a trailing time of day."""
    return _TIME_SUFFIX_RE.sub("", location.strip()).strip().upper()


def format_character_name(character: str) -> str:
    """Title-case a character name for display, e.g. ``MARY ANN`` -> ``Mary Ann``."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in character.split(" "))


def parse_content_for_import(content: str) -> ImportSummary:
    """Collect locations, characters and scenes from pasted Fountain text.

    Besides regular cues, ``NAME: line`` dialogue inside a scene also counts
    as a character. Line numbers in the result are 0-based and inclusive.
    """
    summary = ImportSummary()
    for block in split_scenes(content):
        parts = parse_scene_heading(block.heading)
        location = format_location_name(parts.location) or block.heading
        if location not in summary.locations:
            summary.locations.append(location)

        characters = collect_character_names(block.lines)
        for line in block.lines:
            colon = _COLON_DIALOGUE_RE.match(line.strip())
            if colon:
                name = colon.group(1).strip()
                if name not in characters:
                    characters.append(name)

        for name in characters:
            if name not in summary.characters:
                summary.characters.append(name)

        summary.scenes.append(
            ImportedScene(
                heading=block.heading,
                location=location,
                characters=characters,
                start_line=block.start_index,
                end_line=block.end_index,
            )
        )

    logger.debug(
        "Parsed content for import",
        locations=len(summary.locations),
        characters=len(summary.characters),
        scenes=len(summary.scenes),
    )
    return summary


def estimate_page_count(text: str) -> int:
    """Rough page count at 55 lines per page."""
    return math.ceil(len(text.split("\n")) / LINES_PER_PAGE)


def count_words(text: str) -> int:
    return len(text.split())


def get_character_count(text: str) -> CharacterCount:
    """Characters in ``text`` with and without whitespace."""
    return CharacterCount(
        with_spaces=len(text),
        without_spaces=sum(1 for ch in text if not ch.isspace()),
    )
