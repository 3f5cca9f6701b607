"""Relationship directives embedded in Fountain text.

Scenes carry their character and location links as directive lines written
right after the scene heading::

    INT. KITCHEN - NIGHT
    @location: 5b1c0e7a-loc
    @characters: 9f2d-anna, 0c41-ben

The directives are stripped for display and export, and re-injected from the
stored relationship graph before the document is persisted.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from fountainkit.config import get_logger, get_settings
from fountainkit.models import (
    CharacterRef,
    LocationRef,
    Relationships,
    SceneRef,
    SceneTags,
)
from fountainkit.parser.document import collect_character_names
from fountainkit.parser.elements import is_scene_heading, is_tag_line
from fountainkit.parser.patterns import (
    CHARACTER_TAG_RE,
    CHARACTERS_TAG_RE,
    LOCATION_TAG_RE,
    TAG_ID_RE,
)
from fountainkit.tags.similarity import similarity

logger = get_logger(__name__)


def is_fountain_tag(line: str) -> bool:
    """Return True if the line is a directive (``@location:``, ``@characters:``...)."""
    return is_tag_line(line)


def _parse_ids(value: str) -> list[str]:
    ids = []
    for piece in value.split(","):
        piece = piece.strip()
        if piece and TAG_ID_RE.fullmatch(piece):
            ids.append(piece)
    return ids


def _add_unique(target: list[str], ids: Iterable[str]) -> None:
    for item in ids:
        if item not in target:
            target.append(item)


def extract_tags(document: str) -> list[SceneTags]:
    """Collect the directives of every scene in one top-to-bottom pass.

    A scene spans from its heading to the line before the next heading, or to
    the end of the document. Directives before the first heading are ignored.
    ``@characters:`` and ``@character:`` both add ids in order of first
    appearance without duplicates.

    Args:
        document: Fountain text with directive lines

    Returns:
        One entry per scene heading with 1-based, inclusive line numbers.
    """
    lines = document.split("\n")
    scenes: list[SceneTags] = []
    current: SceneTags | None = None

    for line_number, line in enumerate(lines, start=1):
        if is_scene_heading(line):
            if current is not None:
                current.end_line = line_number - 1
                scenes.append(current)
            current = SceneTags(
                scene_heading=line.strip(),
                start_line=line_number,
                end_line=line_number,
            )
            continue

        if current is None:
            continue

        location = LOCATION_TAG_RE.match(line)
        if location:
            ids = _parse_ids(location.group(1))
            if ids:
                current.location = ids[0]
            continue

        plural = CHARACTERS_TAG_RE.match(line)
        if plural:
            _add_unique(current.characters, _parse_ids(plural.group(1)))
            continue

        singular = CHARACTER_TAG_RE.match(line)
        if singular:
            _add_unique(current.characters, _parse_ids(singular.group(1))[:1])

    if current is not None:
        current.end_line = len(lines)
        scenes.append(current)

    return scenes


def inject_tags(
    document: str,
    scene: SceneRef,
    characters: Sequence[CharacterRef],
    location: LocationRef | None = None,
) -> str:
    """Rewrite the directives of one scene.

    The scene is found by exact match of its trimmed heading line. Existing
    location and character directives inside the scene are dropped, then a
    fresh ``@location:`` line (if a location is given) and ``@characters:``
    line (if any characters are given) are written right after the heading.

    Args:
        document: Fountain text
        scene: The scene whose heading identifies where to write
        characters: Characters appearing in the scene
        location: The scene's location, if any

    Returns:
        The updated document, or the input unchanged if the heading is absent.
    """
    heading = scene.heading.strip()
    lines = document.split("\n")

    start = next(
        (i for i, line in enumerate(lines) if heading and line.strip() == heading),
        None,
    )
    if start is None:
        logger.debug("Scene heading not found, tags not injected", heading=heading)
        return document

    end = start + 1
    while end < len(lines) and not is_scene_heading(lines[end]):
        end += 1

    fresh: list[str] = []
    if location is not None:
        fresh.append(f"@location: {location.id}")
    if characters:
        fresh.append(f"@characters: {', '.join(c.id for c in characters)}")

    body = [
        line
        for line in lines[start + 1 : end]
        if not (
            LOCATION_TAG_RE.match(line)
            or CHARACTERS_TAG_RE.match(line)
            or CHARACTER_TAG_RE.match(line)
        )
    ]

    return "\n".join([*lines[: start + 1], *fresh, *body, *lines[end:]])


def update_script_tags(
    content: str,
    scenes: Sequence[SceneRef],
    characters: Sequence[CharacterRef],
    locations: Sequence[LocationRef],
    relationships: Relationships,
) -> str:
    """Re-inject directives for every scene that has stored relationships.

    Ids in the relationship graph that do not resolve to a known character
    or location are skipped.
    """
    characters_by_id = {c.id: c for c in characters}
    locations_by_id = {loc.id: loc for loc in locations}

    updated = content
    for scene in scenes:
        relations = relationships.scenes.get(scene.id)
        if relations is None:
            continue
        scene_characters = [
            characters_by_id[char_id]
            for char_id in relations.characters
            if char_id in characters_by_id
        ]
        scene_location = (
            locations_by_id.get(relations.location) if relations.location else None
        )
        updated = inject_tags(updated, scene, scene_characters, scene_location)
    return updated


def remove_tags(document: str) -> str:
    """Drop every directive line, leaving all other lines untouched."""
    return "\n".join(line for line in document.split("\n") if not is_tag_line(line))


def match_scene_heading(
    heading: str,
    scenes: Sequence[SceneRef],
    threshold: float | None = None,
) -> str | None:
    """Find the id of the scene whose heading matches ``heading``.

    An exact case-insensitive match wins; otherwise the first scene whose
    similarity is strictly above ``threshold`` (default from settings, 0.85).
    """
    settings = get_settings()
    if threshold is None:
        threshold = settings.scene_match_threshold
    wanted = heading.strip().upper()

    for scene in scenes:
        if scene.heading.strip().upper() == wanted:
            return scene.id

    for scene in scenes:
        candidate = scene.heading.strip().upper()
        if similarity(wanted, candidate, settings.fuzzy_max_length) > threshold:
            return scene.id

    return None


def match_character_names(
    names: Iterable[str],
    characters: Sequence[CharacterRef],
    threshold: float | None = None,
) -> dict[str, str]:
    """Map character names found in the script to character ids.

    Each name tries an exact case-insensitive match first, then takes the
    first character (in the given order) whose similarity is strictly above
    ``threshold`` (default from settings, 0.80). Unmatched names are absent.
    """
    settings = get_settings()
    if threshold is None:
        threshold = settings.character_match_threshold

    matches: dict[str, str] = {}
    for name in names:
        wanted = name.strip().upper()
        exact = next(
            (c.id for c in characters if c.name.strip().upper() == wanted), None
        )
        if exact is not None:
            matches[name] = exact
            continue
        for character in characters:
            candidate = character.name.strip().upper()
            if similarity(wanted, candidate, settings.fuzzy_max_length) > threshold:
                matches[name] = character.id
                break
    return matches


def extract_character_names(document: str) -> list[str]:
    """Return the distinct character cue names in order of first appearance.

    Extensions such as ``(V.O.)`` are removed, so ``ANNA`` and
    ``ANNA (O.S.)`` count once.
    """
    return collect_character_names(document.split("\n"))


def assign_scene_ids(tags: list[SceneTags], scenes: Sequence[SceneRef]) -> list[SceneTags]:
    """Fill ``scene_id`` on extracted tags by matching their headings."""
    for scene_tags in tags:
        scene_tags.scene_id = match_scene_heading(scene_tags.scene_heading, scenes) or ""
    return tags
