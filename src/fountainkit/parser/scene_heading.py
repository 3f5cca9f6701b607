"""Scene heading parsing, rebuilding and cursor field detection.

A scene heading is ``TYPE LOCATION - TIME``, for example
``INT. COFFEE SHOP - DAY``. The helpers here split a heading into those
three parts, rebuild a canonical heading from parts, and work out which part
an editor cursor sits in so Tab can move between them.
"""

from __future__ import annotations

import re

from fountainkit.models import (
    SceneHeadingField,
    SceneHeadingFieldInfo,
    SceneHeadingParts,
)

TIME_OF_DAY_OPTIONS: tuple[str, ...] = (
    "DAY",
    "NIGHT",
    "DAWN",
    "DUSK",
    "CONTINUOUS",
    "LATER",
    "MOMENTS LATER",
    "EARLY MORNING",
    "LATE AFTERNOON",
    "EVENING",
    "MIDNIGHT",
    "SUNRISE",
    "SUNSET",
)

CANONICAL_TYPES: tuple[str, ...] = ("INT.", "EXT.", "INT./EXT.", "I./E.", "EST.")

# Punctuated types, longest first.
_FULL_TYPE_RE = re.compile(
    r"^(INT\./EXT\.|INT/EXT\.|I\./E\.|I/E\.|INT\.|EXT\.|EST\.)",
    re.IGNORECASE,
)

# Un-punctuated types typed mid-edit ("int office"); must end at a word boundary.
_PARTIAL_TYPE_RE = re.compile(
    r"^(INT/EXT|I/E|INT|EXT|EST)(?=\s|$)\s*(.*)$",
    re.IGNORECASE,
)

# Any type token, punctuated or not, used to find where the type field ends.
_TYPE_FIELD_RE = re.compile(
    r"^(INT\./EXT\.|INT/EXT\.|INT\./EXT|INT/EXT|I\./E\.|I/E\.|I\./E|I/E"
    r"|INT\.|EXT\.|EST\.|INT|EXT|EST)",
    re.IGNORECASE,
)

# A dash preceded by whitespace separates location from time, which keeps
# hyphenated names such as SMITH-JONES intact.
_TIME_SEPARATOR_RE = re.compile(r"\s+-\s*")

_FIELD_SEPARATOR = " - "

_NEXT_FIELD: dict[SceneHeadingField, SceneHeadingField] = {
    "type": "location",
    "location": "time",
    "time": "location",
}

_PREVIOUS_FIELD: dict[SceneHeadingField, SceneHeadingField] = {
    "type": "type",
    "location": "type",
    "time": "location",
}


def _split_location_time(rest: str) -> tuple[str, str]:
    rest = rest.strip()
    if rest.startswith("-"):
        return "", rest[1:].strip()
    match = _TIME_SEPARATOR_RE.search(rest)
    if match is None:
        return rest, ""
    return rest[: match.start()].strip(), rest[match.end() :].strip()


def parse_scene_heading(line: str) -> SceneHeadingParts:
    """Split a scene heading into type, location and time.

    Tries a punctuated type first, then an un-punctuated one (``int office``
    while the user is still typing), then treats any line starting with I or
    E as a bare type. Everything else parses to empty parts.

    Args:
        line: The scene heading line

    Returns:
        The parsed parts; never raises.
    """
    trimmed = line.strip()

    full = _FULL_TYPE_RE.match(trimmed)
    if full:
        location, time = _split_location_time(trimmed[full.end() :])
        return SceneHeadingParts(
            type=full.group(1).upper(),
            location=location,
            time=time,
            full_text=trimmed,
        )

    partial = _PARTIAL_TYPE_RE.match(trimmed)
    if partial:
        location, time = _split_location_time(partial.group(2))
        return SceneHeadingParts(
            type=partial.group(1).upper(),
            location=location,
            time=time,
            full_text=trimmed,
        )

    if trimmed[:1].upper() in ("I", "E"):
        return SceneHeadingParts(type=trimmed, full_text=trimmed)

    return SceneHeadingParts(full_text=trimmed)


def detect_scene_heading_field(line: str, cursor_position: int) -> SceneHeadingFieldInfo:
    """Work out which heading field a cursor offset falls into.

    Offsets in the result are relative to the line with leading whitespace
    removed. The cursor is in the time field once it reaches the first
    character after the ``" - "`` separator.

    Args:
        line: The scene heading line as it appears in the editor
        cursor_position: Cursor offset within ``line``

    Returns:
        Field information together with the parsed parts.
    """
    parts = parse_scene_heading(line)
    stripped_left = line.lstrip()
    trimmed = stripped_left.rstrip()
    relative = cursor_position - (len(line) - len(stripped_left))

    type_match = _TYPE_FIELD_RE.match(trimmed)
    if type_match is None:
        return SceneHeadingFieldInfo(
            field="type",
            cursor_in_field=relative,
            field_start=0,
            field_end=len(trimmed),
            parts=parts,
        )

    type_end = type_match.end()
    dash_index = trimmed.find(_FIELD_SEPARATOR)
    time_start = dash_index + len(_FIELD_SEPARATOR)

    if relative <= type_end:
        return SceneHeadingFieldInfo(
            field="type",
            cursor_in_field=relative,
            field_start=0,
            field_end=type_end,
            parts=parts,
        )

    # Boundary: a cursor on the first time character is in time, at offset 0.
    if dash_index != -1 and relative >= time_start:
        return SceneHeadingFieldInfo(
            field="time",
            cursor_in_field=relative - time_start,
            field_start=time_start,
            field_end=len(trimmed),
            parts=parts,
        )

    location_start = type_end + (1 if trimmed[type_end : type_end + 1] == " " else 0)
    location_end = dash_index if dash_index != -1 else len(trimmed)
    return SceneHeadingFieldInfo(
        field="location",
        cursor_in_field=relative - location_start,
        field_start=location_start,
        field_end=max(location_end, location_start),
        parts=parts,
    )


def format_scene_heading_type(raw: str) -> str:
    """Normalize a type token to its canonical punctuated form.

    Combined forms are checked before single ones since ``INT/EXT`` contains
    ``INT``.

    Example:
        >>> format_scene_heading_type("int/ext")
        'INT./EXT.'
        >>> format_scene_heading_type("i/e")
        'I./E.'
    """
    upper = raw.strip().upper()
    if not upper:
        return ""
    if "INT/EXT" in upper or "INT./EXT" in upper:
        return "INT./EXT."
    if "I/E" in upper or "I./E" in upper:
        return "I./E."
    if upper.startswith("INT") and "/" not in upper:
        return "INT."
    if upper.startswith("EXT") and "/" not in upper:
        return "EXT."
    if upper.startswith("EST"):
        return "EST."
    return upper if upper.endswith(".") else f"{upper}."


def build_scene_heading(parts: SceneHeadingParts) -> str:
    """Assemble ``TYPE LOCATION - TIME`` from parts, formatting the type."""
    heading = format_scene_heading_type(parts.type)
    location = parts.location.strip()
    time = parts.time.strip()
    if location:
        heading = f"{heading} {location}" if heading else location
    if time:
        heading = f"{heading} - {time}"
    return heading


def update_scene_heading_parts(
    parts: SceneHeadingParts,
    *,
    type: str | None = None,
    location: str | None = None,
    time: str | None = None,
) -> SceneHeadingParts:
    """Return a copy of ``parts`` with the given fields replaced.

    ``full_text`` is cleared because it no longer describes the parts.
    """
    return SceneHeadingParts(
        type=parts.type if type is None else type,
        location=parts.location if location is None else location,
        time=parts.time if time is None else time,
        full_text="",
    )


def get_next_scene_heading_field(field: SceneHeadingField) -> SceneHeadingField:
    """Field Tab moves to; time wraps back to location."""
    return _NEXT_FIELD.get(field, "location")


def get_previous_scene_heading_field(field: SceneHeadingField) -> SceneHeadingField:
    """Field Shift+Tab moves to; type stays put."""
    return _PREVIOUS_FIELD.get(field, "type")


_SHORT_TYPE_RE = re.compile(r"^(INT|EXT)[.\s]+")


def expand_scene_heading(text: str) -> str:
    """Uppercase a heading typed in shorthand and punctuate its INT/EXT type.

    Example:
        >>> expand_scene_heading("int kitchen - night")
        'INT. KITCHEN - NIGHT'
    """
    return _SHORT_TYPE_RE.sub(r"\1. ", text.strip().upper(), count=1)
