"""Whitespace normalization that keeps Fountain's blank-line structure."""

from __future__ import annotations

import re

from fountainkit.parser.elements import (
    is_character_cue,
    is_parenthetical,
    is_scene_heading,
    is_tag_line,
    is_transition,
)
from fountainkit.parser.patterns import TERMINAL_PUNCTUATION

_LINE_ENDING_RE = re.compile(r"\r\n?")
_SPACE_RUN_RE = re.compile(r"\s{2,}")


def _clean_line(line: str) -> str:
    return _SPACE_RUN_RE.sub(" ", line.strip())


def is_soft_wrapped(current: str, following: str) -> bool:
    """Return True if ``following`` continues ``current`` after a hard wrap.

    Both lines are expected to be cleaned and non-blank. Element boundaries
    are never joined: a line ending in terminal punctuation, a following line
    starting with a capital or a scene heading prefix, and any pairing with
    a cue, heading, transition or parenthetical all stay on separate lines.
    """
    if not current or not following:
        return False
    if current.endswith(TERMINAL_PUNCTUATION):
        return False
    if following[0].isascii() and following[0].isupper():
        return False
    if is_scene_heading(following) or is_parenthetical(following):
        return False
    return not (
        is_character_cue(current)
        or is_scene_heading(current)
        or is_transition(current)
        or is_parenthetical(current)
    )


def normalize_whitespace(text: str) -> str:
    """Trim lines, collapse space runs and re-join soft-wrapped lines.

    Line endings are normalized to ``\\n``. Every blank line is kept as an
    empty line so blank-line runs keep their number and position. Directive
    lines (``@location:`` and friends) are cleaned but never joined.

    Args:
        text: Raw screenplay text

    Returns:
        The normalized text.
    """
    lines = _LINE_ENDING_RE.sub("\n", text).split("\n")
    output: list[str] = []
    pending: str | None = None

    for raw in lines:
        line = _clean_line(raw)

        if not line or is_tag_line(line):
            if pending is not None:
                output.append(pending)
                pending = None
            output.append(line)
            continue

        if pending is not None and is_soft_wrapped(pending, line):
            pending = f"{pending} {line}"
            continue

        if pending is not None:
            output.append(pending)
        pending = line

    if pending is not None:
        output.append(pending)

    return "\n".join(output)
