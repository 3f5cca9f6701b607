"""Blank-line spacing between Fountain elements.

Rules, with scene heading rules taking precedence:

* A scene heading gets exactly two blank lines before it unless it opens the
  document or directly follows another scene heading.
* A scene heading followed by action gets exactly one blank line after it.
* A character cue after action or a scene heading gets exactly one blank line.
* Character -> dialogue/parenthetical and parenthetical -> dialogue are never
  given extra blank lines. A blank line the author already left inside such a
  pair survives, so a cue separated from its dialogue by a blank line keeps it.
* Dialogue followed by action, a cue or a transition gets at least one.
* Everything else keeps the author's spacing, capped at two blank lines.

Directive lines are emitted where they stand and do not count as elements.
"""

from __future__ import annotations

import re

from fountainkit.models import ElementKind
from fountainkit.parser.elements import classify, is_tag_line

MAX_BLANK_LINES = 2

_EXCESS_BLANKS_RE = re.compile(r"\n{4,}")

_TIGHT_LEADS = (ElementKind.CHARACTER, ElementKind.PARENTHETICAL)
_TIGHT_FOLLOWERS = (ElementKind.DIALOGUE, ElementKind.PARENTHETICAL)
_AFTER_DIALOGUE = (ElementKind.ACTION, ElementKind.CHARACTER, ElementKind.TRANSITION)


def _blank_lines_before(
    kind: ElementKind,
    prev_kind: ElementKind | None,
    author_blanks: int,
) -> int:
    author_blanks = min(author_blanks, MAX_BLANK_LINES)

    if kind is ElementKind.SCENE_HEADING:
        if prev_kind is None or prev_kind is ElementKind.SCENE_HEADING:
            return author_blanks
        return 2
    if prev_kind is ElementKind.SCENE_HEADING and kind is ElementKind.ACTION:
        return 1
    if kind is ElementKind.CHARACTER and prev_kind in (
        ElementKind.ACTION,
        ElementKind.SCENE_HEADING,
    ):
        return 1
    if kind in _TIGHT_FOLLOWERS and prev_kind in _TIGHT_LEADS:
        return author_blanks
    if prev_kind is ElementKind.DIALOGUE and kind in _AFTER_DIALOGUE:
        return max(author_blanks, 1)
    return author_blanks


def _next_content_lines(lines: list[str]) -> list[str | None]:
    """For each index, the next non-blank, non-directive line after it."""
    following: list[str | None] = [None] * len(lines)
    upcoming: str | None = None
    for index in range(len(lines) - 1, -1, -1):
        following[index] = upcoming
        text = lines[index].strip()
        if text and not is_tag_line(text):
            upcoming = text
    return following


def enforce_fountain_spacing(text: str) -> str:
    """Insert or remove blank lines so elements follow Fountain spacing.

    The previous neighbour of each line is the last line already written to
    the output; the next neighbour comes from the remaining input. Only
    blank lines change, so running the function twice gives the same result.

    Args:
        text: Screenplay text, ideally already whitespace-normalized

    Returns:
        The re-spaced text with leading and trailing whitespace removed.
    """
    lines = text.split("\n")
    following = _next_content_lines(lines)

    output: list[str] = []
    pending_blanks = 0
    prev_text: str | None = None
    prev_kind: ElementKind | None = None

    for index, line in enumerate(lines):
        stripped = line.strip()
        if not stripped:
            pending_blanks += 1
            continue

        if is_tag_line(stripped):
            if output:
                output.extend([""] * min(pending_blanks, MAX_BLANK_LINES))
            output.append(line)
            pending_blanks = 0
            continue

        kind = classify(stripped, prev_text, following[index])
        if output:
            output.extend([""] * _blank_lines_before(kind, prev_kind, pending_blanks))
        output.append(line)

        prev_text, prev_kind = stripped, kind
        pending_blanks = 0

    spaced = _EXCESS_BLANKS_RE.sub("\n\n\n", "\n".join(output))
    return spaced.strip()


def format_fountain_spacing(content: list[str]) -> str:
    """Space an array of generated lines for insertion into a script.

    Items containing newlines are split first. A cue gets one blank line
    before it and dialogue one after it; cue, parenthetical and dialogue stay
    tight. Other elements keep at most one blank line the author gave them.

    Args:
        content: Lines as produced by a model, possibly with blank entries

    Returns:
        Fountain text, or an empty string for empty input.
    """
    entries: list[tuple[str, int]] = []
    blanks = 0
    for item in content:
        for part in str(item).split("\n"):
            part = part.strip()
            if part:
                entries.append((part, blanks))
                blanks = 0
            else:
                blanks += 1

    output: list[str] = []
    prev_text: str | None = None
    prev_kind: ElementKind | None = None

    for index, (line, author_blanks) in enumerate(entries):
        next_text = entries[index + 1][0] if index + 1 < len(entries) else None
        kind = classify(line, prev_text, next_text)

        if prev_kind is None:
            gap = 0
        elif kind in _TIGHT_FOLLOWERS and prev_kind in _TIGHT_LEADS:
            gap = 0
        elif kind is ElementKind.CHARACTER and prev_kind not in _TIGHT_LEADS:
            gap = 1
        elif prev_kind is ElementKind.DIALOGUE:
            gap = 1
        elif ElementKind.SCENE_HEADING in (kind, prev_kind):
            gap = 1
        else:
            gap = min(author_blanks, 1)

        output.extend([""] * gap)
        output.append(line)
        prev_text, prev_kind = line, kind

    return "\n".join(output).strip()
