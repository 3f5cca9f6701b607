"""Classification of Fountain lines into screenplay elements.

``classify`` is the single classifier used by the spacing enforcer, the
content-array spacer, the whitespace normalizer and the document scanner.
A line's kind depends only on its own text and on the text of its nearest
non-blank neighbours, which keeps every caller a single forward pass.
"""

from __future__ import annotations

from fountainkit.models import ElementKind
from fountainkit.parser.patterns import (
    CHARACTER_CUE_RE,
    CHARACTER_EXTENSION_RE,
    SCENE_HEADING_RE,
    TAG_DIRECTIVE_RE,
)

MIN_CUE_LENGTH = 2
MAX_CUE_LENGTH = 50
MAX_CUE_WORDS = 4


def is_tag_line(line: str) -> bool:
    """Return True for relationship directive lines such as ``@location: id``."""
    return bool(TAG_DIRECTIVE_RE.match(line))


def is_scene_heading(line: str) -> bool:
    """Return True if the line starts with a scene heading prefix."""
    return bool(SCENE_HEADING_RE.match(line.strip()))


def is_transition(line: str) -> bool:
    """Return True for uppercase transitions such as ``CUT TO:``."""
    text = line.strip()
    return text.endswith("TO:") and not _has_lowercase(text)


def is_parenthetical(line: str) -> bool:
    """Return True for lines wrapped in parentheses."""
    text = line.strip()
    return len(text) >= 2 and text.startswith("(") and text.endswith(")")


def is_character_cue(line: str) -> bool:
    """Return True if the line looks like a character cue on its own.

    A cue is 2-50 characters of uppercase text with at most four words,
    optionally carrying an extension like ``(V.O.)``. Scene headings and
    transitions are never cues.
    """
    text = line.strip()
    if not MIN_CUE_LENGTH <= len(text) <= MAX_CUE_LENGTH:
        return False
    if _has_lowercase(text) or len(text.split()) > MAX_CUE_WORDS:
        return False
    if is_scene_heading(text) or is_transition(text):
        return False
    return bool(CHARACTER_CUE_RE.match(text))


def clean_character_name(cue: str) -> str:
    """Strip extensions and the dual dialogue caret from a character cue.

    Example:
        >>> clean_character_name("SARAH (V.O.) ^")
        'SARAH'
    """
    name = CHARACTER_EXTENSION_RE.sub("", cue.strip())
    return name.rstrip("^").strip()


def classify(
    line: str,
    prev_non_blank: str | None = None,
    next_non_blank: str | None = None,
) -> ElementKind:
    """Classify a non-blank line given its nearest non-blank neighbours.

    Args:
        line: The line to classify
        prev_non_blank: The previous non-blank, non-directive line, if any
        next_non_blank: The next non-blank, non-directive line, if any

    Returns:
        The element kind. Anything unrecognised is ACTION.
    """
    text = line.strip()
    if is_scene_heading(text):
        return ElementKind.SCENE_HEADING
    if is_transition(text):
        return ElementKind.TRANSITION
    if is_parenthetical(text):
        return ElementKind.PARENTHETICAL
    if is_character_cue(text) and _can_carry_dialogue(next_non_blank):
        return ElementKind.CHARACTER
    if _previous_kind(prev_non_blank) in (
        ElementKind.CHARACTER,
        ElementKind.PARENTHETICAL,
    ):
        return ElementKind.DIALOGUE
    return ElementKind.ACTION


def _previous_kind(prev: str | None) -> ElementKind | None:
    """Kind of the previous line, knowing only that a dialogue-capable line follows."""
    if not prev or not prev.strip():
        return None
    if is_scene_heading(prev):
        return ElementKind.SCENE_HEADING
    if is_transition(prev):
        return ElementKind.TRANSITION
    if is_parenthetical(prev):
        return ElementKind.PARENTHETICAL
    if is_character_cue(prev):
        return ElementKind.CHARACTER
    return ElementKind.ACTION


def _can_carry_dialogue(next_line: str | None) -> bool:
    if not next_line or not next_line.strip():
        return False
    return not (is_scene_heading(next_line) or is_transition(next_line))


def _has_lowercase(text: str) -> bool:
    return any(ch.islower() for ch in text)
