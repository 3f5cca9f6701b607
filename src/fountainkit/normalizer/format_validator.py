"""Detection of common formatting mistakes in pasted screenplays.

Drafts pasted from word processors, chat transcripts or prose often use
``NAME: line`` dialogue, title-case cues, lowercase headings or locations
without an INT/EXT prefix. ``validate_fountain_content`` reports each such
line with a suggested replacement that ``correct_fountain_content`` can
apply.

Each non-blank line yields at most one content issue, checked in this order:
scene heading, colon dialogue, dash dialogue, quoted dialogue, title-case
cue, bare location. Spacing issues are reported separately and point at the
line that needs a blank line after it.
"""

from __future__ import annotations

import re

from fountainkit.config import get_logger
from fountainkit.models import (
    ISSUE_TYPES,
    ElementKind,
    FormatIssue,
    FormatReport,
    SceneHeadingParts,
)
from fountainkit.parser.elements import classify, is_scene_heading, is_tag_line
from fountainkit.parser.scene_heading import build_scene_heading, parse_scene_heading

logger = get_logger(__name__)

DEFAULT_TIME_OF_DAY = "DAY"

MAX_NAME_LENGTH = 30
MAX_DASH_DIALOGUE_LENGTH = 50
MIN_LOCATION_LENGTH = 6
MAX_LOCATION_LENGTH = 39

_COLON_DIALOGUE_RE = re.compile(r"^([A-Za-z][A-Za-z\s']*?)\s*:\s*(\S.*)$")
_DASH_DIALOGUE_RE = re.compile(r"^([A-Z][A-Z\s']*?)\s+-\s*(\S.*)$")
_QUOTED_DIALOGUE_RE = re.compile(
    r"^[\"'](.+?)[\"']\s*(?:said|says)\s+([A-Za-z]+)$",
    re.IGNORECASE,
)
_TITLE_CASE_NAME_RE = re.compile(r"^[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*$")
_LOCATION_LIKE_RE = re.compile(r"^[A-Z][A-Za-z\s']+$")

# Lines inside a dialogue block are never reinterpreted
_SPOKEN = (ElementKind.DIALOGUE, ElementKind.PARENTHETICAL)


def line_kinds(lines: list[str]) -> list[ElementKind | None]:
    """Element kind of every line; ``None`` for blank and directive lines."""
    content = [i for i, line in enumerate(lines) if line.strip() and not is_tag_line(line)]
    kinds: list[ElementKind | None] = [None] * len(lines)
    for position, index in enumerate(content):
        previous = lines[content[position - 1]] if position > 0 else None
        following = lines[content[position + 1]] if position + 1 < len(content) else None
        kinds[index] = classify(lines[index], previous, following)
    return kinds


def canonical_scene_heading(line: str) -> str:
    """Uppercase a heading, punctuate its type and add DAY when time is missing.

    Example:
        >>> canonical_scene_heading("int. kitchen")
        'INT. KITCHEN - DAY'
    """
    parts = parse_scene_heading(line)
    location = parts.location.upper()
    time = parts.time.upper()
    if location and not time:
        time = DEFAULT_TIME_OF_DAY
    return build_scene_heading(SceneHeadingParts(type=parts.type, location=location, time=time))


def _heading_issue(text: str, line_number: int) -> FormatIssue | None:
    fixed = canonical_scene_heading(text)
    if any(ch.islower() for ch in text):
        return FormatIssue(
            line_number=line_number,
            severity="warning",
            type="scene_heading",
            description="Scene heading should be uppercase.",
            original_text=text,
            suggested_fix=fixed,
        )
    if not parse_scene_heading(text).time and fixed != text:
        return FormatIssue(
            line_number=line_number,
            severity="info",
            type="scene_heading",
            description="Scene heading missing time of day.",
            original_text=text,
            suggested_fix=fixed,
        )
    return None


def _colon_dialogue_issue(text: str, line_number: int) -> FormatIssue | None:
    match = _COLON_DIALOGUE_RE.match(text)
    if match is None:
        return None
    name, dialogue = match.group(1).strip(), match.group(2).strip()
    # "CUT TO: BLACK" is a transition, not dialogue
    if len(name) > MAX_NAME_LENGTH or name.upper().split()[-1] == "TO":
        return None
    return FormatIssue(
        line_number=line_number,
        severity="warning",
        type="character",
        description=(
            f'Character name "{name}" uses colon format. '
            "Put the name on its own line in ALL CAPS."
        ),
        original_text=text,
        suggested_fix=f"{name.upper()}\n{dialogue}",
    )


def _dash_dialogue_issue(text: str, line_number: int) -> FormatIssue | None:
    if len(text) >= MAX_DASH_DIALOGUE_LENGTH:
        return None
    match = _DASH_DIALOGUE_RE.match(text)
    if match is None:
        return None
    name, dialogue = match.group(1).strip(), match.group(2).strip()
    return FormatIssue(
        line_number=line_number,
        severity="warning",
        type="dialogue",
        description=(
            f'Character "{name}" uses a dash separator. '
            "Dialogue belongs on the next line."
        ),
        original_text=text,
        suggested_fix=f"{name}\n{dialogue}",
    )


def _quoted_dialogue_issue(text: str, line_number: int) -> FormatIssue | None:
    match = _QUOTED_DIALOGUE_RE.match(text)
    if match is None:
        return None
    dialogue = match.group(1).rstrip(",").strip()
    character = match.group(2).upper()
    return FormatIssue(
        line_number=line_number,
        severity="warning",
        type="dialogue",
        description="Prose dialogue. Use a character cue followed by the line.",
        original_text=text,
        suggested_fix=f"{character}\n{dialogue}",
    )


def _title_case_name_issue(
    text: str, line_number: int, previous_blank: bool, next_blank: bool
) -> FormatIssue | None:
    if not previous_blank or next_blank or len(text) >= MAX_NAME_LENGTH:
        return None
    if not _TITLE_CASE_NAME_RE.match(text):
        return None
    return FormatIssue(
        line_number=line_number,
        severity="warning",
        type="character",
        description=f'Possible character name "{text}" is not in ALL CAPS.',
        original_text=text,
        suggested_fix=text.upper(),
    )


def _location_issue(
    text: str,
    line_number: int,
    kind: ElementKind | None,
    previous_blank: bool,
    next_blank: bool,
) -> FormatIssue | None:
    if kind is not ElementKind.ACTION or not (previous_blank and next_blank):
        return None
    if not MIN_LOCATION_LENGTH <= len(text) <= MAX_LOCATION_LENGTH or "." in text:
        return None
    if not _LOCATION_LIKE_RE.match(text):
        return None
    return FormatIssue(
        line_number=line_number,
        severity="info",
        type="scene_heading",
        description=f'"{text}" looks like a location without a scene heading prefix.',
        original_text=text,
        suggested_fix=f"INT. {text.upper()} - {DEFAULT_TIME_OF_DAY}",
    )


def _spacing_issue(
    lines: list[str], index: int, kinds: list[ElementKind | None]
) -> FormatIssue | None:
    previous = lines[index - 1]
    if not previous.strip():
        return None
    if kinds[index] is ElementKind.CHARACTER:
        description = "Character name should be preceded by a blank line."
    elif kinds[index - 1] is ElementKind.SCENE_HEADING and not is_tag_line(lines[index]):
        description = "Scene heading should be followed by a blank line."
    else:
        return None
    return FormatIssue(
        line_number=index,
        severity="info",
        type="spacing",
        description=description,
        original_text=previous,
        suggested_fix=f"{previous}\n",
    )


def validate_fountain_content(content: str) -> FormatReport:
    """Find formatting issues in Fountain text.

    Args:
        content: Screenplay text, typically freshly pasted

    Returns:
        A report listing issues in the order found. Directive lines are
        skipped, as are dialogue and parentheticals under a cue.
    """
    lines = content.split("\n")
    kinds = line_kinds(lines)
    report = FormatReport()

    for index, line in enumerate(lines):
        text = line.strip()
        if not text or is_tag_line(text):
            continue
        line_number = index + 1
        previous_blank = index > 0 and not lines[index - 1].strip()
        next_blank = index + 1 >= len(lines) or not lines[index + 1].strip()

        if is_scene_heading(text):
            issue = _heading_issue(text, line_number)
        elif kinds[index] in _SPOKEN:
            issue = None
        else:
            issue = (
                _colon_dialogue_issue(text, line_number)
                or _dash_dialogue_issue(text, line_number)
                or _quoted_dialogue_issue(text, line_number)
                or _title_case_name_issue(text, line_number, previous_blank, next_blank)
                or _location_issue(
                    text, line_number, kinds[index], previous_blank, next_blank
                )
            )
        if issue is not None:
            report.issues.append(issue)

        if index > 0:
            spacing = _spacing_issue(lines, index, kinds)
            if spacing is not None:
                report.issues.append(spacing)

    logger.debug(
        "Validated Fountain formatting",
        lines=len(lines),
        issues=len(report.issues),
        fixable=report.has_auto_fixable_issues,
    )
    return report


def get_issue_summary(issues: list[FormatIssue]) -> dict[str, int]:
    """Count issues per type; every type is present, zero if unused."""
    summary = dict.fromkeys(ISSUE_TYPES, 0)
    for issue in issues:
        summary[issue.type] += 1
    return summary
