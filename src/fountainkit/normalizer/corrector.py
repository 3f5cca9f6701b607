"""Automatic fixes for the issues ``validate_fountain_content`` reports."""

from __future__ import annotations

from fountainkit.config import get_logger
from fountainkit.models import CorrectionResult, ElementKind, FormatIssue
from fountainkit.normalizer.format_validator import canonical_scene_heading, line_kinds
from fountainkit.normalizer.spacing import enforce_fountain_spacing
from fountainkit.parser.elements import clean_character_name, is_scene_heading

logger = get_logger(__name__)

MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 39


def correct_fountain_content(content: str, issues: list[FormatIssue]) -> CorrectionResult:
    """Apply every suggested fix, then enforce Fountain spacing.

    Fixes are applied from the bottom of the document up so earlier line
    numbers stay valid while later lines split or grow. When one line has
    both a spacing fix and a content fix, the blank line goes in first and
    the content fix then replaces the line itself.

    Args:
        content: The text the issues were found in
        issues: Issues from ``validate_fountain_content``

    Returns:
        The corrected text and the issues whose fixes were applied.
    """
    lines = content.split("\n")
    fixable = [issue for issue in issues if issue.suggested_fix is not None]
    fixable.sort(key=lambda issue: (-issue.line_number, issue.type != "spacing"))

    applied: list[FormatIssue] = []
    for issue in fixable:
        index = issue.line_number - 1
        if not 0 <= index < len(lines):
            continue
        if issue.type == "spacing":
            lines[index + 1 : index + 1] = [""]
        else:
            lines[index : index + 1] = issue.suggested_fix.split("\n")
        applied.append(issue)

    corrected = enforce_fountain_spacing("\n".join(lines))
    logger.debug("Applied formatting fixes", applied=len(applied), offered=len(issues))
    return CorrectionResult(corrected_content=corrected, applied_fixes=applied)


def quick_correct(content: str) -> str:
    """Uppercase and complete scene headings, leaving every other line alone.

    Example:
        >>> quick_correct("int. kitchen\\nShe waits.")
        'INT. KITCHEN - DAY\\nShe waits.'
    """
    return "\n".join(
        canonical_scene_heading(line) if is_scene_heading(line) else line
        for line in content.split("\n")
    )


def normalize_character_names(content: str) -> str:
    """Uppercase stand-alone lines that spell a known cue in the wrong case.

    Names are learned from the document's own character cues, so ``Sarah``
    becomes ``SARAH`` only if ``SARAH`` is cued somewhere. Dialogue is never
    touched.
    """
    lines = content.split("\n")
    kinds = line_kinds(lines)
    names = {
        clean_character_name(line).upper()
        for line, kind in zip(lines, kinds, strict=True)
        if kind is ElementKind.CHARACTER
    }

    normalized = []
    for line, kind in zip(lines, kinds, strict=True):
        text = line.strip()
        upper = text.upper()
        if (
            kind is not ElementKind.DIALOGUE
            and MIN_NAME_LENGTH <= len(text) <= MAX_NAME_LENGTH
            and upper in names
            and text != upper
        ):
            normalized.append(upper)
        else:
            normalized.append(line)
    return "\n".join(normalized)


def smart_format(content: str) -> str:
    """Fix headings, cue capitalisation and spacing in one pass."""
    formatted = quick_correct(content)
    formatted = normalize_character_names(formatted)
    return enforce_fountain_spacing(formatted)
