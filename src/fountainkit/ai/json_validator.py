"""Validation of AI-generated screenplay JSON before it is merged.

Every validator accepts the raw model output, recovers a JSON object from it
and checks it against one envelope shape:

* continuation content ``{"content": [str], "lineCount": int}``
* director content, the same shape with longer bounds
* rewrites ``{"rewrittenText": str}``
* director scenes ``{"scenes": [{"heading": str, "content": [str]}]}``
* dialogue ``{"dialogue": [{"character", "line", "subtext"?}]}``

All violations are collected. Validators never raise; a failure comes back
as an invalid result whose errors can be fed to ``build_retry_prompt``.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, Literal

from fountainkit.ai.extraction import extract_json_payload
from fountainkit.config import get_logger, get_settings
from fountainkit.exceptions import JSONExtractionError
from fountainkit.parser.elements import is_scene_heading

logger = get_logger(__name__)

GenerationLength = Literal["short", "full", "multiple"]

MAX_CONTINUATION_LINES = 10
MAX_SHORT_DIRECTOR_LINES = 15
MAX_DIRECTOR_LINES = 50
LINES_PER_SCENE = 50
MIN_SCENE_LINES = 5
MAX_SCENE_LINES = 50
MAX_SCENES = 3

_WHITESPACE_RUN_RE = re.compile(r"\s+")
_MARKDOWN_HEADING_RE = re.compile(r"^#\s*(INT|EXT)\.", re.IGNORECASE)
_HEADING_TIME_SPLIT_RE = re.compile(r"\s+-\s+")


@dataclass
class ValidationResult:
    """Outcome of validating one model response."""

    valid: bool
    content: str = ""
    errors: list[str] = field(default_factory=list)
    raw_json: Any = None

    @property
    def rewritten_text(self) -> str:
        """Rewrite responses carry their text in ``content``."""
        return self.content

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {"valid": self.valid, "content": self.content, "errors": self.errors}


def _is_missing(value: Any) -> bool:
    """Absent, null, false, zero or empty-string values count as missing."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or math.isnan(value)
    return False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _format_number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _normalize_line(line: str) -> str:
    return _WHITESPACE_RUN_RE.sub(" ", line.strip().lower())


def _context_lines(context: str) -> list[str]:
    return [_normalize_line(line) for line in context.split("\n") if line.strip()]


def _is_heading_like(line: str) -> bool:
    text = line.strip()
    return is_scene_heading(text) or bool(_MARKDOWN_HEADING_RE.match(text))


def find_duplicate_lines(
    items: list[Any],
    context: str,
    min_length: int | None = None,
) -> list[int]:
    """Return indexes of items that repeat a line of ``context`` exactly.

    Items and context lines are compared lowercased with whitespace runs
    collapsed. Items shorter than ``min_length`` (default 20) are ignored,
    and substring matches do not count.
    """
    if min_length is None:
        min_length = get_settings().duplicate_min_length
    known = set(_context_lines(context))
    duplicates = []
    for index, item in enumerate(items):
        if not isinstance(item, str):
            continue
        normalized = _normalize_line(item)
        if len(normalized) >= min_length and normalized in known:
            duplicates.append(index)
    return duplicates


def _is_duplicate_heading(heading: str, context_lines: list[str]) -> bool:
    """Same heading text, or same location part when both carry a time."""
    normalized = _normalize_line(heading)
    heading_parts = _HEADING_TIME_SPLIT_RE.split(normalized)
    for line in context_lines:
        if _is_heading_like(line):
            line_parts = _HEADING_TIME_SPLIT_RE.split(line)
            if len(heading_parts) >= 2 and len(line_parts) >= 2:
                if heading_parts[0] == line_parts[0]:
                    return True
                continue
        if line == normalized:
            return True
    return False


def _parse(raw: Any) -> tuple[Any, list[str]]:
    if not raw or not isinstance(raw, str):
        return None, ["Response is empty or not a string"]
    try:
        return extract_json_payload(raw), []
    except JSONExtractionError as e:
        return None, [
            f"JSON parsing failed: {e.reason}",
            f"Attempted to parse: {e.raw[:200]}...",
        ]


def _check_object(payload: Any) -> list[str]:
    if not isinstance(payload, dict):
        return ["Response must be a JSON object, not an array or primitive"]
    return []


def _check_line_count(payload: dict[str, Any], errors: list[str]) -> None:
    if "lineCount" not in payload:
        return
    line_count = payload["lineCount"]
    content = payload.get("content")
    content_length = len(content) if isinstance(content, list) else None
    if not _is_number(line_count):
        errors.append('Field "lineCount" must be a number')
    elif line_count != content_length:
        errors.append(
            f'Field "lineCount" ({_format_number(line_count)}) does not match '
            f"content.length ({content_length})"
        )


def _finish(payload: Any, errors: list[str], content: str) -> ValidationResult:
    if errors:
        logger.debug("AI response failed validation", errors=errors)
        return ValidationResult(valid=False, errors=errors, raw_json=payload)
    return ValidationResult(valid=True, content=content, raw_json=payload)


def validate_screenplay_content(
    response: str,
    context_before_cursor: str | None = None,
) -> ValidationResult:
    """Validate a continuation of 1-10 lines that contains no scene heading.

    Blank items are allowed; they are intentional blank lines. On success the
    items are joined with newlines and the result is trimmed at both ends.

    Args:
        response: Raw model output
        context_before_cursor: Script text already written, for duplicate checks

    Returns:
        The validation result.
    """
    payload, errors = _parse(response)
    if errors:
        return ValidationResult(valid=False, errors=errors)
    errors = _check_object(payload)
    if errors:
        return ValidationResult(valid=False, errors=errors, raw_json=payload)

    content = payload.get("content")
    if _is_missing(content):
        errors.append('Missing required field: "content"')
    elif not isinstance(content, list):
        errors.append('Field "content" must be an array')
    elif len(content) < 1:
        errors.append('Field "content" must have at least 1 item')
    elif len(content) > MAX_CONTINUATION_LINES:
        errors.append(
            f'Field "content" must have at most {MAX_CONTINUATION_LINES} items '
            "(allows for proper Fountain spacing with blank lines)"
        )
    else:
        for index, line in enumerate(content):
            if not isinstance(line, str):
                errors.append(f"Content item {index} must be a string")
            elif line.strip() and _is_heading_like(line):
                errors.append(f"Content item {index} contains a scene heading (forbidden)")

    _check_line_count(payload, errors)

    if context_before_cursor and isinstance(content, list):
        for index in find_duplicate_lines(content, context_before_cursor):
            errors.append(f"Content item {index} is a duplicate of content before cursor")

    joined = "\n".join(content).strip() if not errors else ""
    return _finish(payload, errors, joined)


def validate_screenwriter_content(
    response: str,
    context_before_cursor: str | None = None,
) -> ValidationResult:
    """Screenwriter suggestions share the continuation envelope."""
    return validate_screenplay_content(response, context_before_cursor)


def director_max_lines(generation_length: GenerationLength, scene_count: int) -> int:
    """Content item limit for a director generation length."""
    if generation_length == "short":
        return MAX_SHORT_DIRECTOR_LINES
    if generation_length == "multiple":
        return scene_count * LINES_PER_SCENE
    return MAX_DIRECTOR_LINES


def validate_director_content(
    response: str,
    context_before_cursor: str | None = None,
    generation_length: GenerationLength = "full",
    scene_count: int | None = None,
) -> ValidationResult:
    """Validate longer director output in the continuation envelope.

    The line limit is 15 for ``short``, 50 for ``full`` and
    ``scene_count * 50`` for ``multiple``. Scene headings are allowed, but
    one repeating a heading (or its location) already in the context is not.
    """
    if scene_count is None:
        scene_count = get_settings().default_scene_count

    payload, errors = _parse(response)
    if errors:
        return ValidationResult(valid=False, errors=errors)
    errors = _check_object(payload)
    if errors:
        return ValidationResult(valid=False, errors=errors, raw_json=payload)

    max_lines = director_max_lines(generation_length, scene_count)
    content = payload.get("content")
    if _is_missing(content):
        errors.append('Missing required field: "content"')
    elif not isinstance(content, list):
        errors.append('Field "content" must be an array')
    elif len(content) < 1:
        errors.append('Field "content" must have at least 1 item')
    elif len(content) > max_lines:
        errors.append(
            f'Field "content" must have at most {max_lines} items (got {len(content)})'
        )
    else:
        for index, line in enumerate(content):
            if not isinstance(line, str):
                errors.append(f"Content item {index} must be a string")

    _check_line_count(payload, errors)

    if context_before_cursor and isinstance(content, list):
        context_lines = _context_lines(context_before_cursor)
        duplicates = set(find_duplicate_lines(content, context_before_cursor))
        for index, line in enumerate(content):
            if not isinstance(line, str):
                continue
            if _is_heading_like(line):
                if _is_duplicate_heading(line, context_lines):
                    errors.append(
                        f"Content item {index} is a duplicate scene heading "
                        "from content before cursor"
                    )
            elif index in duplicates:
                errors.append(f"Content item {index} is a duplicate of content before cursor")

    joined = "\n".join(content).strip() if not errors else ""
    return _finish(payload, errors, joined)


def validate_rewrite_content(response: str) -> ValidationResult:
    """Validate ``{"rewrittenText": ...}``; leading whitespace is removed."""
    payload, errors = _parse(response)
    if errors:
        return ValidationResult(valid=False, errors=errors)
    errors = _check_object(payload)
    if errors:
        return ValidationResult(valid=False, errors=errors, raw_json=payload)

    text = payload.get("rewrittenText")
    if _is_missing(text):
        errors.append('Missing required field: "rewrittenText"')
    elif not isinstance(text, str):
        errors.append('Field "rewrittenText" must be a string')
    elif not text.strip():
        errors.append('Field "rewrittenText" cannot be empty')

    return _finish(payload, errors, text.lstrip() if not errors else "")


def _check_scene(scene: Any, number: int, errors: list[str]) -> None:
    if not isinstance(scene, dict):
        errors.append(f"Scene {number} must be an object")
        return

    heading = scene.get("heading")
    if _is_missing(heading):
        errors.append(f'Scene {number}: Missing required field "heading"')
    elif not isinstance(heading, str):
        errors.append(f'Scene {number}: Field "heading" must be a string')
    elif not is_scene_heading(heading):
        errors.append(f"Scene {number}: Heading must start with INT./EXT./I/E.")

    content = scene.get("content")
    if _is_missing(content):
        errors.append(f'Scene {number}: Missing required field "content"')
    elif not isinstance(content, list):
        errors.append(f'Scene {number}: Field "content" must be an array')
    elif len(content) < MIN_SCENE_LINES:
        errors.append(f"Scene {number}: Content must have at least {MIN_SCENE_LINES} lines")
    elif len(content) > MAX_SCENE_LINES:
        errors.append(f"Scene {number}: Content must have at most {MAX_SCENE_LINES} lines")
    else:
        for line_number, line in enumerate(content, start=1):
            if not isinstance(line, str):
                errors.append(f"Scene {number}, line {line_number}: Must be a string")
                continue
            stripped = line.strip()
            if stripped.startswith("="):
                errors.append(
                    f"Scene {number}, line {line_number}: Synopses (lines starting "
                    "with =) are not allowed in scene content"
                )
            if stripped.startswith("#"):
                errors.append(
                    f"Scene {number}, line {line_number}: Act breaks (lines starting "
                    "with #) are not allowed in scene content"
                )


def _warn_total_lines(payload: dict[str, Any]) -> None:
    if "totalLines" not in payload:
        return
    total_lines = payload["totalLines"]
    if not _is_number(total_lines):
        logger.warning("totalLines is not a number, ignoring", total_lines=total_lines)
        return
    scenes = payload.get("scenes")
    actual = 0
    if isinstance(scenes, list):
        for scene in scenes:
            if isinstance(scene, dict) and isinstance(scene.get("content"), list):
                actual += len(scene["content"])
    if total_lines != actual:
        logger.warning(
            "totalLines does not match scene content length, continuing",
            total_lines=total_lines,
            actual=actual,
        )


def validate_director_modal_content(
    response: str,
    context_before_cursor: str | None = None,
    expected_scene_count: int = 1,
) -> ValidationResult:
    """Validate 1-3 generated scenes.

    The scene count must equal ``expected_scene_count``; each scene needs a
    heading and 5-50 content lines free of synopses and act breaks. A
    mismatched ``totalLines`` is only logged. On success each scene renders
    as ``heading``, a blank line, then its content, and scenes are separated
    by a blank line.
    """
    payload, errors = _parse(response)
    if errors:
        return ValidationResult(valid=False, errors=errors)
    errors = _check_object(payload)
    if errors:
        return ValidationResult(valid=False, errors=errors, raw_json=payload)

    scenes = payload.get("scenes")
    if _is_missing(scenes):
        errors.append('Missing required field: "scenes"')
    elif not isinstance(scenes, list):
        errors.append('Field "scenes" must be an array')
    elif len(scenes) < 1:
        errors.append('Field "scenes" must have at least 1 scene')
    elif len(scenes) > MAX_SCENES:
        errors.append(f'Field "scenes" must have at most {MAX_SCENES} scenes')
    elif len(scenes) != expected_scene_count:
        errors.append(f"Expected {expected_scene_count} scene(s), got {len(scenes)}")
    else:
        for number, scene in enumerate(scenes, start=1):
            _check_scene(scene, number, errors)

    _warn_total_lines(payload)

    if context_before_cursor and isinstance(scenes, list):
        context_lines = _context_lines(context_before_cursor)
        for number, scene in enumerate(scenes, start=1):
            heading = scene.get("heading") if isinstance(scene, dict) else None
            if isinstance(heading, str) and heading and _is_duplicate_heading(
                heading, context_lines
            ):
                errors.append(
                    f"Scene {number}: Scene heading is a duplicate of content before cursor"
                )

    if errors:
        return _finish(payload, errors, "")

    rendered = [
        f"{scene['heading'].strip()}\n\n{chr(10).join(scene['content']).strip()}"
        for scene in scenes
    ]
    return _finish(payload, errors, "\n\n".join(rendered))


def validate_dialogue_content(
    response: str,
    context_before_cursor: str | None = None,
) -> ValidationResult:
    """Validate dialogue exchanges and render them as Fountain.

    Each exchange renders as the uppercase cue, an optional ``(subtext)``
    parenthetical and the line; exchanges are separated by a blank line.
    """
    payload, errors = _parse(response)
    if errors:
        return ValidationResult(valid=False, errors=errors)
    errors = _check_object(payload)
    if errors:
        return ValidationResult(valid=False, errors=errors, raw_json=payload)

    dialogue = payload.get("dialogue")
    if _is_missing(dialogue):
        errors.append('Missing required field: "dialogue"')
    elif not isinstance(dialogue, list):
        errors.append('Field "dialogue" must be an array')
    elif len(dialogue) < 1:
        errors.append('Field "dialogue" must have at least 1 exchange')
    else:
        for number, exchange in enumerate(dialogue, start=1):
            _check_exchange(exchange, number, errors)

    if "breakdown" in payload and not isinstance(payload["breakdown"], str):
        errors.append('Field "breakdown" must be a string')

    if context_before_cursor and isinstance(dialogue, list):
        lines = [ex.get("line") for ex in dialogue if isinstance(ex, dict)]
        for index in find_duplicate_lines(lines, context_before_cursor):
            errors.append(
                f"Dialogue exchange {index + 1}: Line is a duplicate of content before cursor"
            )

    if errors:
        return _finish(payload, errors, "")

    rendered = []
    for exchange in dialogue:
        block = f"{exchange['character'].upper()}\n"
        subtext = exchange.get("subtext")
        if isinstance(subtext, str) and subtext.strip():
            block += f"({subtext.strip()})\n"
        block += exchange["line"]
        rendered.append(block)
    return _finish(payload, errors, "\n\n".join(rendered))


def _check_exchange(exchange: Any, number: int, errors: list[str]) -> None:
    prefix = f"Dialogue exchange {number}"
    if not isinstance(exchange, dict):
        errors.append(f"{prefix} must be an object")
        return

    character = exchange.get("character")
    if _is_missing(character):
        errors.append(f'{prefix}: Missing required field "character"')
    elif not isinstance(character, str):
        errors.append(f'{prefix}: Field "character" must be a string')
    elif character != character.upper():
        errors.append(f"{prefix}: Character name must be in ALL CAPS")

    line = exchange.get("line")
    if _is_missing(line):
        errors.append(f'{prefix}: Missing required field "line"')
    elif not isinstance(line, str):
        errors.append(f'{prefix}: Field "line" must be a string')
    elif not line.strip():
        errors.append(f'{prefix}: Field "line" cannot be empty')

    if "subtext" in exchange and not isinstance(exchange["subtext"], str):
        errors.append(f'{prefix}: Field "subtext" must be a string')
