"""Recovery of a JSON object from free-form model output."""

from __future__ import annotations

import json
import re
from typing import Any

from fountainkit.config import get_logger
from fountainkit.exceptions import JSONExtractionError

logger = get_logger(__name__)

_JSON_FENCE_RE = re.compile(r"```json\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
_ANY_FENCE_RE = re.compile(r"```\s*(.*?)\s*```", re.DOTALL)


def _span_end(text: str, start: int) -> int:
    """Index just past the ``}`` that closes the brace at ``start``, or -1.

    Braces inside JSON strings do not count.
    """
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        ch = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return index + 1
    return -1


def _first_object(text: str) -> dict[str, Any] | None:
    """Decode the first top-level ``{...}`` span in ``text`` that is a JSON object.

    A span that fails to decode is skipped whole; objects nested inside it are
    never tried on their own.
    """
    start = text.find("{")
    while start != -1:
        end = _span_end(text, start)
        if end == -1:
            return None
        try:
            value = json.loads(text[start:end])
        except json.JSONDecodeError:
            value = None
        if isinstance(value, dict):
            return value
        start = text.find("{", end)
    return None


def extract_json_payload(raw: str) -> Any:
    """Parse model output that should contain one JSON object.

    Strategies, in order:

    1. The whole (stripped) text as JSON.
    2. The body of a ```json fenced block.
    3. The body of any fenced block that starts with ``{``.
    4. The first balanced top-level ``{...}`` object anywhere in the text.

    Args:
        raw: Raw model output

    Returns:
        The decoded value. Strategy 1 may yield a non-object; callers check.

    Raises:
        JSONExtractionError: If no strategy produces valid JSON.
    """
    text = raw.strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        last_error = e

    candidate = None
    fenced = _JSON_FENCE_RE.search(text)
    if fenced:
        candidate = fenced.group(1).strip()
    else:
        block = _ANY_FENCE_RE.search(text)
        if block and block.group(1).strip().startswith("{"):
            candidate = block.group(1).strip()

    if candidate is not None:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError as e:
            last_error = e

    found = _first_object(candidate) if candidate is not None else None
    if found is None:
        found = _first_object(text)
    if found is not None:
        return found

    logger.debug(
        "No JSON object found in model output",
        error=str(last_error),
        preview=(candidate or text)[:200],
    )
    raise JSONExtractionError(candidate or text, str(last_error))
