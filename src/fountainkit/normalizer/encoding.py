"""Repair of UTF-8 text that was decoded as Windows-1252 (mojibake).

Pasting from word processors frequently turns typographic punctuation into
sequences such as ``â€™``. The table below is applied in order; the bare
``â€`` + U+FFFD form must follow the longer sequences that share its prefix.
"""

from __future__ import annotations

import re

_REPLACEMENT_CHAR = "�"

MOJIBAKE_TABLE: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile("â€™"), "'"),  # â€™ right single quote
    (re.compile("â€˜"), "'"),  # â€˜ left single quote
    (re.compile("â€œ"), '"'),  # â€œ left double quote
    (re.compile("â€\u009d"), '"'),  # â€ + C1 control, right double quote
    (re.compile("â€”"), "—"),  # â€” em dash
    (re.compile("â€“"), "–"),  # â€“ en dash
    (re.compile("â€¦"), "…"),  # â€¦ ellipsis
    (re.compile("â€�"), '"'),  # â€ + lost byte, right double quote
)


def _replacement_for(text: str, index: int) -> str:
    before = text[index - 1] if index > 0 else ""
    after = text[index + 1] if index + 1 < len(text) else ""
    if before.isalnum() and after.isalnum():
        return "'"
    if before.isspace() or after.isspace():
        return '"'
    return "'"


def _repair_replacement_chars(text: str) -> str:
    if _REPLACEMENT_CHAR not in text:
        return text
    pieces = []
    for index, char in enumerate(text):
        if char == _REPLACEMENT_CHAR:
            pieces.append(_replacement_for(text, index))
        else:
            pieces.append(char)
    return "".join(pieces)


def fix_character_encoding(text: str) -> str:
    """Replace known mojibake sequences and stray U+FFFD characters.

    A replacement character between two alphanumerics becomes an apostrophe,
    one touching whitespace on either side becomes a double quote, anything
    else an apostrophe. Neighbours are read from the text before repair.

    Example:
        >>> fix_character_encoding("Itâ€™s raining")
        "It's raining"
    """
    for pattern, replacement in MOJIBAKE_TABLE:
        text = pattern.sub(replacement, text)
    return _repair_replacement_chars(text)


def detect_encoding_issues(text: str) -> bool:
    """Return True if ``text`` contains anything ``fix_character_encoding`` repairs."""
    if _REPLACEMENT_CHAR in text:
        return True
    return any(pattern.search(text) for pattern, _ in MOJIBAKE_TABLE)
