"""Levenshtein-based string similarity."""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein


def similarity(first: str, second: str, max_length: int | None = None) -> float:
    """Return ``(len(longer) - edit_distance) / len(longer)`` in ``[0, 1]``.

    Two empty strings are identical. Inputs are truncated to ``max_length``
    characters first so a pathological candidate cannot blow up the O(n*m)
    distance computation.
    """
    if max_length is not None:
        first = first[:max_length]
        second = second[:max_length]
    longer = max(len(first), len(second))
    if longer == 0:
        return 1.0
    return (longer - Levenshtein.distance(first, second)) / longer
