"""Full normalization pipeline for pasted or imported screenplay text."""

from __future__ import annotations

from fountainkit.config import get_logger
from fountainkit.normalizer.encoding import (
    detect_encoding_issues,
    fix_character_encoding,
)
from fountainkit.normalizer.spacing import enforce_fountain_spacing
from fountainkit.normalizer.whitespace import normalize_whitespace

logger = get_logger(__name__)


def normalize_screenplay_text(content: str, *, enforce_spacing: bool = True) -> str:
    """Repair encoding, normalize whitespace and enforce Fountain spacing.

    Args:
        content: Raw screenplay text
        enforce_spacing: Whether to run the spacing enforcer as the last step

    Returns:
        Normalized text. Empty or whitespace-only input is returned unchanged.
    """
    if not content or not content.strip():
        return content

    has_encoding_issues = detect_encoding_issues(content)
    logger.debug(
        "Normalizing screenplay text",
        original_length=len(content),
        has_encoding_issues=has_encoding_issues,
    )

    normalized = fix_character_encoding(content)
    normalized = normalize_whitespace(normalized)
    if enforce_spacing:
        normalized = enforce_fountain_spacing(normalized)

    logger.debug(
        "Normalization complete",
        original_length=len(content),
        normalized_length=len(normalized),
        lines_original=content.count("\n") + 1,
        lines_normalized=normalized.count("\n") + 1,
    )
    return normalized
