"""Self-correcting retry protocol for AI-generated JSON."""

from __future__ import annotations

from collections.abc import Callable

from fountainkit.ai.json_validator import ValidationResult
from fountainkit.config import get_logger, get_settings
from fountainkit.exceptions import ValidationError

logger = get_logger(__name__)

RETRY_NOTICE = "⚠️ PREVIOUS ATTEMPT FAILED VALIDATION:"
RETRY_INSTRUCTION = (
    "Please respond with ONLY valid JSON. No explanations, no markdown "
    "formatting, just the raw JSON object."
)


def build_retry_prompt(original_prompt: str, errors: list[str]) -> str:
    """Append the validation errors and a strict JSON instruction to a prompt."""
    bullet_list = "\n".join(f"- {error}" for error in errors)
    return f"{original_prompt}\n\n{RETRY_NOTICE}\n{bullet_list}\n\n{RETRY_INSTRUCTION}"


def generate_with_validation(
    generate: Callable[[str], str],
    prompt: str,
    validator: Callable[[str], ValidationResult],
    max_attempts: int | None = None,
) -> ValidationResult:
    """Call ``generate`` until ``validator`` accepts its output.

    Every retry is sent the original prompt extended with the previous
    attempt's errors, never a prompt that already carries earlier errors.

    Args:
        generate: Callable that sends a prompt to the model and returns its text
        prompt: The original prompt
        validator: One of the ``validate_*`` functions, partially applied
        max_attempts: Total number of calls, defaults to ``retry_max_attempts``

    Returns:
        The first valid result, or the last invalid one when attempts run out.

    Raises:
        ValidationError: If ``max_attempts`` is below 1
    """
    if max_attempts is None:
        max_attempts = get_settings().retry_max_attempts
    if max_attempts < 1:
        raise ValidationError(
            message=f"max_attempts must be at least 1, got {max_attempts}",
            hint="Set retry_max_attempts between 1 and 10",
        )

    current_prompt = prompt
    result = ValidationResult(valid=False)
    for attempt in range(1, max_attempts + 1):
        result = validator(generate(current_prompt))
        if result.valid:
            if attempt > 1:
                logger.info("AI response valid after retry", attempt=attempt)
            return result
        logger.warning(
            "AI response failed validation",
            attempt=attempt,
            max_attempts=max_attempts,
            errors=result.errors,
        )
        current_prompt = build_retry_prompt(prompt, result.errors)

    return result
