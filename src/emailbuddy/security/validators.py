"""
Input Validators - validation for values crossing the companion's boundaries.

Parse at the boundary: request bodies, the stored config.json and the
STYLE.md document are checked here before they reach the rewrite pipeline.
Every failure raises ValidationError with a message that is safe to return
to the browser extension verbatim.
"""

import logging

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised when input validation fails. Contains a user-friendly message."""

    pass


def validate_not_empty(value: object, field_name: str = "input") -> str:
    """Validate that a value is a string that is not empty or whitespace-only."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} must be a non-empty string")
    return value.strip()


def validate_length(
    value: str,
    field_name: str = "input",
    min_length: int = 0,
    max_length: int = 100_000,
) -> str:
    """Validate string length is within bounds."""
    if len(value) < min_length:
        raise ValidationError(f"{field_name} must be at least {min_length} characters")
    if len(value) > max_length:
        raise ValidationError(f"{field_name} must be at most {max_length} characters")
    return value


def validate_in_choices(value: str, choices: list[str], field_name: str = "value") -> str:
    """Validate that a value is one of the allowed choices."""
    if value not in choices:
        raise ValidationError(f"{field_name} must be one of: {', '.join(choices)}")
    return value


def validate_int_range(
    value: object,
    field_name: str = "number",
    minimum: int | None = None,
    maximum: int | None = None,
) -> int:
    """
    Validate an integer-valued setting and its bounds.

    Accepts ints and integral floats/strings ("12000", 12000.0) the way JSON
    round-trips them; rejects booleans, fractions and anything non-numeric.
    """
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    if isinstance(value, int):
        result = value
    else:
        try:
            number = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError):
            raise ValidationError(f"{field_name} must be an integer")
        if number != number or number in (float("inf"), float("-inf")) or not number.is_integer():
            raise ValidationError(f"{field_name} must be an integer")
        result = int(number)

    if (minimum is not None and result < minimum) or (
        maximum is not None and result > maximum
    ):
        raise ValidationError(f"{field_name} must be between {minimum} and {maximum}")
    return result


def validate_list_size(
    items: list,
    field_name: str = "list",
    max_items: int = 100,
) -> list:
    """Validate that a list does not exceed a maximum number of items."""
    if len(items) > max_items:
        raise ValidationError(
            f"{field_name} cannot have more than {max_items} items (got {len(items)})"
        )
    return items
