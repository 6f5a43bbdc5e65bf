"""
Input Validation and Rounding

Shared helpers used by every calculation endpoint: required-field checks,
positivity constraints and output rounding.
"""

import math
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Any, Iterable, List, Mapping, Optional

CENTS = Decimal("0.01")

# Enough digits to quantize any float, up to ~1.8e308, to cents
WIDE_CONTEXT = Context(prec=400)

NOT_FINITE_MESSAGE = "Inputs produce a result that is not a finite number"


class ValidationError(ValueError):
    """Raised when a calculation request is missing inputs or violates a constraint."""

    def __init__(self, message: str, fields: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.message = message
        self.fields: List[str] = list(fields or [])


def missing_fields(record: Mapping[str, Any], fields: Iterable[str]) -> List[str]:
    """Return the fields that are absent, None or zero in the record."""
    return [name for name in fields if not record.get(name)]


def require_fields(
    record: Mapping[str, Any],
    fields: Iterable[str],
    message: Optional[str] = None,
) -> None:
    """
    Ensure every required field is present and non-zero.

    A zero value is treated the same as a missing one.

    Args:
        record: Request fields keyed by their wire names
        fields: Names of the required fields
        message: Error message to use instead of the default

    Raises:
        ValidationError: If any required field is missing or zero
    """
    fields = list(fields)
    missing = missing_fields(record, fields)
    if missing:
        raise ValidationError(
            message or f"Missing required fields ({', '.join(fields)})",
            fields=missing,
        )


def require_positive(
    record: Mapping[str, Any],
    fields: Iterable[str],
    message: Optional[str] = None,
) -> None:
    """Ensure every named field is a number greater than zero."""
    invalid = [
        name for name in fields
        if record.get(name) is None or record[name] <= 0
    ]
    if invalid:
        raise ValidationError(
            message or f"Fields must be greater than 0 ({', '.join(invalid)})",
            fields=invalid,
        )


def round_currency(value: Optional[float]) -> Optional[float]:
    """
    Round to 2 decimal places, halves away from zero.

    Rounds the shortest decimal representation of the float, so 1.005
    becomes 1.01. None passes through unchanged.

    Raises:
        ValidationError: If the value is infinite, NaN or too large for a float
    """
    if value is None:
        return None
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(NOT_FINITE_MESSAGE)

    rounded = Decimal(repr(value)).quantize(CENTS, rounding=ROUND_HALF_UP, context=WIDE_CONTEXT)
    result = float(rounded)
    if not math.isfinite(result):
        raise ValidationError(NOT_FINITE_MESSAGE)
    # adding 0.0 turns -0.0 into 0.0
    return result + 0.0
