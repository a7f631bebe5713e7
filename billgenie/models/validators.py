"""Model-level validation utilities for data integrity.

Provides reusable validators that enforce field constraints at the ORM level,
so invalid data never reaches the database regardless of which endpoint or
service writes it.
"""

from decimal import Decimal
from typing import Iterable

from billgenie.core.exceptions import ValidationError


def _as_decimal(value) -> Decimal:
    return Decimal(str(value)) if not isinstance(value, Decimal) else value


def non_negative(key: str, value):
    """Validate that a numeric value is >= 0."""
    if value is not None and _as_decimal(value) < 0:
        raise ValidationError(f"{key} cannot be negative, got {value}")
    return value


def at_least_one(key: str, value):
    """Validate that an integer value is >= 1."""
    if value is not None and value < 1:
        raise ValidationError(f"{key} must be at least 1, got {value}")
    return value


def one_of(key: str, value, allowed: Iterable[str]):
    """Validate that a value belongs to an enumerated set."""
    allowed = [getattr(a, "value", a) for a in allowed]
    raw = getattr(value, "value", value)
    if raw is not None and raw not in allowed:
        raise ValidationError(
            f"`{raw}` is not a valid value for {key}; expected one of {', '.join(allowed)}"
        )
    return raw


def string_list(key: str, value):
    """Validate that a JSON column value is a list of strings (or None)."""
    if value is not None:
        if not isinstance(value, list):
            raise ValidationError(f"{key} must be a list, got {type(value).__name__}")
        for i, item in enumerate(value):
            if not isinstance(item, str):
                raise ValidationError(f"{key}[{i}] must be a string, got {type(item).__name__}")
    return value
