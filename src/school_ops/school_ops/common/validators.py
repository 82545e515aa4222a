from __future__ import annotations

import re
from enum import Enum
from typing import Type, TypeVar

from ..core.exceptions import InvalidArgumentError, ValidationError

E = TypeVar("E", bound=Enum)

_WHITESPACE = re.compile(r"\s+")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def normalize_person_name(value: str) -> str:
    """Trim and collapse internal whitespace so names compare consistently."""
    return _WHITESPACE.sub(" ", (value or "").strip())


def require_period(value: int, periods_per_day: int) -> int:
    # bools and fractional floats are not periods
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"Invalid period: {value!r}")
    try:
        period = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid period: {value!r}")
    if period < 1 or period > periods_per_day:
        raise ValidationError(f"Period must be between 1 and {periods_per_day}")
    return period


def coerce_enum(enum_cls: Type[E], value: object, field_name: str) -> E:
    """Accept an enum member or its value; anything else is a contract violation."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        value = value.strip().lower()
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidArgumentError(f"Invalid {field_name}: {value!r} (expected one of: {allowed})")
