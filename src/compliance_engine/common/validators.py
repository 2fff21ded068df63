from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import InvalidRangeError, ValidationError


def require_between(value: float, field_name: str, low: float, high: float) -> float:
    if value is None or not (low <= value <= high):
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return value


def require_valid_range(start: date, end: date, *, max_days: Optional[int] = None) -> None:
    if end < start:
        raise InvalidRangeError(f"End date {end.isoformat()} precedes start date {start.isoformat()}")

    span = (end - start).days + 1
    if max_days is not None and span > max_days:
        raise InvalidRangeError(f"Range of {span} days exceeds the maximum of {max_days}")
