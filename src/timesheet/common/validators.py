from __future__ import annotations

from datetime import date, time
from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_clock_time, parse_iso_date


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_iso_date(value: str, field_name: str) -> date:
    try:
        return parse_iso_date(require_non_empty(value, field_name))
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date") from None


def optional_clock_time(value: Optional[str], field_name: str) -> Optional[time]:
    if value is None or not str(value).strip():
        return None
    try:
        return parse_clock_time(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be an HH:MM time") from None


def optional_non_negative_int(value, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number") from None
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number
