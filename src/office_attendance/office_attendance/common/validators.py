from __future__ import annotations

from datetime import date

from ..core.exceptions import InvalidRange, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_positive_id(value, field_name: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field_name} must be an integer") from exc
    if parsed <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return parsed


def require_date_range(start: date, end: date) -> tuple[date, date]:
    if end < start:
        raise InvalidRange(f"End date {end.isoformat()} is before start date {start.isoformat()}")
    return start, end
