from __future__ import annotations

from datetime import date, datetime, time

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    """Parse a wall-clock ``HH:MM`` setting such as ``09:00``."""
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except (AttributeError, ValueError) as exc:
        raise ValidationError(f"Invalid HH:MM value: {value!r}") from exc


def now_local() -> datetime:
    """Current local time truncated to whole seconds.

    Note: Wrapped so tests can patch/mock easier. MySQL DATETIME keeps
    seconds only, so anything finer would not survive a round trip.
    """
    return datetime.now().replace(microsecond=0)


def isoformat_or_none(value: datetime | date | None) -> str | None:
    return value.isoformat() if value is not None else None
