from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of error kinds the core can surface to its callers."""

    DUPLICATE_CHECK_IN = "DUPLICATE_CHECK_IN"
    NO_OPEN_CHECK_IN = "NO_OPEN_CHECK_IN"
    INVALID_RANGE = "INVALID_RANGE"
    VALIDATION = "VALIDATION"
    CONFLICT = "CONFLICT"
    NOT_FOUND = "NOT_FOUND"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    CACHE_UNAVAILABLE = "CACHE_UNAVAILABLE"
    QUEUE_UNAVAILABLE = "QUEUE_UNAVAILABLE"

    @property
    def is_client_error(self) -> bool:
        return self in _CLIENT_KINDS


_CLIENT_KINDS = frozenset(
    {
        ErrorKind.DUPLICATE_CHECK_IN,
        ErrorKind.NO_OPEN_CHECK_IN,
        ErrorKind.INVALID_RANGE,
        ErrorKind.VALIDATION,
    }
)


class AttendanceState(str, Enum):
    """Lifecycle of one (employee, date) attendance record."""

    NO_RECORD = "NO_RECORD"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
