from __future__ import annotations

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations and infrastructure failures."""

    kind: ErrorKind = ErrorKind.VALIDATION
    default_message = "Attendance operation failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = ErrorKind.VALIDATION
    default_message = "Invalid input"


class DuplicateCheckIn(DomainError):
    kind = ErrorKind.DUPLICATE_CHECK_IN
    default_message = "Already checked in today"


class NoOpenCheckIn(DomainError):
    kind = ErrorKind.NO_OPEN_CHECK_IN
    default_message = "No check-in record found for today"


class InvalidRange(DomainError):
    kind = ErrorKind.INVALID_RANGE
    default_message = "End date must not be before start date"


class Conflict(DomainError):
    """Store-level: a record already exists for (employee, date)."""

    kind = ErrorKind.CONFLICT
    default_message = "Attendance record already exists"


class NotFound(DomainError):
    """Store-level: no open record matched the update."""

    kind = ErrorKind.NOT_FOUND
    default_message = "Attendance record not found"


class StorageUnavailable(DomainError):
    kind = ErrorKind.STORAGE_UNAVAILABLE
    default_message = "Attendance storage is unavailable"


class CacheUnavailable(DomainError):
    kind = ErrorKind.CACHE_UNAVAILABLE
    default_message = "Cache is unavailable"


class QueueUnavailable(DomainError):
    kind = ErrorKind.QUEUE_UNAVAILABLE
    default_message = "Notification queue is unavailable"
