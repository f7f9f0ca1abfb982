from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_positive_id
from ..core.exceptions import (
    CacheUnavailable,
    Conflict,
    DuplicateCheckIn,
    NoOpenCheckIn,
    NotFound,
    QueueUnavailable,
    StorageUnavailable,
    ValidationError,
)
from ..employees.repository import EmployeeRepository
from ..notifications.dispatcher import NotificationDispatcher
from ..notifications.model import NotificationJob
from ..reports.model import AttendanceReport
from ..reports.service import AttendanceReportService
from .duplicate_guard import DuplicateGuard
from .lateness import LatenessPolicy
from .model import AttendanceRecord, CheckInResult, CheckOutResult, PresenceEntry
from .presence import PresenceTracker
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

WARN_CLAIM_SKIPPED = "duplicate_guard_unavailable"
WARN_PRESENCE_STALE = "presence_not_updated"
WARN_NOTIFICATION_NOT_QUEUED = "late_notification_not_queued"


class AttendanceEngine:
    """Check-in/check-out state machine per (employee, date).

    ``NO_RECORD -> CHECKED_IN -> CHECKED_OUT``. Every transition writes the
    database first and Redis second; a failure after the database write
    leaves only derived state stale, which ``rebuild_presence`` repairs.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        guard: DuplicateGuard,
        presence: PresenceTracker,
        dispatcher: NotificationDispatcher,
        lateness: Optional[LatenessPolicy] = None,
        reports: Optional[AttendanceReportService] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._guard = guard
        self._presence = presence
        self._dispatcher = dispatcher
        self._lateness = lateness or LatenessPolicy()
        self._reports = reports or AttendanceReportService(attendance)

    def check_in(self, employee_id: int, employee_name: str, *, now: Optional[datetime] = None) -> CheckInResult:
        employee_id = require_positive_id(employee_id, "employee_id")
        employee_name = require_non_empty(employee_name, "employee_name")
        now = (now or now_local()).replace(microsecond=0)
        today = now.date()
        warnings: list[str] = []

        try:
            if not self._guard.try_claim(employee_id, today, now):
                raise DuplicateCheckIn()
        except CacheUnavailable as exc:
            # The unique key on attendance still rejects duplicates, just later.
            logger.warning(f"Check-in claim skipped for employee {employee_id}: {exc}")
            warnings.append(WARN_CLAIM_SKIPPED)

        try:
            self._attendance.upsert_check_in(employee_id, today, now)
        except Conflict as exc:
            raise DuplicateCheckIn() from exc
        except (StorageUnavailable, ValidationError):
            self._release_claim(employee_id, today)
            raise

        # Committed: nothing below may turn this into a failure.
        logger.info(f"Employee {employee_id} checked in at {now.isoformat()}")

        try:
            self._presence.add(employee_id)
        except CacheUnavailable as exc:
            logger.warning(f"Presence not updated after check-in of employee {employee_id}: {exc}")
            warnings.append(WARN_PRESENCE_STALE)

        decision = self._lateness.evaluate(now)
        if decision.is_late:
            job = NotificationJob(
                employee_id=employee_id,
                employee_name=employee_name,
                check_in_time=now,
                minutes_late=decision.minutes_late,
            )
            try:
                self._dispatcher.enqueue(job)
            except QueueUnavailable as exc:
                logger.error(f"Late notification for employee {employee_id} not queued: {exc}")
                warnings.append(WARN_NOTIFICATION_NOT_QUEUED)

        return CheckInResult(
            check_in_time=now,
            is_late=decision.is_late,
            minutes_late=decision.minutes_late,
            warnings=tuple(warnings),
        )

    def check_out(self, employee_id: int, *, now: Optional[datetime] = None) -> CheckOutResult:
        employee_id = require_positive_id(employee_id, "employee_id")
        now = (now or now_local()).replace(microsecond=0)
        warnings: list[str] = []

        try:
            self._attendance.record_check_out(employee_id, now.date(), now)
        except NotFound as exc:
            raise NoOpenCheckIn() from exc

        logger.info(f"Employee {employee_id} checked out at {now.isoformat()}")

        try:
            self._presence.remove(employee_id)
        except CacheUnavailable as exc:
            logger.warning(f"Presence not updated after check-out of employee {employee_id}: {exc}")
            warnings.append(WARN_PRESENCE_STALE)

        return CheckOutResult(check_out_time=now, warnings=tuple(warnings))

    def current_presence(self, *, today: Optional[date] = None) -> list[PresenceEntry]:
        try:
            ids = self._presence.members()
        except CacheUnavailable as exc:
            today = today or now_local().date()
            logger.warning(f"Presence set unavailable, reading open check-ins for {today}: {exc}")
            ids = set(self._attendance.open_employee_ids(today))

        if not ids:
            return []

        employees = self._employees.get_by_ids(ids)
        entries = [PresenceEntry(employee_id=e.employee_id, name=e.name, department=e.department) for e in employees]
        entries.sort(key=lambda p: (p.name, p.employee_id))
        return entries

    def today_record(self, employee_id: int, *, today: Optional[date] = None) -> Optional[AttendanceRecord]:
        """The employee's record for today, read from the database."""
        today = today or now_local().date()
        return self._attendance.get_for_employee_and_date(require_positive_id(employee_id, "employee_id"), today)

    def report(self, start_date: date, end_date: date) -> AttendanceReport:
        return self._reports.build_attendance_report(start=start_date, end=end_date)

    def rebuild_presence(self, *, as_of: Optional[date] = None) -> set[int]:
        """Reconcile the presence set with the database. Recovery only.

        Open ids are added, then the set is read back and only members the
        database shows as not open are removed. The second database read
        happens after the set is read, and check-ins commit before they
        touch the set, so a concurrent check-in is never dropped.
        """
        as_of = as_of or now_local().date()
        self._presence.add_many(self._attendance.open_employee_ids(as_of))

        current = self._presence.members()
        still_open = set(self._attendance.open_employee_ids(as_of))
        stale = current - still_open
        self._presence.remove_many(stale)

        members = current & still_open
        logger.info(f"Presence rebuilt for {as_of}: {len(members)} employees in office, {len(stale)} stale removed")
        return members

    def _release_claim(self, employee_id: int, work_date: date) -> None:
        try:
            self._guard.release(employee_id, work_date)
        except CacheUnavailable as exc:
            logger.warning(f"Check-in claim for employee {employee_id} left in place until expiry: {exc}")
