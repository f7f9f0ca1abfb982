from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    """Durable store of (employee, date) -> check-in/check-out.

    Implementations raise ``Conflict`` / ``NotFound`` for rule violations and
    ``StorageUnavailable`` for anything transient.
    """

    def upsert_check_in(self, employee_id: int, work_date: date, check_in_time: datetime) -> bool:
        """Insert the day's record; ``Conflict`` if one already exists."""

        raise NotImplementedError

    def record_check_out(self, employee_id: int, work_date: date, check_out_time: datetime) -> None:
        """Close the day's open record; ``NotFound`` if there is none."""

        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def open_employee_ids(self, work_date: date) -> Sequence[int]:
        raise NotImplementedError

    def fetch_range(self, start_date: date, end_date: date) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
