from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import AttendanceState


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one day."""

    employee_id: int
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def state(self) -> AttendanceState:
        if self.check_in_time is None:
            return AttendanceState.NO_RECORD
        if self.check_out_time is None:
            return AttendanceState.CHECKED_IN
        return AttendanceState.CHECKED_OUT


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reports: employees LEFT JOIN attendance.

    ``work_date`` and the times are ``None`` for employees without any
    record in the requested range.
    """

    employee_id: int
    name: str
    department: Optional[str]
    work_date: Optional[date]
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "name": self.name,
            "department": self.department,
            "date": isoformat_or_none(self.work_date),
            "checkIn": isoformat_or_none(self.check_in_time),
            "checkOut": isoformat_or_none(self.check_out_time),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceReportRow":
        return cls(
            employee_id=int(data["employeeId"]),
            name=data["name"],
            department=data.get("department"),
            work_date=date.fromisoformat(data["date"]) if data.get("date") else None,
            check_in_time=datetime.fromisoformat(data["checkIn"]) if data.get("checkIn") else None,
            check_out_time=datetime.fromisoformat(data["checkOut"]) if data.get("checkOut") else None,
        )


@dataclass(frozen=True)
class PresenceEntry:
    employee_id: int
    name: str
    department: Optional[str]

    def to_dict(self) -> dict:
        return {"employeeId": self.employee_id, "name": self.name, "department": self.department}


@dataclass(frozen=True)
class CheckInResult:
    check_in_time: datetime
    is_late: bool
    minutes_late: int = 0
    # Side-channel warnings: the check-in committed but a follow-up step did not.
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "message": "Checked in successfully",
            "checkInTime": self.check_in_time.isoformat(),
            "isLate": self.is_late,
            "minutesLate": self.minutes_late,
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class CheckOutResult:
    check_out_time: datetime
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "message": "Checked out successfully",
            "checkOutTime": self.check_out_time.isoformat(),
            "warnings": list(self.warnings),
        }
