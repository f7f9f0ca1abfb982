from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..attendance.model import AttendanceReportRow


@dataclass(frozen=True)
class AttendanceReport:
    start_date: date
    end_date: date
    records: tuple[AttendanceReportRow, ...]

    def to_dict(self) -> dict:
        return {
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "records": [r.to_dict() for r in self.records],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceReport":
        return cls(
            start_date=date.fromisoformat(data["startDate"]),
            end_date=date.fromisoformat(data["endDate"]),
            records=tuple(AttendanceReportRow.from_dict(r) for r in data.get("records", [])),
        )
