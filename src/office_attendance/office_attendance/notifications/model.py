from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from ..core.constants import LATE_NOTIFICATION_JOB


@dataclass(frozen=True)
class NotificationJob:
    """A late-arrival notification waiting for the worker.

    ``attempts`` counts failed deliveries so far.
    """

    employee_id: int
    employee_name: str
    check_in_time: datetime
    minutes_late: int
    attempts: int = 0

    def failed_once(self) -> "NotificationJob":
        return replace(self, attempts=self.attempts + 1)

    def to_payload(self) -> dict:
        return {
            "name": LATE_NOTIFICATION_JOB,
            "attempts": self.attempts,
            "data": {
                "employeeId": self.employee_id,
                "employeeName": self.employee_name,
                "checkInTime": self.check_in_time.isoformat(),
                "minutesLate": self.minutes_late,
            },
        }

    @classmethod
    def from_payload(cls, payload: dict) -> "NotificationJob":
        data = payload["data"]
        return cls(
            employee_id=int(data["employeeId"]),
            employee_name=str(data["employeeName"]),
            check_in_time=datetime.fromisoformat(data["checkInTime"]),
            minutes_late=int(data["minutesLate"]),
            attempts=int(payload.get("attempts", 0)),
        )
