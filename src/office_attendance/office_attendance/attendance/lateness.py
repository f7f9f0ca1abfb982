from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from ..common.datetime_utils import parse_hhmm
from ..core.constants import DEFAULT_WORK_START_TIME


@dataclass(frozen=True)
class LatenessDecision:
    is_late: bool
    minutes_late: int = 0


@dataclass(frozen=True)
class LatenessPolicy:
    """Classify a check-in against the configured start of the working day.

    A check-in is late only when it is strictly after ``start_of_day``;
    ``minutes_late`` is floored, so 09:00:59 is late by 0 minutes.
    Callers pass same-day timestamps only.
    """

    start_of_day: time = parse_hhmm(DEFAULT_WORK_START_TIME)

    @classmethod
    def from_hhmm(cls, value: str) -> "LatenessPolicy":
        return cls(start_of_day=parse_hhmm(value))

    def evaluate(self, check_in_time: datetime) -> LatenessDecision:
        start = datetime.combine(check_in_time.date(), self.start_of_day, tzinfo=check_in_time.tzinfo)
        if check_in_time <= start:
            return LatenessDecision(is_late=False)

        minutes = int((check_in_time - start).total_seconds() // 60)
        return LatenessDecision(is_late=True, minutes_late=max(minutes, 0))
