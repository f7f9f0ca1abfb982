from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.validators import require_date_range
from ..core.exceptions import CacheUnavailable
from .cache import ReportCache
from .model import AttendanceReport

logger = logging.getLogger(__name__)


class AttendanceReportService:
    """Read-through report builder: cache first, then the join query."""

    def __init__(self, attendance: AttendanceRepository, *, cache: Optional[ReportCache] = None):
        self._attendance = attendance
        self._cache = cache

    def build_attendance_report(self, *, start: date, end: date) -> AttendanceReport:
        require_date_range(start, end)

        cached = self._cached(start, end)
        if cached is not None:
            return cached

        rows = self._attendance.fetch_range(start, end)
        report = AttendanceReport(start_date=start, end_date=end, records=tuple(rows))

        if self._cache is not None:
            try:
                self._cache.put(start, end, report)
            except CacheUnavailable as exc:
                logger.warning(f"Report {start}..{end} not cached: {exc}")
        return report

    def _cached(self, start: date, end: date) -> Optional[AttendanceReport]:
        if self._cache is None:
            return None
        try:
            return self._cache.get(start, end)
        except CacheUnavailable as exc:
            logger.warning(f"Report cache unavailable, querying database: {exc}")
            return None
