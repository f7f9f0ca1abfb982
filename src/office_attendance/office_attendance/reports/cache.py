from __future__ import annotations

import json
import logging
from datetime import date
from typing import Optional

from ..cache.redis_base import redis_call
from ..core.constants import DEFAULT_REPORT_CACHE_TTL_SECONDS, REPORT_CACHE_KEY_PREFIX
from .model import AttendanceReport

logger = logging.getLogger(__name__)


class ReportCache:
    """TTL cache of reports keyed by the literal (start, end) pair.

    Entries are never invalidated by attendance writes; a cached report may
    lag the database by up to ``ttl_seconds``. Each entry is written with a
    single ``SET ... EX``, so a reader gets a whole report or nothing.
    """

    def __init__(self, client, *, ttl_seconds: int = DEFAULT_REPORT_CACHE_TTL_SECONDS):
        self._client = client
        self._ttl_seconds = int(ttl_seconds)

    @staticmethod
    def key_for(start: date, end: date) -> str:
        return f"{REPORT_CACHE_KEY_PREFIX}:{start.isoformat()}:{end.isoformat()}"

    def get(self, start: date, end: date) -> Optional[AttendanceReport]:
        key = self.key_for(start, end)
        with redis_call("report read"):
            raw = self._client.get(key)
        if raw is None:
            return None

        try:
            return AttendanceReport.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning(f"Ignoring unreadable cached report {key}: {exc}")
            return None

    def put(self, start: date, end: date, report: AttendanceReport, ttl: Optional[int] = None) -> None:
        payload = json.dumps(report.to_dict(), separators=(",", ":"))
        with redis_call("report write"):
            self._client.set(self.key_for(start, end), payload, ex=int(ttl or self._ttl_seconds))
