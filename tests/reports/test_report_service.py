from __future__ import annotations

from datetime import date, datetime

import pytest

from office_attendance.core.exceptions import InvalidRange
from office_attendance.reports.cache import ReportCache
from office_attendance.reports.model import AttendanceReport
from office_attendance.reports.service import AttendanceReportService

DAY = date(2026, 2, 2)


class CountingRepo:
    def __init__(self, inner):
        self._inner = inner
        self.calls = 0

    def fetch_range(self, start_date, end_date):
        self.calls += 1
        return self._inner.fetch_range(start_date, end_date)


def test_report_is_stale_within_ttl_and_fresh_after(engine, fake_redis):
    engine.check_in(3, "Alice Smith", now=datetime(2026, 2, 2, 8, 30))
    first = engine.report(DAY, DAY)

    engine.check_in(7, "Eve Anderson", now=datetime(2026, 2, 2, 9, 5))
    second = engine.report(DAY, DAY)
    assert second == first

    fake_redis.advance(3600)
    third = engine.report(DAY, DAY)
    eve = [r for r in third.records if r.employee_id == 7]
    assert eve[0].check_in_time == datetime(2026, 2, 2, 9, 5)
    assert third != first


def test_report_left_joins_employees_ordered_by_name_then_date(engine):
    engine.check_in(7, "Eve Anderson", now=datetime(2026, 2, 1, 8, 0))
    engine.check_in(7, "Eve Anderson", now=datetime(2026, 2, 2, 8, 0))
    engine.check_in(3, "Alice Smith", now=datetime(2026, 2, 2, 8, 10))

    report = engine.report(date(2026, 2, 1), DAY)

    assert [(r.name, r.work_date) for r in report.records] == [
        ("Alice Smith", DAY),
        ("Bob Davis", None),
        ("Eve Anderson", date(2026, 2, 1)),
        ("Eve Anderson", DAY),
    ]
    bob = report.records[1]
    assert bob.check_in_time is None and bob.check_out_time is None


def test_overlapping_ranges_are_cached_independently(attendance_repo, fake_redis):
    repo = CountingRepo(attendance_repo)
    svc = AttendanceReportService(repo, cache=ReportCache(fake_redis))

    svc.build_attendance_report(start=date(2026, 2, 1), end=date(2026, 2, 28))
    svc.build_attendance_report(start=date(2026, 2, 1), end=date(2026, 2, 28))
    svc.build_attendance_report(start=date(2026, 2, 2), end=date(2026, 2, 28))

    assert repo.calls == 2
    assert fake_redis.get("report:2026-02-01:2026-02-28") is not None
    assert fake_redis.ttl("report:2026-02-01:2026-02-28") == 3600


def test_end_before_start_is_invalid(engine):
    with pytest.raises(InvalidRange):
        engine.report(date(2026, 2, 3), date(2026, 2, 2))


def test_single_day_range_is_valid(engine):
    report = engine.report(DAY, DAY)
    assert report.start_date == report.end_date == DAY


def test_cache_down_still_serves_report(attendance_repo, fake_redis):
    repo = CountingRepo(attendance_repo)
    svc = AttendanceReportService(repo, cache=ReportCache(fake_redis))
    fake_redis.down = True

    report = svc.build_attendance_report(start=DAY, end=DAY)

    assert isinstance(report, AttendanceReport)
    assert repo.calls == 1


def test_unreadable_cache_entry_is_a_miss(attendance_repo, fake_redis):
    repo = CountingRepo(attendance_repo)
    svc = AttendanceReportService(repo, cache=ReportCache(fake_redis))
    fake_redis.set("report:2026-02-02:2026-02-02", "{not json", ex=3600)

    svc.build_attendance_report(start=DAY, end=DAY)

    assert repo.calls == 1


def test_report_payload_shape(engine):
    engine.check_in(3, "Alice Smith", now=datetime(2026, 2, 2, 8, 30))
    engine.check_out(3, now=datetime(2026, 2, 2, 17, 0))

    payload = engine.report(DAY, DAY).to_dict()

    assert payload["startDate"] == "2026-02-02"
    assert payload["endDate"] == "2026-02-02"
    assert payload["records"][0] == {
        "employeeId": 3,
        "name": "Alice Smith",
        "department": "IT",
        "date": "2026-02-02",
        "checkIn": "2026-02-02T08:30:00",
        "checkOut": "2026-02-02T17:00:00",
    }
