from __future__ import annotations

import threading
from datetime import date, datetime
from typing import Optional

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from office_attendance.attendance.duplicate_guard import DuplicateGuard
from office_attendance.attendance.lateness import LatenessPolicy
from office_attendance.attendance.model import AttendanceRecord, AttendanceReportRow
from office_attendance.attendance.presence import PresenceTracker
from office_attendance.attendance.service import AttendanceEngine
from office_attendance.core.exceptions import Conflict, NotFound, StorageUnavailable, ValidationError
from office_attendance.employees.model import Employee
from office_attendance.notifications.dispatcher import RedisNotificationDispatcher
from office_attendance.reports.cache import ReportCache
from office_attendance.reports.service import AttendanceReportService


class FakeRedis:
    """Thread-safe stand-in for the slice of redis-py the app uses.

    Time is driven by ``advance`` so TTL behaviour is deterministic. Names in
    ``fail_on`` (or every command when ``down`` is set) raise ConnectionError.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._data: dict[str, object] = {}
        self._expires: dict[str, float] = {}
        self.now = 0.0
        self.down = False
        self.fail_on: set[str] = set()

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def ttl(self, key: str) -> Optional[float]:
        deadline = self._expires.get(key)
        return None if deadline is None else deadline - self.now

    def _check(self, command: str) -> None:
        if self.down or command in self.fail_on:
            raise RedisConnectionError(f"fake redis refused {command}")

    def _live(self, key: str):
        deadline = self._expires.get(key)
        if deadline is not None and deadline <= self.now:
            self._data.pop(key, None)
            self._expires.pop(key, None)
        return self._data.get(key)

    def set(self, key, value, nx=False, ex=None):
        self._check("set")
        with self._lock:
            if nx and self._live(key) is not None:
                return None
            self._data[key] = str(value)
            if ex is not None:
                self._expires[key] = self.now + int(ex)
            else:
                self._expires.pop(key, None)
            return True

    def get(self, key):
        self._check("get")
        with self._lock:
            value = self._live(key)
            return value if isinstance(value, str) else None

    def delete(self, *keys):
        self._check("delete")
        with self._lock:
            removed = 0
            for key in keys:
                if self._live(key) is not None:
                    removed += 1
                self._data.pop(key, None)
                self._expires.pop(key, None)
            return removed

    def sadd(self, key, *members):
        self._check("sadd")
        with self._lock:
            current = self._live(key)
            if current is None:
                current = set()
                self._data[key] = current
            before = len(current)
            current.update(str(m) for m in members)
            return len(current) - before

    def srem(self, key, *members):
        self._check("srem")
        with self._lock:
            current = self._live(key) or set()
            before = len(current)
            current.difference_update(str(m) for m in members)
            if not current:
                self._data.pop(key, None)
            return before - len(current)

    def smembers(self, key):
        self._check("smembers")
        with self._lock:
            return set(self._live(key) or set())

    def lpush(self, key, *values):
        self._check("lpush")
        with self._lock:
            items = self._data.setdefault(key, [])
            for v in values:
                items.insert(0, str(v))
            return len(items)

    def brpop(self, keys, timeout=0):
        self._check("brpop")
        with self._lock:
            for key in keys:
                items = self._live(key)
                if items:
                    return key, items.pop()
            return None

    def lmove(self, first_list, second_list, src="LEFT", dest="RIGHT"):
        self._check("lmove")
        with self._lock:
            items = self._live(first_list)
            if not items:
                return None
            value = items.pop(0) if src == "LEFT" else items.pop()
            target = self._data.setdefault(second_list, [])
            if dest == "LEFT":
                target.insert(0, value)
            else:
                target.append(value)
            return value

    def blmove(self, first_list, second_list, timeout, src="LEFT", dest="RIGHT"):
        self._check("blmove")
        return self.lmove(first_list, second_list, src=src, dest=dest)

    def lrem(self, key, count, value):
        self._check("lrem")
        with self._lock:
            items = self._live(key) or []
            removed = 0
            while value in items and (count == 0 or removed < abs(count)):
                items.remove(value)
                removed += 1
            return removed

    def lrange(self, key, start, end):
        with self._lock:
            items = list(self._live(key) or [])
            return items[start:] if end == -1 else items[start : end + 1]

    def llen(self, key):
        with self._lock:
            return len(self._live(key) or [])

    def pipeline(self, transaction=True):
        return FakePipeline(self)


class FakePipeline:
    def __init__(self, client: FakeRedis):
        self._client = client
        self._calls: list[tuple[str, tuple, dict]] = []

    def __getattr__(self, name):
        def queue(*args, **kwargs):
            self._calls.append((name, args, kwargs))
            return self

        return queue

    def execute(self):
        with self._client._lock:
            return [getattr(self._client, name)(*args, **kwargs) for name, args, kwargs in self._calls]


class InMemoryAttendance:
    """Mimics the attendance table, including its UNIQUE(employee_id, work_date)."""

    def __init__(self, employees: dict[int, Employee]):
        self._lock = threading.Lock()
        self._employees = employees
        self._by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self.insert_attempts = 0
        self.down = False

    def _check(self) -> None:
        if self.down:
            raise StorageUnavailable("fake database is down")

    def upsert_check_in(self, employee_id: int, work_date: date, check_in_time: datetime) -> bool:
        self._check()
        with self._lock:
            self.insert_attempts += 1
            if employee_id not in self._employees:
                raise ValidationError(f"Unknown employee {employee_id}")
            if (employee_id, work_date) in self._by_key:
                raise Conflict()
            self._by_key[(employee_id, work_date)] = AttendanceRecord(
                employee_id=employee_id,
                work_date=work_date,
                check_in_time=check_in_time,
                created_at=check_in_time,
                updated_at=check_in_time,
            )
            return True

    def record_check_out(self, employee_id: int, work_date: date, check_out_time: datetime) -> None:
        self._check()
        with self._lock:
            rec = self._by_key.get((employee_id, work_date))
            if (
                rec is None
                or rec.check_in_time is None
                or rec.check_out_time is not None
                or rec.check_in_time > check_out_time
            ):
                raise NotFound()
            self._by_key[(employee_id, work_date)] = AttendanceRecord(
                employee_id=employee_id,
                work_date=work_date,
                check_in_time=rec.check_in_time,
                check_out_time=check_out_time,
                created_at=rec.created_at,
                updated_at=check_out_time,
            )

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((employee_id, work_date))

    def open_employee_ids(self, work_date: date):
        self._check()
        return sorted(
            r.employee_id
            for (_, d), r in self._by_key.items()
            if d == work_date and r.check_in_time is not None and r.check_out_time is None
        )

    def fetch_range(self, start_date: date, end_date: date):
        self._check()
        rows = []
        for emp in self._employees.values():
            records = [r for (eid, d), r in self._by_key.items() if eid == emp.employee_id and start_date <= d <= end_date]
            if not records:
                rows.append(AttendanceReportRow(emp.employee_id, emp.name, emp.department, None, None, None))
            for r in records:
                rows.append(
                    AttendanceReportRow(emp.employee_id, emp.name, emp.department, r.work_date, r.check_in_time, r.check_out_time)
                )
        rows.sort(key=lambda r: (r.name, r.work_date or date.min, r.employee_id))
        return rows


class InMemoryEmployees:
    def __init__(self, employees: dict[int, Employee]):
        self._employees = employees

    def get_by_ids(self, employee_ids):
        return [self._employees[i] for i in employee_ids if i in self._employees]


@pytest.fixture
def employees() -> dict[int, Employee]:
    return {
        3: Employee(3, "Alice Smith", "alice.smith@company.com", "IT", 2),
        4: Employee(4, "Bob Davis", "bob.davis@company.com", "Design", 1),
        7: Employee(7, "Eve Anderson", "eve.anderson@company.com", "Marketing", 1),
    }


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def attendance_repo(employees) -> InMemoryAttendance:
    return InMemoryAttendance(employees)


@pytest.fixture
def engine(fake_redis, attendance_repo, employees) -> AttendanceEngine:
    return AttendanceEngine(
        attendance_repo,
        InMemoryEmployees(employees),
        guard=DuplicateGuard(fake_redis),
        presence=PresenceTracker(fake_redis),
        dispatcher=RedisNotificationDispatcher(fake_redis),
        lateness=LatenessPolicy.from_hhmm("09:00"),
        reports=AttendanceReportService(attendance_repo, cache=ReportCache(fake_redis)),
    )
