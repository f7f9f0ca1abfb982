from __future__ import annotations

from dataclasses import dataclass

from .attendance.duplicate_guard import DuplicateGuard
from .attendance.lateness import LatenessPolicy
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.presence import PresenceTracker
from .attendance.service import AttendanceEngine
from .cache.connection import RedisConfig, RedisConnection
from .core.constants import (
    DEFAULT_CHECKIN_CLAIM_TTL_SECONDS,
    DEFAULT_NOTIFICATION_QUEUE,
    DEFAULT_REPORT_CACHE_TTL_SECONDS,
    DEFAULT_WORK_START_TIME,
)
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .notifications.dispatcher import RedisNotificationDispatcher
from .reports.cache import ReportCache
from .reports.service import AttendanceReportService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    redis: RedisConnection

    attendance_repo: MySQLAttendanceRepository
    employees_repo: MySQLEmployeeRepository

    duplicate_guard: DuplicateGuard
    presence: PresenceTracker
    report_cache: ReportCache
    dispatcher: RedisNotificationDispatcher

    report_service: AttendanceReportService
    attendance_engine: AttendanceEngine


def build_container(
    *,
    db_config: dict,
    redis_config: dict,
    work_start_time: str = DEFAULT_WORK_START_TIME,
    claim_ttl_seconds: int = DEFAULT_CHECKIN_CLAIM_TTL_SECONDS,
    report_ttl_seconds: int = DEFAULT_REPORT_CACHE_TTL_SECONDS,
    notification_queue: str = DEFAULT_NOTIFICATION_QUEUE,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    redis_conn = RedisConnection(RedisConfig.from_dict(redis_config))
    client = redis_conn.client()

    attendance_repo = MySQLAttendanceRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)

    duplicate_guard = DuplicateGuard(client, ttl_seconds=claim_ttl_seconds)
    presence = PresenceTracker(client)
    report_cache = ReportCache(client, ttl_seconds=report_ttl_seconds)
    dispatcher = RedisNotificationDispatcher(client, queue_name=notification_queue)

    report_service = AttendanceReportService(attendance_repo, cache=report_cache)
    attendance_engine = AttendanceEngine(
        attendance_repo,
        employees_repo,
        guard=duplicate_guard,
        presence=presence,
        dispatcher=dispatcher,
        lateness=LatenessPolicy.from_hhmm(work_start_time),
        reports=report_service,
    )

    return Container(
        conn=conn,
        redis=redis_conn,
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        duplicate_guard=duplicate_guard,
        presence=presence,
        report_cache=report_cache,
        dispatcher=dispatcher,
        report_service=report_service,
        attendance_engine=attendance_engine,
    )


def build_container_from_settings(settings) -> Container:
    return build_container(
        db_config=dict(getattr(settings, "DB_CONFIG")),
        redis_config=dict(getattr(settings, "REDIS_CONFIG")),
        work_start_time=getattr(settings, "WORK_START_TIME", DEFAULT_WORK_START_TIME),
        claim_ttl_seconds=int(getattr(settings, "CHECKIN_CLAIM_TTL_SECONDS", DEFAULT_CHECKIN_CLAIM_TTL_SECONDS)),
        report_ttl_seconds=int(getattr(settings, "REPORT_CACHE_TTL_SECONDS", DEFAULT_REPORT_CACHE_TTL_SECONDS)),
        notification_queue=getattr(settings, "NOTIFICATION_QUEUE", DEFAULT_NOTIFICATION_QUEUE),
    )
