from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import Conflict, NotFound, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_entry, is_missing_reference
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_check_in(self, employee_id: int, work_date: date, check_in_time: datetime) -> bool:
        # No ON DUPLICATE KEY UPDATE: a second check-in must surface as a conflict,
        # never overwrite the first one.
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance(employee_id, work_date, check_in_time)
                    VALUES(%s,%s,%s)
                    """,
                    (int(employee_id), work_date, check_in_time),
                )
            except mysql.connector.IntegrityError as exc:
                if is_duplicate_entry(exc):
                    raise Conflict(f"Employee {employee_id} already checked in on {work_date.isoformat()}") from exc
                if is_missing_reference(exc):
                    raise ValidationError(f"Unknown employee {employee_id}") from exc
                raise
            return cur.rowcount > 0

    def record_check_out(self, employee_id: int, work_date: date, check_out_time: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out_time=%s
                WHERE employee_id=%s AND work_date=%s
                  AND check_in_time IS NOT NULL
                  AND check_out_time IS NULL
                  AND check_in_time <= %s
                """,
                (check_out_time, int(employee_id), work_date, check_out_time),
            )
            if cur.rowcount == 0:
                raise NotFound(f"No open check-in for employee {employee_id} on {work_date.isoformat()}")

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, work_date, check_in_time, check_out_time, created_at, updated_at
                FROM attendance
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AttendanceRecord(
                employee_id=int(r["employee_id"]),
                work_date=r["work_date"],
                check_in_time=r.get("check_in_time"),
                check_out_time=r.get("check_out_time"),
                created_at=r.get("created_at"),
                updated_at=r.get("updated_at"),
            )

    def open_employee_ids(self, work_date: date) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id
                FROM attendance
                WHERE work_date=%s AND check_in_time IS NOT NULL AND check_out_time IS NULL
                ORDER BY employee_id
                """,
                (work_date,),
            )
            return [int(r["employee_id"]) for r in fetchall(cur)]

    def fetch_range(self, start_date: date, end_date: date) -> Sequence[AttendanceReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    e.employee_id, e.name, e.department,
                    a.work_date, a.check_in_time, a.check_out_time
                FROM employees e
                LEFT JOIN attendance a
                    ON a.employee_id = e.employee_id
                    AND a.work_date BETWEEN %s AND %s
                ORDER BY e.name ASC, a.work_date ASC, e.employee_id ASC
                """,
                (start_date, end_date),
            )
            rows = fetchall(cur)

            return [
                AttendanceReportRow(
                    employee_id=int(r["employee_id"]),
                    name=r["name"],
                    department=r.get("department"),
                    work_date=r.get("work_date"),
                    check_in_time=r.get("check_in_time"),
                    check_out_time=r.get("check_out_time"),
                )
                for r in rows
            ]
