from __future__ import annotations

from typing import Iterable, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Employee
from .repository import EmployeeRepository


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        name=row["name"],
        email=row["email"],
        department=row["department"],
        manager_id=int(row["manager_id"]) if row.get("manager_id") is not None else None,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_ids(self, employee_ids: Iterable[int]) -> Sequence[Employee]:
        ids = sorted({int(e) for e in employee_ids})
        if not ids:
            return []

        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT employee_id, name, email, department, manager_id
                FROM employees
                WHERE employee_id IN ({placeholders})
                """,
                tuple(ids),
            )
            return [_to_employee(r) for r in fetchall(cur)]
