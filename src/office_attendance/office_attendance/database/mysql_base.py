from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StorageUnavailable
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# MySQL server error for a UNIQUE/PRIMARY KEY violation.
ER_DUP_ENTRY = 1062
# Child row references a parent that does not exist.
ER_NO_REFERENCED_ROW_2 = 1452


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` and commit on success.

    Driver errors leave this block as ``StorageUnavailable``; errors raised by
    the caller inside the block (e.g. ``Conflict``) are re-raised untouched
    after the rollback.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise StorageUnavailable(f"Could not connect to MySQL: {exc}") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _rollback_quietly(conn)
        raise StorageUnavailable(f"MySQL operation failed: {exc}") from exc
    except Exception:
        _rollback_quietly(conn)
        raise
    finally:
        conn.close()


def _rollback_quietly(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error as exc:
        logger.warning(f"Rollback failed: {exc}")


def is_duplicate_entry(exc: mysql.connector.Error) -> bool:
    return getattr(exc, "errno", None) == ER_DUP_ENTRY


def is_missing_reference(exc: mysql.connector.Error) -> bool:
    return getattr(exc, "errno", None) == ER_NO_REFERENCED_ROW_2


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
