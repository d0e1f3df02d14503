from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConflictError, StorageError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _rollback_quietly(conn) -> None:
    # A dropped connection fails here too; keep the original error.
    try:
        conn.rollback()
    except mysql.connector.Error:
        logger.warning("Rollback failed", exc_info=True)


def _close_quietly(conn) -> None:
    try:
        conn.close()
    except mysql.connector.Error:
        logger.warning("Closing the connection failed", exc_info=True)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Borrow a connection for one unit of work.

    Commits on success and rolls back on error. Driver errors are re-raised
    as ConflictError (duplicate key) or StorageError (everything else).
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.exception("Could not acquire a database connection")
        raise StorageError("Database unavailable") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as exc:
        _rollback_quietly(conn)
        if exc.errno == errorcode.ER_DUP_ENTRY:
            raise ConflictError("Duplicate entry violates a unique constraint") from exc
        logger.exception("Integrity error")
        raise StorageError("Database constraint violated") from exc
    except mysql.connector.Error as exc:
        _rollback_quietly(conn)
        logger.exception("Database operation failed")
        raise StorageError("Database operation failed") from exc
    except Exception:
        _rollback_quietly(conn)
        raise
    finally:
        _close_quietly(conn)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours, rest = divmod(total_seconds, 3600)
        minutes, seconds = divmod(rest, 60)
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=int(parts[0]), minute=int(parts[1]), second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
