from __future__ import annotations

from dataclasses import replace
from datetime import date, time
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT id, employee_id, date, clock_in, clock_out, duration, status
    FROM attendance
"""

_ORDER_BY = "ORDER BY date DESC, clock_in DESC, employee_id ASC"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        employee_id=r["employee_id"],
        work_date=r["date"],
        clock_in=normalize_mysql_time(r.get("clock_in")),
        clock_out=normalize_mysql_time(r.get("clock_out")),
        duration=r.get("duration"),
        status=AttendanceStatus(r["status"]),
        record_id=int(r["id"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + "WHERE employee_id=%s AND date=%s",
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def insert(self, record: AttendanceRecord) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(employee_id, date, clock_in, clock_out, duration, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.employee_id,
                    record.work_date,
                    record.clock_in,
                    record.clock_out,
                    record.duration,
                    record.status.value,
                ),
            )
            return replace(record, record_id=int(cur.lastrowid))

    def update_clock_out(
        self,
        employee_id: str,
        work_date: date,
        *,
        clock_out: time,
        duration: str,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET clock_out=%s, duration=%s
                WHERE employee_id=%s AND date=%s
                """,
                (clock_out, duration, employee_id, work_date),
            )
            # rowcount is 0 for a matched row whose values did not change, so re-read.
            cur.execute(
                _SELECT + "WHERE employee_id=%s AND date=%s",
                (employee_id, work_date),
            )
            r = fetchone(cur)
            if not r:
                raise NotFoundError("Attendance record not found")
            return _to_record(r)

    def list_records(self, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            if employee_id is not None:
                cur.execute(_SELECT + "WHERE employee_id=%s " + _ORDER_BY, (employee_id,))
            else:
                cur.execute(_SELECT + _ORDER_BY)
            return [_to_record(r) for r in fetchall(cur)]
