from __future__ import annotations

from datetime import date, time, timedelta

import mysql.connector
import pytest
from mysql.connector import errorcode

from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.core.exceptions import ConflictError, NotFoundError, StorageError
from attendance_tracker.database.mysql_base import normalize_mysql_time


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.lastrowid = None
        self._result = []

    def execute(self, sql, params=None):
        self._conn.executed.append((" ".join(sql.split()), params))
        if self._conn.error is not None:
            raise self._conn.error
        self._result = self._conn.results.pop(0) if self._conn.results else []
        self.lastrowid = self._conn.lastrowid

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return list(self._result)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, *, results=None, error=None, lastrowid=None, teardown_error=None):
        self.teardown_error = teardown_error
        self.results = list(results or [])
        self.error = error
        self.lastrowid = lastrowid
        self.executed = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True
        if self.teardown_error is not None:
            raise self.teardown_error

    def close(self):
        self.closed = True
        if self.teardown_error is not None:
            raise self.teardown_error


class FakeConnFactory:
    def __init__(self, conn):
        self.conn = conn

    def connect(self):
        return self.conn


def _row(**overrides):
    row = {
        "id": 7,
        "employee_id": "ATS0123",
        "date": date(2024, 3, 1),
        "clock_in": timedelta(hours=9, minutes=45),
        "clock_out": None,
        "duration": None,
        "status": "present",
    }
    row.update(overrides)
    return row


def test_get_for_employee_and_date_maps_row():
    conn = FakeConnection(results=[[_row()]])
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))

    record = repo.get_for_employee_and_date("ATS0123", date(2024, 3, 1))

    assert record == AttendanceRecord(
        employee_id="ATS0123",
        work_date=date(2024, 3, 1),
        clock_in=time(9, 45),
        clock_out=None,
        duration=None,
        status=AttendanceStatus.PRESENT,
        record_id=7,
    )
    sql, params = conn.executed[0]
    assert "WHERE employee_id=%s AND date=%s" in sql
    assert params == ("ATS0123", date(2024, 3, 1))
    assert conn.committed and conn.closed


def test_get_missing_returns_none():
    conn = FakeConnection(results=[[]])
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))

    assert repo.get_for_employee_and_date("ATS0123", date(2024, 3, 1)) is None


def test_insert_returns_record_with_id():
    conn = FakeConnection(lastrowid=42)
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))
    record = AttendanceRecord(
        employee_id="ATS0456",
        work_date=date(2024, 3, 1),
        clock_in=time(10, 30),
        clock_out=None,
        duration=None,
        status=AttendanceStatus.LATE,
    )

    created = repo.insert(record)

    assert created.record_id == 42
    assert created.status == AttendanceStatus.LATE
    _, params = conn.executed[0]
    assert params == ("ATS0456", date(2024, 3, 1), time(10, 30), None, None, "late")


def test_insert_duplicate_key_is_conflict():
    dup = mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)
    conn = FakeConnection(error=dup)
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))
    record = AttendanceRecord("ATS0123", date(2024, 3, 1), time(9, 0), None, None, AttendanceStatus.PRESENT)

    with pytest.raises(ConflictError):
        repo.insert(record)

    assert conn.rolled_back and conn.closed
    assert not conn.committed


def test_other_driver_errors_are_storage_errors():
    conn = FakeConnection(error=mysql.connector.OperationalError(msg="Lost connection", errno=2013))
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))

    with pytest.raises(StorageError):
        repo.list_records()

    assert conn.rolled_back and conn.closed


def test_lost_connection_is_storage_error_even_if_rollback_fails():
    lost = mysql.connector.OperationalError(msg="Lost connection", errno=2013)
    conn = FakeConnection(error=lost, teardown_error=mysql.connector.OperationalError(msg="Lost connection", errno=2013))
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))

    with pytest.raises(StorageError) as exc_info:
        repo.get_for_employee_and_date("ATS0123", date(2024, 3, 1))

    assert exc_info.value.__cause__ is lost
    assert conn.rolled_back and conn.closed


def test_duplicate_key_is_conflict_even_if_rollback_fails():
    dup = mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)
    conn = FakeConnection(error=dup, teardown_error=mysql.connector.OperationalError(msg="Lost connection", errno=2013))
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))
    record = AttendanceRecord("ATS0123", date(2024, 3, 1), time(9, 0), None, None, AttendanceStatus.PRESENT)

    with pytest.raises(ConflictError):
        repo.insert(record)


def test_connection_failure_is_storage_error():
    class DownFactory:
        def connect(self):
            raise mysql.connector.InterfaceError(msg="Can't connect", errno=2003)

    repo = MySQLAttendanceRepository(DownFactory())

    with pytest.raises(StorageError):
        repo.get_for_employee_and_date("ATS0123", date(2024, 3, 1))


def test_update_clock_out_rereads_row():
    updated = _row(clock_out=timedelta(hours=17, minutes=15), duration="7h 30m")
    conn = FakeConnection(results=[[], [updated]])
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))

    record = repo.update_clock_out("ATS0123", date(2024, 3, 1), clock_out=time(17, 15), duration="7h 30m")

    assert record.clock_out == time(17, 15)
    assert record.duration == "7h 30m"
    assert record.status == AttendanceStatus.PRESENT
    update_sql, params = conn.executed[0]
    assert update_sql.startswith("UPDATE attendance SET clock_out=%s, duration=%s")
    assert "status" not in update_sql
    assert params == (time(17, 15), "7h 30m", "ATS0123", date(2024, 3, 1))


def test_update_clock_out_missing_row_is_not_found():
    conn = FakeConnection(results=[[], []])
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))

    with pytest.raises(NotFoundError):
        repo.update_clock_out("ATS0123", date(2024, 3, 1), clock_out=time(17, 0), duration="8h 0m")


def test_list_records_filter_and_order():
    conn = FakeConnection(results=[[_row(), _row(id=8, date=date(2024, 2, 29))]])
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))

    records = repo.list_records("ATS0123")

    assert [r.record_id for r in records] == [7, 8]
    sql, params = conn.executed[0]
    assert sql.endswith("WHERE employee_id=%s ORDER BY date DESC, clock_in DESC, employee_id ASC")
    assert params == ("ATS0123",)


def test_list_records_without_filter():
    conn = FakeConnection(results=[[]])
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))

    assert repo.list_records() == []
    sql, params = conn.executed[0]
    assert "WHERE" not in sql
    assert params is None


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        (time(8, 30), time(8, 30)),
        (timedelta(hours=8, minutes=30, seconds=5), time(8, 30, 5)),
        ("08:30:00", time(8, 30)),
        ("08:30", time(8, 30)),
    ],
)
def test_normalize_mysql_time(value, expected):
    assert normalize_mysql_time(value) == expected
