from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.attendance.service import AttendanceService
from attendance_tracker.core.exceptions import ConflictError, NotFoundError


class InMemoryAttendance:
    def __init__(self):
        self._by_key: dict[tuple[str, date], AttendanceRecord] = {}
        self._id = 0
        self.calls: list[str] = []

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        self.calls.append("get")
        return self._by_key.get((employee_id, work_date))

    def insert(self, record: AttendanceRecord) -> AttendanceRecord:
        self.calls.append("insert")
        key = (record.employee_id, record.work_date)
        if key in self._by_key:
            raise ConflictError("Duplicate entry violates a unique constraint")
        self._id += 1
        rec = replace(record, record_id=self._id)
        self._by_key[key] = rec
        return rec

    def update_clock_out(self, employee_id: str, work_date: date, *, clock_out: time, duration: str) -> AttendanceRecord:
        self.calls.append("update")
        rec = self._by_key.get((employee_id, work_date))
        if not rec:
            raise NotFoundError("Attendance record not found")
        rec = replace(rec, clock_out=clock_out, duration=duration)
        self._by_key[(employee_id, work_date)] = rec
        return rec

    def list_records(self, employee_id: Optional[str] = None):
        self.calls.append("list")
        items = [r for r in self._by_key.values() if employee_id is None or r.employee_id == employee_id]
        # Same order as the SQL: date DESC, clock_in DESC (NULLs last), employee_id ASC.
        items.sort(key=lambda r: r.employee_id)
        items.sort(key=lambda r: (r.work_date, r.clock_in is not None, r.clock_in or time.min), reverse=True)
        return items


@pytest.fixture()
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture()
def now() -> datetime:
    return datetime(2024, 3, 1, 9, 45, 0)


@pytest.fixture()
def service(attendance_repo, now) -> AttendanceService:
    return AttendanceService(attendance_repo, clock=lambda: now)
