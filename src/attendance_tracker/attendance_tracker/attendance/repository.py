from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def insert(self, record: AttendanceRecord) -> AttendanceRecord:
        """Persist a new row. Raises ConflictError on a duplicate (employee, date)."""

        raise NotImplementedError

    def update_clock_out(
        self,
        employee_id: str,
        work_date: date,
        *,
        clock_out: time,
        duration: str,
    ) -> AttendanceRecord:
        """Set clock-out and duration only. Raises NotFoundError if no row matches."""

        raise NotImplementedError

    def list_records(self, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        """Newest first: date DESC, clock_in DESC, then employee_id ASC."""

        raise NotImplementedError
