from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per employee per calendar day."""

    employee_id: str
    work_date: date
    clock_in: Optional[time]
    clock_out: Optional[time]
    duration: Optional[str]
    status: AttendanceStatus
    record_id: Optional[int] = None

    @property
    def is_clocked_out(self) -> bool:
        return self.clock_out is not None
