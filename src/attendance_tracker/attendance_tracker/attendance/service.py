from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Callable, Sequence

from ..common.datetime_utils import coerce_date, coerce_time, now_local
from ..common.validators import require_employee_id, require_non_empty
from ..core.constants import DEFAULT_LATE_CUTOFF
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, InvalidStateError, NotFoundError, ValidationError
from .duration import compute_duration
from .factory import AttendanceStrategyFactory, classify
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

RECORD_EXISTS = "Attendance record already exists for this Employee ID and date"


class AttendanceService:
    """Clock-in / clock-out lifecycle of one record per employee per day.

    NoRecord --clock_in--> ClockedIn --clock_out--> ClockedOut (terminal).

    Every operation validates its input before touching the repository and
    makes at most two repository calls (read, then write). Nothing is retried.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        cutoff: time = DEFAULT_LATE_CUTOFF,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._cutoff = cutoff
        self._clock = clock

    def classify(self, clock_in: time | None) -> AttendanceStatus:
        return classify(clock_in, cutoff=self._cutoff, factory=self._factory)

    def list_records(self, employee_id: str | None = None) -> Sequence[AttendanceRecord]:
        if employee_id is not None:
            employee_id = require_non_empty(employee_id, "employee_id")
        return self._attendance.list_records(employee_id)

    def get_today(self, employee_id: str) -> AttendanceRecord:
        employee_id = require_employee_id(employee_id)
        today = self._clock().date()

        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if not record:
            raise NotFoundError("No attendance record found for today")
        return record

    def clock_in(
        self,
        employee_id: str,
        work_date: date | str,
        clock_in_time: time | str | None = None,
    ) -> AttendanceRecord:
        employee_id = require_employee_id(employee_id)
        work_date = coerce_date(work_date)
        clock_in = coerce_time(clock_in_time, "clockIn")

        if self._attendance.get_for_employee_and_date(employee_id, work_date):
            raise ConflictError(RECORD_EXISTS)

        record = AttendanceRecord(
            employee_id=employee_id,
            work_date=work_date,
            clock_in=clock_in,
            clock_out=None,
            duration=None,
            status=self.classify(clock_in),
        )
        try:
            created = self._attendance.insert(record)
        except ConflictError as exc:
            # Another request inserted the same key after our existence check.
            logger.warning("Concurrent clock-in for %s on %s", employee_id, work_date)
            raise ConflictError(RECORD_EXISTS) from exc

        logger.info("Clock-in %s on %s at %s (%s)", employee_id, work_date, clock_in, created.status.value)
        return created

    def clock_out(
        self,
        employee_id: str,
        work_date: date | str,
        clock_out_time: time | str,
    ) -> AttendanceRecord:
        """Close the record opened by clock_in for this employee and date.

        The read and the write are separate repository calls, so two
        concurrent clock-outs for the same key can both pass the checks
        below; the last write wins.
        """
        employee_id = require_employee_id(employee_id)
        work_date = coerce_date(work_date)
        clock_out = coerce_time(clock_out_time, "clockOut")
        if clock_out is None:
            raise ValidationError("clockOut is required")

        record = self._attendance.get_for_employee_and_date(employee_id, work_date)
        if not record:
            raise NotFoundError("Attendance record not found")
        if record.clock_in is None:
            raise InvalidStateError("Cannot clock out without a prior clock-in")
        if record.is_clocked_out:
            raise ConflictError("Already clocked out for this Employee ID and date")

        duration = compute_duration(record.clock_in, clock_out)
        updated = self._attendance.update_clock_out(
            employee_id,
            work_date,
            clock_out=clock_out,
            duration=duration,
        )

        logger.info("Clock-out %s on %s at %s (%s)", employee_id, work_date, clock_out, duration)
        return updated
