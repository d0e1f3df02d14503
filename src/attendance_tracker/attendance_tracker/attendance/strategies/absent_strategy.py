from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """No clock-in time at all."""

    def decide_checkin(self, *, clock_in: Optional[time], cutoff: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT)
