from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late clock-in. There is no upper bound: 10:15 and 14:00 are both late."""

    def decide_checkin(self, *, clock_in: Optional[time], cutoff: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, note=f"Clocked in after {cutoff:%H:%M}")
