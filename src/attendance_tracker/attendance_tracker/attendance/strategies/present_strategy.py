from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """Clock-in at or before the cutoff."""

    def decide_checkin(self, *, clock_in: Optional[time], cutoff: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
