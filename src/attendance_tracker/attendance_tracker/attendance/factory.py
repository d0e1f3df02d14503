from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional, Union

from ..common.datetime_utils import coerce_time
from ..core.constants import DEFAULT_LATE_CUTOFF
from ..core.enums import AttendanceStatus
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, clock_in: Optional[time], cutoff: time) -> AttendanceStrategy:
        if clock_in is None:
            return AbsentStrategy()
        if clock_in <= cutoff:
            return PresentStrategy()
        return LateStrategy()


def classify(
    clock_in: Union[time, str, None],
    *,
    cutoff: time = DEFAULT_LATE_CUTOFF,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> AttendanceStatus:
    """Map a clock-in time to present / late / absent."""
    value = coerce_time(clock_in, "clockIn")
    strategy = (factory or AttendanceStrategyFactory()).for_checkin(clock_in=value, cutoff=cutoff)
    return strategy.decide_checkin(clock_in=value, cutoff=cutoff).status
