from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Union

from ..common.datetime_utils import coerce_time
from ..core.constants import ZERO_DURATION
from ..core.exceptions import ValidationError

# Any fixed day works: both times are on the same calendar day.
_ANCHOR = date(2000, 1, 1)


def worked_minutes(clock_in: time, clock_out: time) -> int:
    """Whole minutes between two times of the same day, truncated."""
    delta = datetime.combine(_ANCHOR, clock_out) - datetime.combine(_ANCHOR, clock_in)
    return int(delta.total_seconds() // 60)


def format_duration(minutes: int) -> str:
    hours, rest = divmod(int(minutes), 60)
    return f"{hours}h {rest}m"


def compute_duration(
    clock_in: Union[time, str, None],
    clock_out: Union[time, str, None],
) -> str:
    """Elapsed time between clock-in and clock-out as "<H>h <M>m".

    A missing time yields "0h 0m". Clock-out earlier than clock-in (a shift
    crossing midnight) is rejected.
    """
    start: Optional[time] = coerce_time(clock_in, "clockIn")
    end: Optional[time] = coerce_time(clock_out, "clockOut")
    if start is None or end is None:
        return ZERO_DURATION

    if end < start:
        raise ValidationError("Clock-out time cannot be earlier than clock-in time")
    return format_duration(worked_minutes(start, end))
