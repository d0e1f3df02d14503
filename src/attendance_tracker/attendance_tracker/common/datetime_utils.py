from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Optional, Union

from ..core.constants import DATE_FORMAT, TIME_FORMAT
from ..core.exceptions import ValidationError

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_TIME_RE = re.compile(r"\d{2}:\d{2}(:\d{2})?", re.ASCII)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    if not _DATE_RE.fullmatch(value):
        raise ValueError(f"Invalid date: {value!r}")
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_time_of_day(value: str) -> time:
    """Parse HH:MM or HH:MM:SS string into time."""
    match = _TIME_RE.fullmatch(value)
    if not match:
        raise ValueError(f"Invalid time: {value!r}")
    fmt = "%H:%M:%S" if match.group(1) else "%H:%M"
    return datetime.strptime(value, fmt).time()


def format_time_of_day(value: Optional[time]) -> Optional[str]:
    return value.strftime(TIME_FORMAT) if value is not None else None


def coerce_date(value: Union[date, str, None], field_name: str = "date") -> date:
    """Accept a date object or a YYYY-MM-DD string; anything else is invalid."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return parse_iso_date(value.strip())
        except ValueError:
            raise ValidationError(f"Invalid {field_name} format (YYYY-MM-DD)")
    raise ValidationError(f"Invalid {field_name} format (YYYY-MM-DD)")


def coerce_time(value: Union[time, str, None], field_name: str = "time") -> Optional[time]:
    """Accept a time object or an HH:MM[:SS] string. Blank means absent."""
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, str):
        v = value.strip()
        if not v:
            return None
        try:
            return parse_time_of_day(v)
        except ValueError:
            raise ValidationError(f"Invalid {field_name} time format (HH:MM or HH:MM:SS)")
    raise ValidationError(f"Invalid {field_name} time format (HH:MM or HH:MM:SS)")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
