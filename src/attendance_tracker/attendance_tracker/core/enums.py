from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Punctuality status stored with every attendance record."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
