"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

# Clock-ins at or before the cutoff are on time; anything later is late.
DEFAULT_LATE_CUTOFF = time(10, 0)

# ATS0001 .. ATS0999
EMPLOYEE_ID_PATTERN = r"ATS0(?!000)\d{3}"

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"

ZERO_DURATION = "0h 0m"

DEFAULT_POOL_SIZE = 5
