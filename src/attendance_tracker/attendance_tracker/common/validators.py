from __future__ import annotations

import re

from ..core.constants import EMPLOYEE_ID_PATTERN
from ..core.exceptions import ValidationError

_EMPLOYEE_ID_RE = re.compile(EMPLOYEE_ID_PATTERN, re.ASCII)


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Invalid {field_name}")
    return value.strip()


def require_employee_id(value: str) -> str:
    if not isinstance(value, str) or not _EMPLOYEE_ID_RE.fullmatch(value):
        raise ValidationError("Invalid Employee ID. Must be ATS0 followed by 3 digits (e.g., ATS0987)")
    return value
