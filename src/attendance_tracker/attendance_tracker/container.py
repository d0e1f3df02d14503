from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_LATE_CUTOFF, DEFAULT_POOL_SIZE
from .database.bootstrap import as_db_config
from .database.connection import DatabaseConnection


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceRepository

    attendance_service: AttendanceService


def build_container(
    *,
    db_config: dict,
    pool_size: int = DEFAULT_POOL_SIZE,
    late_cutoff: time = DEFAULT_LATE_CUTOFF,
) -> Container:
    conn = DatabaseConnection(as_db_config(db_config), pool_size=pool_size)

    attendance_repo = MySQLAttendanceRepository(conn)
    attendance_service = AttendanceService(
        attendance_repo,
        strategy_factory=AttendanceStrategyFactory(),
        cutoff=late_cutoff,
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
    )
