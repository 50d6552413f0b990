from __future__ import annotations

from dataclasses import dataclass

from .attendance.service import AttendanceService
from .attendance.sql_attendance_repository import SQLAttendanceRepository
from .database.bootstrap import apply_schema
from .database.connection import DBConfig, DatabaseConnection


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: SQLAttendanceRepository

    attendance_service: AttendanceService


def build_container(*, database_url: str, echo: bool = False, init_schema: bool = True) -> Container:
    conn = DatabaseConnection(DBConfig(url=database_url, echo=echo))
    if init_schema:
        apply_schema(conn)

    attendance_repo = SQLAttendanceRepository(conn)
    attendance_service = AttendanceService(attendance_repo)

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
    )
