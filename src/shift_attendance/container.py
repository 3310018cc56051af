from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from functools import partial
from typing import Callable, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_MAX_REPORT_DAYS, DEFAULT_TIMEZONE
from .database.connection import DatabaseConnection, DBConfig
from .reports.aggregator import AttendanceAggregator
from .reports.exporter import ReportExporter
from .shifts.registry import ShiftRegistry
from .users.mysql_user_repository import MySQLAdminRepository, MySQLUserRepository
from .users.repository import AdminRepository, UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    admins_repo: AdminRepository
    attendance_repo: AttendanceRepository
    shift_registry: ShiftRegistry

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    aggregator: AttendanceAggregator
    exporter: ReportExporter

    conn: Optional[DatabaseConnection] = None


def wire_container(
    *,
    users_repo: UserRepository,
    admins_repo: AdminRepository,
    attendance_repo: AttendanceRepository,
    shift_registry: ShiftRegistry | None = None,
    clock: Callable[[], datetime] | None = None,
    max_report_days: int = DEFAULT_MAX_REPORT_DAYS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    shift_registry = shift_registry or ShiftRegistry()
    clock = clock or partial(now_local, DEFAULT_TIMEZONE)

    return Container(
        users_repo=users_repo,
        admins_repo=admins_repo,
        attendance_repo=attendance_repo,
        shift_registry=shift_registry,
        auth_service=AuthService(users_repo, admins_repo),
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            shift_registry,
            clock=clock,
            strategy_factory=AttendanceStrategyFactory(),
        ),
        aggregator=AttendanceAggregator(users_repo, attendance_repo, max_days=max_report_days),
        exporter=ReportExporter(shift_registry),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    timezone: str = DEFAULT_TIMEZONE,
    shift_registry: ShiftRegistry | None = None,
    max_report_days: int = DEFAULT_MAX_REPORT_DAYS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire_container(
        users_repo=MySQLUserRepository(conn),
        admins_repo=MySQLAdminRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        shift_registry=shift_registry,
        clock=partial(now_local, timezone),
        max_report_days=max_report_days,
        conn=conn,
    )
