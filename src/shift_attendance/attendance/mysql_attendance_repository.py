from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import Shift
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

SHIFT_TABLES = {
    Shift.MORNING: "morning_attendance",
    Shift.AFTERNOON: "afternoon_attendance",
}


def _to_record(shift: Shift, r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        shift=shift,
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, shift: Shift, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, work_date, check_in_time, check_out_time
                FROM {SHIFT_TABLES[shift]}
                WHERE user_id=%s AND work_date=%s
                """,
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(shift, r) if r else None

    def save(self, record: AttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO {SHIFT_TABLES[record.shift]}(user_id, work_date, check_in_time, check_out_time)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    check_in_time=COALESCE(check_in_time, VALUES(check_in_time)),
                    check_out_time=COALESCE(check_out_time, VALUES(check_out_time))
                """,
                (record.user_id, record.work_date, record.check_in_time, record.check_out_time),
            )

    def list_for_range(self, shift: Shift, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, work_date, check_in_time, check_out_time
                FROM {SHIFT_TABLES[shift]}
                WHERE work_date BETWEEN %s AND %s
                ORDER BY work_date ASC, user_id ASC
                """,
                (start, end),
            )
            return [_to_record(shift, r) for r in fetchall(cur)]
