from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import iter_dates, month_bounds
from ..core.constants import DEFAULT_MAX_REPORT_DAYS
from ..core.enums import Shift
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository
from .model import AggregatedDayRecord, AggregationResult, AttendanceStats, EmployeeRef

logger = logging.getLogger(__name__)


def _index_by_user_and_date(records: Iterable[AttendanceRecord]) -> dict[tuple[int, date], AttendanceRecord]:
    return {(r.user_id, r.work_date): r for r in records}


class AttendanceAggregator:
    """Join the employee roster with both shift tables, one row per employee per date.

    Every employee appears on every date of the range, with or without
    attendance; callers decide how to show empty rows.
    """

    def __init__(
        self,
        users: UserRepository,
        attendance: AttendanceRepository,
        *,
        max_days: int = DEFAULT_MAX_REPORT_DAYS,
    ):
        self._users = users
        self._attendance = attendance
        self._max_days = int(max_days)

    def aggregate(self, start: date, end: date) -> AggregationResult:
        if end < start:
            raise ValidationError("The end date must not be before the start date")
        days = list(iter_dates(start, end))
        if len(days) > self._max_days:
            raise ValidationError(f"Select at most {self._max_days} days")

        roster = sorted(self._users.list_employees(), key=lambda u: (u.full_name, u.user_id))
        # One query per shift table covers the whole range.
        morning = _index_by_user_and_date(self._attendance.list_for_range(Shift.MORNING, start, end))
        afternoon = _index_by_user_and_date(self._attendance.list_for_range(Shift.AFTERNOON, start, end))

        rows = [
            AggregatedDayRecord(
                user_id=u.user_id,
                full_name=u.full_name,
                work_date=day,
                morning=morning.get((u.user_id, day)),
                afternoon=afternoon.get((u.user_id, day)),
            )
            for day in days
            for u in roster
        ]
        logger.debug("aggregated %s rows for %s..%s", len(rows), start, end)
        return AggregationResult(start=start, end=end, rows=rows, employees=self.employees_in(rows))

    def aggregate_day(self, day: date) -> AggregationResult:
        return self.aggregate(day, day)

    def aggregate_month(self, day: date) -> AggregationResult:
        return self.aggregate(*month_bounds(day))

    @staticmethod
    def employees_in(rows: Sequence[AggregatedDayRecord]) -> list[EmployeeRef]:
        seen: dict[int, EmployeeRef] = {}
        for r in rows:
            seen.setdefault(r.user_id, EmployeeRef(user_id=r.user_id, full_name=r.full_name))
        return sorted(seen.values(), key=lambda e: (e.full_name, e.user_id))

    @staticmethod
    def stats(rows: Sequence[AggregatedDayRecord]) -> AttendanceStats:
        """Headcount with a morning / afternoon check-in, as shown on the daily dashboard."""
        return AttendanceStats(
            total=len(rows),
            morning=sum(1 for r in rows if r.morning and r.morning.check_in_time),
            afternoon=sum(1 for r in rows if r.afternoon and r.afternoon.check_in_time),
        )
