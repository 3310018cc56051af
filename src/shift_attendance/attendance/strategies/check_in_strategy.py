from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import minute_of_day
from ...core.exceptions import AlreadyCheckedInError, CheckinWindowClosedError
from ...shifts.model import ShiftRule
from ..model import AttendanceRecord
from .base import AttendanceStrategy


class CheckInStrategy(AttendanceStrategy):
    """Check-in is accepted once per day, up to the shift cutoff (inclusive)."""

    def apply(self, *, record: AttendanceRecord, existing: Optional[AttendanceRecord], now: datetime, rule: ShiftRule) -> AttendanceRecord:
        if minute_of_day(now) > minute_of_day(rule.checkin_cutoff):
            raise CheckinWindowClosedError(
                f"Check-in for the {rule.label.lower()} shift closes at {rule.checkin_cutoff.strftime('%H:%M')}"
            )

        if existing is None:
            return record.with_check_in(now)
        if existing.check_in_time is not None:
            raise AlreadyCheckedInError("You already checked in today for this shift")
        return existing.with_check_in(now)
