from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.exceptions import AlreadyCheckedOutError
from ...shifts.model import ShiftRule
from ..model import AttendanceRecord
from .base import AttendanceStrategy


class CheckOutStrategy(AttendanceStrategy):
    """Check-out has no time window and may be recorded without a check-in."""

    def apply(self, *, record: AttendanceRecord, existing: Optional[AttendanceRecord], now: datetime, rule: ShiftRule) -> AttendanceRecord:
        if existing is None:
            return record.with_check_out(now)
        if existing.check_out_time is not None:
            raise AlreadyCheckedOutError("You already checked out today for this shift")
        return existing.with_check_out(now)
