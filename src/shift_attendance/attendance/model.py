from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..core.enums import Shift


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's record for one shift on one day."""

    user_id: int
    work_date: date
    shift: Shift
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None

    @property
    def is_empty(self) -> bool:
        return self.check_in_time is None and self.check_out_time is None

    def with_check_in(self, when: datetime) -> "AttendanceRecord":
        return replace(self, check_in_time=when)

    def with_check_out(self, when: datetime) -> "AttendanceRecord":
        return replace(self, check_out_time=when)
