from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord


@dataclass(frozen=True)
class AggregatedDayRecord:
    """Read-model: one employee's morning and afternoon records for one date."""

    user_id: int
    full_name: str
    work_date: date
    morning: Optional[AttendanceRecord] = None
    afternoon: Optional[AttendanceRecord] = None

    @property
    def has_attendance(self) -> bool:
        return any(r is not None and not r.is_empty for r in (self.morning, self.afternoon))


@dataclass(frozen=True)
class EmployeeRef:
    user_id: int
    full_name: str


@dataclass(frozen=True)
class AggregationResult:
    start: date
    end: date
    rows: Sequence[AggregatedDayRecord]
    employees: Sequence[EmployeeRef]


@dataclass(frozen=True)
class AttendanceStats:
    total: int
    morning: int
    afternoon: int

    @property
    def morning_pct(self) -> int:
        return round(self.morning * 100 / self.total) if self.total else 0

    @property
    def afternoon_pct(self) -> int:
        return round(self.afternoon * 100 / self.total) if self.total else 0
