from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import Shift
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, shift: Shift, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def save(self, record: AttendanceRecord) -> None:
        """Insert or update the row keyed on (user_id, work_date) of the record's shift table.

        Times already stored are never overwritten or cleared.
        """

        raise NotImplementedError

    def list_for_range(self, shift: Shift, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
