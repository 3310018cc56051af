from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ...shifts.model import ShiftRule
from ..model import AttendanceRecord


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how one event changes today's record."""

    @abstractmethod
    def apply(self, *, record: AttendanceRecord, existing: Optional[AttendanceRecord], now: datetime, rule: ShiftRule) -> AttendanceRecord:
        """Return the record to persist, or raise an AttendanceRuleError.

        ``record`` is a blank record for today, used when ``existing`` is None.
        """
        raise NotImplementedError
