from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceEvent
from .strategies.base import AttendanceStrategy
from .strategies.check_in_strategy import CheckInStrategy
from .strategies.check_out_strategy import CheckOutStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the strategy for an attendance event."""

    def for_event(self, event: AttendanceEvent) -> AttendanceStrategy:
        if event == AttendanceEvent.CHECK_IN:
            return CheckInStrategy()
        return CheckOutStrategy()
