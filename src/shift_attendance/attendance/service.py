from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..core.enums import AttendanceEvent, Shift
from ..core.exceptions import ShiftNotAllowedError, ValidationError
from ..shifts.registry import ShiftRegistry
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: record check-in/check-out events for the current day."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        shifts: ShiftRegistry,
        *,
        clock: Callable[[], datetime],
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._shifts = shifts
        self._clock = clock
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def now(self) -> datetime:
        return self._clock()

    def resolve_shift(self, *, branch: Optional[str], requested: Shift | str | None) -> Shift:
        """Pick the shift for an event; single-shift branches fall back to their preset."""
        if not requested:
            preset = self._shifts.preset_shift(branch)
            if preset is not None:
                return preset
            raise ValidationError("Select a shift before recording an event")
        try:
            shift = Shift(requested)
        except ValueError:
            raise ValidationError("Unknown shift")

        if shift not in self._shifts.allowed_shifts(branch):
            raise ShiftNotAllowedError(f"The {shift.value} shift is not available at your branch")
        return shift

    def record_event(
        self,
        *,
        user_id: int,
        branch: Optional[str],
        shift: Shift | str | None,
        event: AttendanceEvent | str,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        try:
            event = AttendanceEvent(event)
        except ValueError:
            raise ValidationError("Unknown attendance event")

        shift = self.resolve_shift(branch=branch, requested=shift)
        now = now or self.now()
        today = now.date()

        existing = self._attendance.get_for_user_and_date(shift, user_id, today)
        strategy = self._factory.for_event(event)
        updated = strategy.apply(
            record=AttendanceRecord(user_id=user_id, work_date=today, shift=shift),
            existing=existing,
            now=now,
            rule=self._shifts.rule_for(shift),
        )

        self._attendance.save(updated)
        logger.info(
            "attendance %s user_id=%s shift=%s date=%s",
            event.value,
            user_id,
            shift.value,
            today.isoformat(),
        )
        return updated

    def today_status(self, user_id: int, *, now: datetime | None = None) -> dict[Shift, Optional[AttendanceRecord]]:
        """Today's record per shift, used by the employee page."""
        today = (now or self.now()).date()
        return {shift: self._attendance.get_for_user_and_date(shift, user_id, today) for shift in Shift}
