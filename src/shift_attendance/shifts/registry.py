from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from ..core.constants import CHECKIN_CUTOFFS, LATE_AFTER, SHIFT_LABELS
from ..core.enums import Shift
from ..core.exceptions import ValidationError
from .model import ShiftRule


def default_rules() -> dict[Shift, ShiftRule]:
    return {
        s: ShiftRule(shift=s, label=SHIFT_LABELS[s], checkin_cutoff=CHECKIN_CUTOFFS[s], late_after=LATE_AFTER[s])
        for s in Shift
    }


def parse_branch_shifts(value: str) -> dict[str, tuple[Shift, ...]]:
    """Parse ``"centro:morning;norte:morning,afternoon"`` into a branch map.

    Branch names are compared case-insensitively.
    """
    out: dict[str, tuple[Shift, ...]] = {}
    for chunk in (value or "").split(";"):
        if not chunk.strip():
            continue
        branch, sep, shifts_s = chunk.partition(":")
        if not sep or not branch.strip():
            raise ValidationError(f"Invalid branch shift entry: {chunk!r}")
        try:
            shifts = tuple(Shift(s.strip().lower()) for s in shifts_s.split(",") if s.strip())
        except ValueError:
            raise ValidationError(f"Invalid shift in branch entry: {chunk!r}")
        if not shifts:
            raise ValidationError(f"Branch {branch.strip()!r} has no shifts")
        out[branch.strip().lower()] = shifts
    return out


@dataclass
class ShiftRegistry:
    """Shift rules plus the shifts each branch may use."""

    rules: Mapping[Shift, ShiftRule] = field(default_factory=default_rules)
    branch_shifts: Mapping[str, Sequence[Shift]] = field(default_factory=dict)

    def rule_for(self, shift: Shift) -> ShiftRule:
        return self.rules[shift]

    def allowed_shifts(self, branch: Optional[str]) -> tuple[Shift, ...]:
        if branch:
            shifts = self.branch_shifts.get(branch.strip().lower())
            if shifts:
                return tuple(shifts)
        return tuple(Shift)

    def preset_shift(self, branch: Optional[str]) -> Optional[Shift]:
        allowed = self.allowed_shifts(branch)
        return allowed[0] if len(allowed) == 1 else None
