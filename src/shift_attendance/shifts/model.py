from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..core.enums import Shift


@dataclass(frozen=True)
class ShiftRule:
    """Time rules of one daily shift."""

    shift: Shift
    label: str
    checkin_cutoff: time
    late_after: time
