from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role stored in the session after login."""

    EMPLOYEE = "employee"
    ADMIN = "admin"


class Shift(str, Enum):
    """Daily work period. Each one is kept in its own attendance table."""

    MORNING = "morning"
    AFTERNOON = "afternoon"


class AttendanceEvent(str, Enum):
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
