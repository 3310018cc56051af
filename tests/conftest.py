from __future__ import annotations

from datetime import datetime

import pytest

from fakes import InMemoryAdmins, InMemoryAttendance, InMemoryUsers, fast_hash, make_user
from shift_attendance.core.enums import Shift
from shift_attendance.shifts.registry import ShiftRegistry
from shift_attendance.users.model import Admin


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 10, 0)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers(
        {
            1: make_user(1, "Ana Gómez", "30111222", branch="norte"),
            2: make_user(2, "Bruno Díaz", "28999000", branch="centro"),
        }
    )


@pytest.fixture
def admins_repo() -> InMemoryAdmins:
    return InMemoryAdmins({"admin": Admin(admin_id=1, login_name="admin", password_hash=fast_hash("admin-pass"))})


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def shift_registry() -> ShiftRegistry:
    return ShiftRegistry(branch_shifts={"centro": (Shift.MORNING,)})
