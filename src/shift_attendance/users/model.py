from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: an employee account.

    Note: Plain data object (no DB access code). A non-null DNI marks an employee.
    """

    user_id: int
    full_name: str
    dni: Optional[str]
    branch: Optional[str]
    password_hash: str


@dataclass(frozen=True)
class Admin:
    admin_id: int
    login_name: str
    password_hash: str
