from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Admin, User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_dni(self, dni: str) -> Optional[User]:
        raise NotImplementedError

    def list_employees(self) -> Sequence[User]:
        raise NotImplementedError

    def create_user(self, *, full_name: str, dni: str, branch: Optional[str], password_hash: str) -> int:
        raise NotImplementedError


class AdminRepository(Protocol):
    def get_by_login_name(self, login_name: str) -> Optional[Admin]:
        raise NotImplementedError
