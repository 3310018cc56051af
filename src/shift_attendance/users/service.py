from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty, require_numeric
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, BackendError, ValidationError
from .model import User
from .repository import AdminRepository, UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class SessionUser:
    """Identity established by a successful login."""

    user_id: int
    full_name: str
    role: Role
    dni: Optional[str] = None
    branch: Optional[str] = None


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except (ValueError, TypeError):
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


class AuthService:
    """Use case: verify login credentials.

    A numeric identifier is an employee DNI, anything else is an admin login
    name. Only one of the two tables is consulted per attempt, and every
    failure is reported with the same message.
    """

    def __init__(self, users: UserRepository, admins: AdminRepository):
        self._users = users
        self._admins = admins

    def authenticate(self, identifier: str, password: str) -> SessionUser:
        identifier = (identifier or "").strip()
        if not identifier or not password:
            raise AuthenticationError(INVALID_CREDENTIALS)

        try:
            if identifier.isdigit():
                identity = self._authenticate_employee(identifier, password)
            else:
                identity = self._authenticate_admin(identifier, password)
        except BackendError:
            logger.exception("credential lookup failed")
            raise AuthenticationError(INVALID_CREDENTIALS)

        if identity is None:
            logger.info("rejected login attempt")
            raise AuthenticationError(INVALID_CREDENTIALS)

        logger.info("login ok user_id=%s role=%s", identity.user_id, identity.role.value)
        return identity

    def _authenticate_employee(self, dni: str, password: str) -> Optional[SessionUser]:
        user = self._users.get_by_dni(dni)
        if not user or not user.dni or not _password_matches(user.password_hash, password):
            return None
        return SessionUser(
            user_id=user.user_id,
            full_name=user.full_name,
            role=Role.EMPLOYEE,
            dni=user.dni,
            branch=user.branch,
        )

    def _authenticate_admin(self, login_name: str, password: str) -> Optional[SessionUser]:
        admin = self._admins.get_by_login_name(login_name)
        if not admin or not _password_matches(admin.password_hash, password):
            return None
        return SessionUser(user_id=admin.admin_id, full_name=admin.login_name, role=Role.ADMIN)


class UserService:
    """Use case: manage employees (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_employee(
        self,
        *,
        current_role: Role,
        full_name: str,
        dni: str,
        password: str,
        branch: Optional[str] = None,
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can add employees")

        full_name = require_non_empty(full_name, "Full name")
        dni = require_numeric(dni, "DNI")
        require_min_length(password, "Password", 6)
        branch = (branch or "").strip() or None

        if self._users.get_by_dni(dni):
            raise ValidationError("An employee with this DNI already exists")

        user_id = self._users.create_user(
            full_name=full_name,
            dni=dni,
            branch=branch,
            password_hash=generate_password_hash(password),
        )
        logger.info("employee created user_id=%s branch=%s", user_id, branch)
        return user_id

    def list_employees(self) -> Sequence[User]:
        return self._users.list_employees()
