from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from functools import wraps
from typing import Any, Optional

from flask import current_app, redirect, session, url_for

from ..core.enums import Role
from .service import SessionUser

SESSION_KEY = "ctx"


@dataclass(frozen=True)
class SessionContext:
    """Identity carried by the signed session cookie.

    Flask signs the cookie, so the fields cannot be edited client-side;
    ``issued_at`` bounds how long the context is honoured.
    """

    user_id: int
    full_name: str
    role: Role
    issued_at: float
    dni: Optional[str] = None
    branch: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def expired(self, *, now: datetime, lifetime: timedelta) -> bool:
        return now.timestamp() - self.issued_at > lifetime.total_seconds()

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["role"] = self.role.value
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Optional["SessionContext"]:
        if not isinstance(data, dict):
            return None
        try:
            return cls(
                user_id=int(data["user_id"]),
                full_name=str(data["full_name"]),
                role=Role(data["role"]),
                issued_at=float(data["issued_at"]),
                dni=data.get("dni"),
                branch=data.get("branch"),
            )
        except (KeyError, TypeError, ValueError):
            return None


def _lifetime() -> timedelta:
    return current_app.permanent_session_lifetime


def start_session(user: SessionUser, *, now: Optional[datetime] = None) -> SessionContext:
    ctx = SessionContext(
        user_id=user.user_id,
        full_name=user.full_name,
        role=user.role,
        issued_at=(now or datetime.now()).timestamp(),
        dni=user.dni,
        branch=user.branch,
    )
    session.clear()
    session.permanent = True
    session[SESSION_KEY] = ctx.to_dict()
    return ctx


def load_context(*, now: Optional[datetime] = None) -> Optional[SessionContext]:
    ctx = SessionContext.from_dict(session.get(SESSION_KEY))
    if ctx is None:
        return None
    if ctx.expired(now=now or datetime.now(), lifetime=_lifetime()):
        session.clear()
        return None
    return ctx


def end_session() -> None:
    session.clear()


def home_endpoint(ctx: SessionContext) -> str:
    return "admin_dashboard" if ctx.is_admin else "employee"


def session_required(role: Role):
    """Gate a view on a live session with ``role``; the view receives ``ctx``.

    A missing, expired or mismatched session redirects to the login page.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            ctx = load_context()
            if ctx is None or ctx.role != role:
                return redirect(url_for("login"))
            return view(*args, ctx=ctx, **kwargs)

        return wrapper

    return decorator
