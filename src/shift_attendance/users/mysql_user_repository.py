from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Admin, User
from .repository import AdminRepository, UserRepository

_USER_COLUMNS = "user_id, full_name, dni, branch, password_hash"


def _to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        dni=row.get("dni"),
        branch=row.get("branch"),
        password_hash=row["password_hash"],
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_dni(self, dni: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE dni=%s", (dni,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_employees(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE dni IS NOT NULL
                ORDER BY full_name, user_id
                """
            )
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(self, *, full_name: str, dni: str, branch: Optional[str], password_hash: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(full_name, dni, branch, password_hash)
                VALUES(%s,%s,%s,%s)
                """,
                (full_name, dni, branch, password_hash),
            )
            return int(cur.lastrowid)


class MySQLAdminRepository(AdminRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_login_name(self, login_name: str) -> Optional[Admin]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT admin_id, login_name, password_hash FROM admins WHERE login_name=%s",
                (login_name,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Admin(
                admin_id=int(row["admin_id"]),
                login_name=row["login_name"],
                password_hash=row["password_hash"],
            )
