"""Seed the admin account from ADMIN_LOGIN / ADMIN_PASSWORD.

Admins are managed out of band; the web app never creates them.
"""

from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from shift_attendance.config import get_settings_module
from shift_attendance.database.bootstrap import ensure_admin
from shift_attendance.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())

    password = getattr(settings, "ADMIN_PASSWORD", "")
    if len(password) < 6:
        raise SystemExit("Set ADMIN_PASSWORD (at least 6 characters) before seeding.")

    target = DBConfig.from_dict(settings.DB_CONFIG)
    ensure_admin(target, login_name=settings.ADMIN_LOGIN, password=password)
    print(f"OK: Admin {settings.ADMIN_LOGIN!r} ready -> {target.user}@{target.host}:{target.port}/{target.database}")


if __name__ == "__main__":
    main()
