"""Create the database and apply schema.sql (idempotent)."""

from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from shift_attendance.config import get_settings_module
from shift_attendance.database.bootstrap import apply_schema, list_tables
from shift_attendance.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    target = DBConfig.from_dict(settings.DB_CONFIG)

    apply_schema(target)
    tables = list_tables(target)
    print(f"OK: Applied schema.sql -> {target.user}@{target.host}:{target.port}/{target.database} (tables={len(tables)})")


if __name__ == "__main__":
    main()
