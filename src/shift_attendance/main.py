from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .shifts.registry import ShiftRegistry, parse_branch_shifts
from .attendance.controller import register as register_attendance
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["TIMEZONE"] = getattr(settings, "TIMEZONE")
    app.permanent_session_lifetime = timedelta(minutes=int(getattr(settings, "SESSION_MINUTES", 60)))
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            target = DBConfig.from_dict(db_config)
            apply_schema(target)
            logger.info("schema ready (tables=%s)", len(list_tables(target)))

        container = build_container(
            db_config=db_config,
            timezone=app.config["TIMEZONE"],
            shift_registry=ShiftRegistry(branch_shifts=parse_branch_shifts(getattr(settings, "BRANCH_SHIFTS", ""))),
            max_report_days=int(getattr(settings, "MAX_REPORT_DAYS")),
        )

    app.extensions["shift_attendance"] = container

    register_users(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
