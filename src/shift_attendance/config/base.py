"""Settings shared by every environment; each environment module overrides what it needs."""

import os

from ..core.constants import DEFAULT_MAX_REPORT_DAYS, DEFAULT_SESSION_MINUTES, DEFAULT_TIMEZONE

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shift_attendance"),
}

DEBUG = False
TESTING = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Timestamps and "today" are computed in this timezone.
TIMEZONE = os.getenv("TIMEZONE", DEFAULT_TIMEZONE)

SESSION_MINUTES = int(os.getenv("SESSION_MINUTES", str(DEFAULT_SESSION_MINUTES)))

# Branches limited to some shifts, e.g. "centro:morning;norte:morning,afternoon".
BRANCH_SHIFTS = os.getenv("BRANCH_SHIFTS", "")

MAX_REPORT_DAYS = int(os.getenv("MAX_REPORT_DAYS", str(DEFAULT_MAX_REPORT_DAYS)))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

# Used by scripts/seed_db.py only.
ADMIN_LOGIN = os.getenv("ADMIN_LOGIN", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")
