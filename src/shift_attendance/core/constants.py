"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

from .enums import Shift

DEFAULT_TIMEZONE = "America/Argentina/Buenos_Aires"
DEFAULT_SESSION_MINUTES = 60
DEFAULT_MAX_REPORT_DAYS = 366

# Check-in is accepted at or before these times.
CHECKIN_CUTOFFS = {
    Shift.MORNING: time(9, 0),
    Shift.AFTERNOON: time(18, 0),
}

# Check-ins strictly after these times are flagged late in exports.
LATE_AFTER = {
    Shift.MORNING: time(8, 15),
    Shift.AFTERNOON: time(17, 15),
}

SHIFT_LABELS = {
    Shift.MORNING: "Morning",
    Shift.AFTERNOON: "Afternoon",
}

NOT_RECORDED = "Not recorded"
EXPORT_SHEET_NAME = "Attendance"
EXPORT_COLUMN_WIDTHS = (20, 12, 15, 15, 15, 15)
