"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

from .enums import Punch

# Standard-track punch windows (local wall clock, both bounds inclusive).
PUNCH_WINDOWS = {
    Punch.TIME_IN: (time(6, 0), time(8, 0)),
    Punch.BREAK_OUT: (time(12, 0), time(12, 30)),
    Punch.BREAK_IN: (time(12, 31), time(13, 0)),
    Punch.TIME_OUT: (time(17, 0), time(23, 0)),
}

STANDARD_PUNCH_ORDER = (Punch.TIME_IN, Punch.BREAK_OUT, Punch.BREAK_IN, Punch.TIME_OUT)
ON_DUTY_PUNCH_ORDER = (Punch.TIME_IN, Punch.TIME_OUT)

EARTH_RADIUS_METERS = 6_371_000
LOCATION_THRESHOLD_METERS = 200
DEFAULT_POSITION_TIMEOUT_MS = 10_000

# Recipient ids notified about out-of-range scans.
ELEVATED_RECIPIENTS = ("admin", "it")
FALLBACK_LEAVE_RECIPIENT = "admin"
IT_ACCOUNT_ID = "it"

# Official schedule used for lateness / undertime in reports.
OFFICIAL_START = time(8, 0)
MAX_BREAK_MINUTES = 60
OFFICIAL_END = time(17, 0)

DEFAULT_HISTORY_LIMIT = 30

# Idle minutes before a logged-in session expires; refreshed on every request.
SESSION_TIMEOUT_MINUTES = 15
