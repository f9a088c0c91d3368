"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from core.validation import InvalidArgument

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent

# =============================================================================
# LMS API CONFIGURATION (from environment)
# =============================================================================

LMS_API_BASE_URL = os.environ.get("LMS_API_BASE_URL", "http://localhost:5000")
LMS_SESSION_COOKIE = os.environ.get("LMS_SESSION_COOKIE", "")
LMS_API_TIMEOUT = float(os.environ.get("LMS_API_TIMEOUT", "10"))
SESSION_COOKIE_NAME = "connect.sid"  # express-session default

# =============================================================================
# CALENDAR CONFIGURATION
# =============================================================================

CALENDAR_TIMEZONE = os.environ.get("CALENDAR_TIMEZONE", "")  # empty = system local
UPCOMING_EVENTS_LIMIT = int(os.environ.get("UPCOMING_EVENTS_LIMIT", "5"))

GRID_CELLS = 42  # 6 rows x 7 days
DAYS_PER_WEEK = 7

WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

# =============================================================================
# EVENT CODES
# =============================================================================

EVENT_CATEGORIES = ("training", "meeting", "ceremony", "workshop")
VENUE_TYPES = ("VTC", "Face-to-Face")

# Short tags used in text renderings of the calendar
CATEGORY_LABELS = {
    "training": "TRN",
    "meeting": "MTG",
    "ceremony": "CER",
    "workshop": "WKS",
}
DEFAULT_CATEGORY_LABEL = "EVT"

USER_ROLES = ("admin", "trainer", "trainee")
PARTICIPANT_STATUSES = ("Pending", "Confirmed", "Declined")

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


def get_calendar_timezone(name: str | None = None) -> ZoneInfo | None:
    """
    Resolve a timezone name (default: CALENDAR_TIMEZONE) to a ZoneInfo.

    Returns None for an empty name, meaning the system local zone.

    Raises:
        InvalidArgument: if the zone name is unknown
    """
    name = CALENDAR_TIMEZONE if name is None else name
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise InvalidArgument(f"Unknown timezone '{name}'")
