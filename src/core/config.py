"""
Configuration constants and environment setup.
"""

import os
from datetime import time, timedelta
from pathlib import Path

from dotenv import load_dotenv

from models.schedule import RowRole

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = PROJECT_ROOT / "data" / "db" / "shift-sync.db"

# =============================================================================
# SPREADSHEET CONFIGURATION
# =============================================================================

SPREADSHEET_ID = os.environ.get(
    "SPREADSHEET_ID", "1kgAILNyBFTsEwFVmykiVCf5J6vnqtI4mLcvgC6ss75A"
)
GOOGLE_SERVICE_ACCOUNT_FILE = os.environ.get("GOOGLE_SERVICE_ACCOUNT_FILE", "")
SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]
SHEET_COLUMNS = "A:Z"
WEEK_TAB_KEYWORD = "week"

# Used when spreadsheet metadata cannot be read
FALLBACK_WEEK_TABS = [f"week {n}_2025" for n in range(28, 53)]

# =============================================================================
# GRID LAYOUT (0-based row indices within a week tab)
# =============================================================================

DATE_HEADER_ROW = 2

# Row 10 is the "11 o'clock" row and sits inside the day block
ROW_LAYOUT: list[tuple[range, RowRole]] = [
    (range(0, 3), RowRole.HEADER),
    (range(4, 5), RowRole.REQUESTED_OFF),
    (range(6, 16), RowRole.DAY_SHIFT),
    (range(17, 25), RowRole.NIGHT_SHIFT),
]

# =============================================================================
# SHIFT TIMES
# =============================================================================

CALENDAR_TIME_ZONE = os.environ.get("CALENDAR_TIME_ZONE", "America/Phoenix")
SHIFT_DURATION = timedelta(hours=5, minutes=30)
DEFAULT_SHIFT_START = time(9, 0)
DEFAULT_SHIFT_END = time(17, 0)
TIME_OFF_LABEL = "requests off"

# =============================================================================
# CALENDAR CONFIGURATION
# =============================================================================

EVENT_SUMMARY_PREFIX = "DB-"
TIME_OFF_COLOR = os.environ.get("TIME_OFF_COLOR", "Sage")
CALENDAR_USER_ID = os.environ.get("CALENDAR_USER_ID", "")
CALENDAR_ID = os.environ.get("CALENDAR_ID", "")
SYNC_MAX_CONCURRENCY = int(os.environ.get("SYNC_MAX_CONCURRENCY", "1"))

# =============================================================================
# MS GRAPH CREDENTIALS (from environment)
# =============================================================================

GRAPH_TENANT_ID = os.environ.get("MICROSOFT_GRAPH_TENANT_ID", "")
GRAPH_APP_ID = os.environ.get("MICROSOFT_GRAPH_APP_ID", "")
GRAPH_CLIENT_SECRET = os.environ.get("MICROSOFT_GRAPH_CLIENT_SECRET", "")

# =============================================================================
# API CONFIGURATION
# =============================================================================

SHIFT_SYNC_API_KEY = os.environ.get("SHIFT_SYNC_API_KEY", "")
SESSION_SECRET = os.environ.get("SESSION_SECRET", "calendar-app-secret")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
API_VERSION = "1.0.0"
