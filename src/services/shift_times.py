"""
Shift time resolution.

Shift labels carry a start time without an am/pm marker ("Server 10:00-close",
"Mgr 4:00-9:30"). Whether the hour is morning or evening is decided by the
row the label sits in: day-block rows keep the hour, night-block rows move it
to the afternoon. Every timed shift lasts SHIFT_DURATION.
"""

import re
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from core.config import (
    CALENDAR_TIME_ZONE,
    DEFAULT_SHIFT_END,
    DEFAULT_SHIFT_START,
    SHIFT_DURATION,
    TIME_OFF_LABEL,
)
from models.events import ShiftTimes
from models.schedule import RowRole
from services.grid import classify_row

SHIFT_TIME_PATTERN = re.compile(r"(\d{1,2}):(\d{2})-(close|\d{1,2}:\d{2})", re.IGNORECASE)
DATE_LABEL_PATTERN = re.compile(r"(\d+)\s*-\s*(\w+)")

MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}


def get_calendar_zone() -> ZoneInfo:
    return ZoneInfo(CALENDAR_TIME_ZONE)


def is_time_off(shift_label: str) -> bool:
    return shift_label.strip().lower() == TIME_OFF_LABEL


def parse_date_label(label: str, year: int) -> date | None:
    """
    Parse a date header such as "7 - Jul" into a date in the given year.

    Returns None when the label has no day/month pair, the month is unknown,
    or the day does not exist in that month.
    """
    match = DATE_LABEL_PATTERN.search(label)
    if not match:
        return None

    month = MONTHS.get(match.group(2)[:3].lower())
    if month is None:
        return None

    try:
        return date(year, month, int(match.group(1)))
    except ValueError:
        return None


def to_24_hour(hour: int, source_row: int) -> int:
    """Apply the row-based am/pm rule to a parsed start hour."""
    role = classify_row(source_row - 1)
    if role is RowRole.NIGHT_SHIFT and hour != 12:
        return hour + 12
    # Day rows keep 1-11 as morning and 12 as noon; other rows keep the raw hour
    return hour


def resolve_shift_time(
    shift_label: str, source_row: int, day: date, tz: ZoneInfo | None = None
) -> ShiftTimes | None:
    """
    Resolve the interval of a shift on a given day.

    Args:
        shift_label: First-column label of the shift row
        source_row: 1-based row the label came from
        day: Calendar date of the shift
        tz: Zone for the resulting instants (defaults to CALENDAR_TIME_ZONE)

    Returns:
        ShiftTimes, or None when no start time can be read from the label
    """
    if is_time_off(shift_label):
        return ShiftTimes(start=day, end=day, is_all_day=True)

    match = SHIFT_TIME_PATTERN.search(shift_label)
    if not match:
        return None

    hour = to_24_hour(int(match.group(1)), source_row)
    minute = int(match.group(2))
    if hour > 23 or minute > 59:
        return None

    tz = tz or get_calendar_zone()
    start = datetime(day.year, day.month, day.day, hour, minute, tzinfo=tz)
    return ShiftTimes(start=start, end=add_wall_clock(start, SHIFT_DURATION))


def default_shift_time(day: date, tz: ZoneInfo | None = None) -> ShiftTimes:
    """Fallback window for labels without a readable start time."""
    tz = tz or get_calendar_zone()
    return ShiftTimes(
        start=datetime.combine(day, DEFAULT_SHIFT_START, tzinfo=tz),
        end=datetime.combine(day, DEFAULT_SHIFT_END, tzinfo=tz),
    )


def add_wall_clock(start: datetime, delta: timedelta) -> datetime:
    """Wall-clock addition: the result keeps the start's tzinfo and reads delta later on the clock."""
    return start + delta
