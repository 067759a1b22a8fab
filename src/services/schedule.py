"""
Week tab discovery and schedule loading.
"""

import logging

from core.config import FALLBACK_WEEK_TABS, WEEK_TAB_KEYWORD
from models.schedule import ParsedWeek, ShiftRecord, WeekTab
from services.backends import BackendError, SpreadsheetBackend
from services.grid import parse_week, render_week_table

logger = logging.getLogger(__name__)


async def discover_week_tabs(sheets: SpreadsheetBackend) -> list[str]:
    """
    List the visible week tabs, sorted by title.

    Falls back to FALLBACK_WEEK_TABS when the metadata cannot be read.
    """
    try:
        tabs = await sheets.list_tabs()
    except BackendError as e:
        logger.error("Error getting sheet metadata, using fallback tabs: %s", e)
        return list(FALLBACK_WEEK_TABS)

    week_tabs = sorted(
        tab.title
        for tab in tabs
        if not tab.hidden and WEEK_TAB_KEYWORD in tab.title.lower()
    )
    logger.info("Found %d week tabs", len(week_tabs))
    return week_tabs


async def load_weeks(sheets: SpreadsheetBackend) -> list[ParsedWeek]:
    """Fetch and parse every week tab, one at a time. Failed tabs are skipped."""
    weeks = []
    for title in await discover_week_tabs(sheets):
        try:
            rows = await sheets.read_rows(title)
        except BackendError as e:
            logger.error("Error fetching data from tab %s: %s", title, e)
            continue

        if not rows:
            continue
        weeks.append(parse_week(WeekTab.from_rows(title, rows)))
    return weeks


def all_records(weeks: list[ParsedWeek]) -> list[ShiftRecord]:
    return [record for week in weeks for record in week.records]


def build_schedule_payload(weeks: list[ParsedWeek]) -> dict:
    """Aggregate parsed weeks into the schedule response body."""
    records = all_records(weeks)

    # dict.fromkeys keeps first-seen order while removing duplicates
    shifts = list(dict.fromkeys(record.shift_label for record in records))
    date_headers = list(
        dict.fromkeys(header for record in records for header in record.dates)
    )

    return {
        "schedule": [record.to_dict() for record in records],
        "shifts": shifts,
        "date_headers": date_headers,
        "html_tables": [render_week_table(week.tab) for week in weeks],
    }
