"""
Pytest configuration and shared fixtures.
"""

import os
import sys
from datetime import date, datetime
from pathlib import Path

import pytest
from faker import Faker

# Must be set before core.config is imported
os.environ.setdefault("SHIFT_SYNC_API_KEY", "test-api-key")

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models.events import CalendarEventRef  # noqa: E402
from models.schedule import SheetTab, WeekTab  # noqa: E402
from services.backends import BackendError, EventNotFoundError  # noqa: E402

API_KEY = os.environ["SHIFT_SYNC_API_KEY"]


class FakeSheets:
    """In-memory SpreadsheetBackend."""

    def __init__(self, tabs: dict[str, list[list[str]]], hidden=(), fail_metadata=False):
        self.tabs = tabs
        self.hidden = set(hidden)
        self.fail_metadata = fail_metadata
        self.failing_tabs: set[str] = set()
        self.reads: list[str] = []

    async def list_tabs(self):
        if self.fail_metadata:
            raise BackendError("metadata unavailable")
        return [SheetTab(title, title in self.hidden) for title in self.tabs]

    async def read_rows(self, title):
        self.reads.append(title)
        if title in self.failing_tabs:
            raise BackendError(f"cannot read {title}")
        return self.tabs.get(title, [])


class FakeCalendar:
    """In-memory CalendarBackend that records every call."""

    def __init__(self, events=None):
        self.events: dict[str, CalendarEventRef] = {e.event_id: e for e in (events or [])}
        self.created = []
        self.delete_attempts: list[str] = []
        self.fail_create: set[str] = set()
        self.fail_delete: set[str] = set()
        self.fail_list = False
        self._next_id = 1

    async def list_events(self, start, end):
        if self.fail_list:
            raise BackendError("list failed")
        found = []
        for event in self.events.values():
            event_start = event.start
            if not isinstance(event_start, datetime):
                event_start = datetime.combine(event_start, datetime.min.time(), tzinfo=start.tzinfo)
            if start <= event_start <= end:
                found.append(event)
        return found

    async def create_event(self, shift):
        if shift.summary in self.fail_create:
            raise BackendError(f"create failed for {shift.summary}")
        event_id = f"evt-{self._next_id}"
        self._next_id += 1
        ref = CalendarEventRef(event_id, shift.summary, shift.start, shift.end, shift.is_all_day)
        self.events[event_id] = ref
        self.created.append(shift)
        return ref

    async def delete_event(self, event_id):
        self.delete_attempts.append(event_id)
        if event_id in self.fail_delete:
            raise BackendError(f"delete failed for {event_id}")
        if event_id not in self.events:
            raise EventNotFoundError(event_id)
        del self.events[event_id]

    async def get_event(self, event_id):
        if event_id not in self.events:
            raise EventNotFoundError(event_id)
        return self.events[event_id]


def make_week_rows() -> list[list[str]]:
    """A week tab laid out like the real spreadsheet (25 rows)."""
    rows = [[""] for _ in range(26)]
    rows[0] = ["Week 28", "", "", ""]
    rows[1] = ["", "Monday", "Tuesday", "Wednesday"]
    rows[2] = ["", "7 - Jul", "8 - Jul", "9 - Jul"]
    rows[3] = ["Coverage notes", "busy", "", ""]
    rows[4] = ["Requests off", "Ana", "", "Ben"]
    rows[5] = ["AM", "ignored", "ignored"]
    rows[6] = ["Server 9:00-close", "Ana", "Ben", "Cara"]
    rows[7] = ["Mgr 10:00-4:00", "", "Cara"]
    rows[8] = ["Host 8:30-2:00", "Ben"]
    rows[10] = ["11 o'clock 12:00-close", "Cara", "", "Ana"]
    rows[12] = ["Prep <early>", "Dan"]
    rows[16] = ["PM", "ignored"]
    rows[17] = ["Bar 4:00-close", "Dan", "Eve"]
    rows[18] = ["Closer 11:00-close", "Eve"]
    rows[19] = ["Late 12:00-5:30", "", "", "Ana"]
    rows[25] = ["Totals", "3", "2", "2"]
    return rows


@pytest.fixture
def week_rows():
    return make_week_rows()


@pytest.fixture
def week_tab(week_rows):
    return WeekTab.from_rows("week 28_2025", week_rows)


@pytest.fixture
def fake_sheets(week_rows):
    return FakeSheets({"week 28_2025": week_rows, "Staff list": [["Name"]]})


@pytest.fixture
def fake_calendar():
    return FakeCalendar()


@pytest.fixture
def today():
    return date(2025, 7, 1)


@pytest.fixture
def employee_name():
    fake = Faker()
    Faker.seed(28)
    return fake.first_name()
