"""
Interfaces of the spreadsheet and calendar backends.

The sync core only talks to these protocols; services/sheets.py and
services/calendar.py implement them against Google Sheets and MS Graph.
"""

from datetime import datetime
from typing import Protocol

from models.events import CalendarEventRef, ResolvedShift
from models.schedule import SheetTab


class BackendError(Exception):
    """A spreadsheet or calendar call was rejected or could not be made."""


class EventNotFoundError(BackendError):
    """The calendar has no event with the requested id."""

    def __init__(self, event_id: str):
        super().__init__(f"Event not found: {event_id}")
        self.event_id = event_id


class SpreadsheetBackend(Protocol):
    async def list_tabs(self) -> list[SheetTab]: ...

    async def read_rows(self, title: str) -> list[list[str]]: ...


class CalendarBackend(Protocol):
    async def list_events(self, start: datetime, end: datetime) -> list[CalendarEventRef]: ...

    async def create_event(self, shift: ResolvedShift) -> CalendarEventRef: ...

    async def delete_event(self, event_id: str) -> None: ...

    async def get_event(self, event_id: str) -> CalendarEventRef: ...
