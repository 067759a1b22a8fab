"""
Shift synchronization: selected shifts -> calendar events.

Each selection is resolved against the parsed schedule, checked against the
events already on that calendar day, and created when no event with the same
summary exists on that day. Selections that cannot be resolved are reported
as dropped, duplicates as skipped.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from core.config import EVENT_SUMMARY_PREFIX, SYNC_MAX_CONCURRENCY, TIME_OFF_COLOR
from models.events import (
    CalendarEventRef,
    ResolvedShift,
    ShiftSelection,
    SkippedShift,
    SyncResult,
    UndoEntry,
)
from models.schedule import ShiftRecord
from services.backends import BackendError, CalendarBackend
from services.shift_times import (
    default_shift_time,
    get_calendar_zone,
    is_time_off,
    parse_date_label,
    resolve_shift_time,
)

logger = logging.getLogger(__name__)

REASON_DUPLICATE = "duplicate"
REASON_UNKNOWN_SHIFT = "unknown shift"
REASON_UNPARSEABLE_DATE = "unparseable date"
REASON_BACKEND_ERROR = "backend error"


class DayLocks:
    """
    Per (summary, day) locks serializing duplicate-check-then-create.

    An entry lives only while some task holds or waits on its lock.
    """

    def __init__(self):
        self._locks: dict[tuple[str, date], asyncio.Lock] = {}
        self._users: dict[tuple[str, date], int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, summary: str, day: date):
        key = (summary, day)
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if not self._users[key]:
                del self._users[key]
                del self._locks[key]


def event_day(event: CalendarEventRef, tz: ZoneInfo) -> date | None:
    """Calendar day of an event's start in the given zone."""
    if isinstance(event.start, datetime):
        return event.start.astimezone(tz).date()
    return event.start


def is_duplicate(existing: CalendarEventRef, shift: ResolvedShift, tz: ZoneInfo) -> bool:
    return existing.summary == shift.summary and event_day(existing, tz) == shift.day


class ShiftSynchronizer:
    """
    Creates calendar events for an employee's selected shifts.

    Args:
        calendar: Calendar backend to check and write
        records: Shift records of all known week tabs, in tab order
        max_concurrency: 1 processes selections strictly in order; higher
            values process up to that many selections at once
        locks: Shared DayLocks; a private instance is used when omitted
        today: Reference date for the year of date labels
    """

    def __init__(
        self,
        calendar: CalendarBackend,
        records: list[ShiftRecord],
        *,
        max_concurrency: int = SYNC_MAX_CONCURRENCY,
        locks: DayLocks | None = None,
        today: date | None = None,
        tz: ZoneInfo | None = None,
    ):
        self.calendar = calendar
        self.max_concurrency = max(1, max_concurrency)
        self.locks = locks if locks is not None else DayLocks()
        self.tz = tz or get_calendar_zone()
        self.today = today or datetime.now(self.tz).date()

        # First record wins when a label appears in several tabs
        self.records_by_label: dict[str, ShiftRecord] = {}
        for record in records:
            self.records_by_label.setdefault(record.shift_label, record)

    def resolve(
        self, employee_name: str, selection: ShiftSelection, color: str | None = None
    ) -> ResolvedShift | SkippedShift:
        """Build the candidate event for one selection, or the reason it was dropped."""
        record = self.records_by_label.get(selection.shift)
        if record is None:
            return SkippedShift(selection.shift, selection.date, REASON_UNKNOWN_SHIFT)

        day = parse_date_label(selection.date, self.today.year)
        if day is None:
            return SkippedShift(selection.shift, selection.date, REASON_UNPARSEABLE_DATE)

        times = resolve_shift_time(selection.shift, record.source_row, day, self.tz)
        if times is None:
            logger.info("No time pattern in %r, using default window", selection.shift)
            times = default_shift_time(day, self.tz)

        if is_time_off(selection.shift):
            color = color or TIME_OFF_COLOR

        return ResolvedShift(
            shift_label=selection.shift,
            week=record.week,
            date_label=selection.date,
            employee_name=employee_name,
            start=times.start,
            end=times.end,
            is_all_day=times.is_all_day,
            summary=f"{EVENT_SUMMARY_PREFIX}{selection.shift}",
            description=(
                f"Shift: {selection.shift}\n"
                f"Employee: {employee_name}\n"
                f"Date: {selection.date}"
            ),
            color=color,
        )

    async def sync(
        self, employee_name: str, selections: list[ShiftSelection], color: str | None = None
    ) -> SyncResult:
        """Process all selections and collect added, skipped and dropped items."""
        logger.info(
            "Processing %d shifts for employee %s", len(selections), employee_name
        )

        if self.max_concurrency == 1:
            outcomes = []
            for selection in selections:
                outcomes.append(await self._process(employee_name, selection, color))
        else:
            semaphore = asyncio.Semaphore(self.max_concurrency)

            async def bounded(selection: ShiftSelection):
                async with semaphore:
                    return await self._process(employee_name, selection, color)

            # An unexpected error cancels the selections still in flight
            try:
                async with asyncio.TaskGroup() as group:
                    tasks = [group.create_task(bounded(s)) for s in selections]
            except ExceptionGroup as errors:
                raise errors.exceptions[0] from errors
            outcomes = [task.result() for task in tasks]

        result = SyncResult()
        for outcome in outcomes:
            if isinstance(outcome, UndoEntry):
                result.added.append(outcome)
            elif outcome.reason == REASON_DUPLICATE:
                result.skipped.append(outcome)
            else:
                result.dropped.append(outcome)
        return result

    async def _process(
        self, employee_name: str, selection: ShiftSelection, color: str | None
    ) -> UndoEntry | SkippedShift:
        candidate = self.resolve(employee_name, selection, color)
        if isinstance(candidate, SkippedShift):
            logger.info(
                "Dropping %s on %s: %s", selection.shift, selection.date, candidate.reason
            )
            return candidate

        try:
            async with self.locks.hold(candidate.summary, candidate.day):
                return await self._create_unless_duplicate(candidate)
        except BackendError as e:
            logger.error("Error adding shift %s for %s: %s", selection.shift, selection.date, e)
            return SkippedShift(selection.shift, selection.date, REASON_BACKEND_ERROR)

    async def _create_unless_duplicate(self, shift: ResolvedShift) -> UndoEntry | SkippedShift:
        day_start = datetime.combine(shift.day, time.min, tzinfo=self.tz)
        day_end = datetime.combine(shift.day, time.max, tzinfo=self.tz)
        existing_events = await self.calendar.list_events(day_start, day_end)

        if any(is_duplicate(existing, shift, self.tz) for existing in existing_events):
            logger.info("Skipping duplicate event %s on %s", shift.summary, shift.date_label)
            return SkippedShift(shift.shift_label, shift.date_label, REASON_DUPLICATE)

        created = await self.calendar.create_event(shift)
        return UndoEntry(
            shift_label=shift.shift_label,
            date_label=shift.date_label,
            event_id=created.event_id,
            start=shift.start,
            end=shift.end,
        )
