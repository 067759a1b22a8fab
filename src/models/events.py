"""
Data models for resolved shifts, calendar events and undo batches.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone


@dataclass(frozen=True)
class ShiftTimes:
    """Resolved interval for a shift; dates only when all-day."""

    start: datetime | date
    end: datetime | date
    is_all_day: bool = False


@dataclass(frozen=True)
class ShiftSelection:
    """A (shift label, date label) pair picked by the caller."""

    shift: str
    date: str


@dataclass
class ResolvedShift:
    """A shift instantiated on one date, ready for calendar creation."""

    shift_label: str
    week: str
    date_label: str
    employee_name: str
    start: datetime | date
    end: datetime | date
    is_all_day: bool
    summary: str
    description: str
    color: str | None = None

    @property
    def day(self) -> date:
        if isinstance(self.start, datetime):
            return self.start.date()
        return self.start


@dataclass
class CalendarEventRef:
    """An event as known to the calendar backend."""

    event_id: str
    summary: str
    start: datetime | date | None
    end: datetime | date | None
    is_all_day: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "summary": self.summary,
            "start": _isoformat(self.start),
            "end": _isoformat(self.end),
        }


@dataclass
class UndoEntry:
    """One created event inside an undo batch."""

    shift_label: str
    date_label: str
    event_id: str
    start: datetime | date
    end: datetime | date

    def to_dict(self) -> dict:
        return {
            "shift": self.shift_label,
            "date": self.date_label,
            "eventId": self.event_id,
            "startTime": _isoformat(self.start),
            "endTime": _isoformat(self.end),
        }


@dataclass
class UndoBatch:
    """Events created by one synchronization call, reversible as a unit."""

    employee_name: str
    events: list[UndoEntry]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class SkippedShift:
    """A selection that produced no event, with the reason."""

    shift: str
    date: str
    reason: str

    def to_dict(self) -> dict:
        return {"shift": self.shift, "date": self.date, "reason": self.reason}


@dataclass
class SyncResult:
    """Outcome of one synchronization call."""

    added: list[UndoEntry] = field(default_factory=list)
    skipped: list[SkippedShift] = field(default_factory=list)
    dropped: list[SkippedShift] = field(default_factory=list)

    @property
    def message(self) -> str:
        message = f"Added {len(self.added)} shifts to calendar"
        if self.skipped:
            message += f", skipped {len(self.skipped)} duplicates"
        if self.dropped:
            message += f", could not process {len(self.dropped)}"
        return message


def _isoformat(value: datetime | date | None) -> str | None:
    return value.isoformat() if value is not None else None
