"""
Data models for the shift spreadsheet.

Week tabs are read once per request and never modified; shift records are
derived from them by the grid parser and consumed read-only downstream.
"""

from dataclasses import dataclass, field
from enum import Enum


class RowRole(str, Enum):
    """Role of a row within a week tab."""

    HEADER = "header"
    REQUESTED_OFF = "requested_off"
    DAY_SHIFT = "day_shift"
    NIGHT_SHIFT = "night_shift"


@dataclass(frozen=True)
class SheetTab:
    """Spreadsheet tab as listed by the spreadsheet metadata."""

    title: str
    hidden: bool = False


@dataclass(frozen=True)
class WeekTab:
    """One week of raw grid rows."""

    title: str
    rows: tuple[tuple[str, ...], ...]

    @classmethod
    def from_rows(cls, title: str, rows: list[list]) -> "WeekTab":
        return cls(
            title=title,
            rows=tuple(
                tuple("" if cell is None else str(cell) for cell in row)
                for row in (rows or [])
            ),
        )


@dataclass
class ShiftRecord:
    """A shift row with its per-date cell values for one tab."""

    shift_label: str
    dates: dict[str, str]
    week: str
    source_row: int  # 1-based row within the tab

    def to_dict(self) -> dict:
        return {
            "shift": self.shift_label,
            "dates": dict(self.dates),
            "week": self.week,
            "originalRow": self.source_row,
        }


@dataclass
class ParsedWeek:
    """Parser output for one tab."""

    tab: WeekTab
    date_headers: list[str] = field(default_factory=list)
    records: list[ShiftRecord] = field(default_factory=list)
