#!/usr/bin/env python3
"""
Add one employee's shifts from the shift spreadsheet to the calendar.

Every cell whose value matches the employee name becomes a selection, the same
as ticking those cells in the dashboard.

Usage:
    uv run python src/scripts/add_shifts.py <employee_name> [--week "week 28_2025"] [--color Sage]

Example:
    uv run python src/scripts/add_shifts.py Maria --week "week 28_2025" --dry-run
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from models.events import ShiftSelection
from services.calendar import GraphCalendar
from services.schedule import all_records, load_weeks
from services.sheets import GoogleSheets
from services.sync import ShiftSynchronizer


def find_selections(records, employee_name: str, week: str | None) -> list[ShiftSelection]:
    """Collect (shift, date) pairs whose cell names the employee."""
    wanted = employee_name.strip().lower()
    selections = []
    for record in records:
        if week and record.week != week:
            continue
        for date_header, value in record.dates.items():
            if value.strip().lower() == wanted:
                selections.append(ShiftSelection(shift=record.shift_label, date=date_header))
    return selections


async def run(args: argparse.Namespace) -> int:
    weeks = await load_weeks(GoogleSheets())
    records = all_records(weeks)
    selections = find_selections(records, args.employee_name, args.week)

    print(f"Found {len(selections)} shifts for {args.employee_name}")
    for selection in selections:
        print(f"  - {selection.date}: {selection.shift}")

    if args.dry_run or not selections:
        return 0

    synchronizer = ShiftSynchronizer(GraphCalendar(), records)
    result = await synchronizer.sync(args.employee_name, selections, color=args.color)

    print(f"\n{result.message}")
    for item in result.skipped + result.dropped:
        print(f"  ! {item.date} {item.shift}: {item.reason}")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Add an employee's spreadsheet shifts to the calendar"
    )
    parser.add_argument("employee_name", help="Name as written in the schedule cells")
    parser.add_argument("--week", default=None, help="Only this week tab")
    parser.add_argument("--color", default=None, help="Category to tag events with")
    parser.add_argument(
        "--dry-run", action="store_true", help="List the shifts without creating events"
    )

    args = parser.parse_args()

    try:
        sys.exit(asyncio.run(run(args)))
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
