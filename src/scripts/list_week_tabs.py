#!/usr/bin/env python3
"""
List the week tabs of the shift spreadsheet and the shifts parsed from each.

Usage:
    uv run python src/scripts/list_week_tabs.py
"""

import asyncio
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from services.schedule import load_weeks
from services.sheets import GoogleSheets


async def main():
    """Print every week tab with its date headers and shift rows."""
    print("Fetching week tabs from the shift spreadsheet...\n")
    weeks = await load_weeks(GoogleSheets())

    print(f"Found {len(weeks)} week tabs with data\n")
    print("=" * 80)

    for week in weeks:
        print(f"\nTab: {week.tab.title}")
        print(f"  Dates: {', '.join(week.date_headers) or 'None'}")

        if week.records:
            print(f"  Shifts ({len(week.records)}):")
            for record in week.records:
                print(f"    - row {record.source_row}: {record.shift_label}")
                for date_header, name in record.dates.items():
                    print(f"        {date_header}: {name}")
        else:
            print("  Shifts: None")

        print("-" * 80)

    print("\nDone!")


if __name__ == "__main__":
    asyncio.run(main())
