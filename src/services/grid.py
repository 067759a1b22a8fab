"""
Week tab grid parsing and display rendering.

A week tab is a positional grid: row 3 holds the date headers ("7 - Jul"),
the first column holds shift labels, and each remaining cell holds the name
of whoever works that shift on that date. Which rows are shift rows is fixed
by ROW_LAYOUT.
"""

import logging
from html import escape

from core.config import DATE_HEADER_ROW, ROW_LAYOUT
from models.schedule import ParsedWeek, RowRole, ShiftRecord, WeekTab

logger = logging.getLogger(__name__)

SHIFT_ROLES = {RowRole.REQUESTED_OFF, RowRole.DAY_SHIFT, RowRole.NIGHT_SHIFT}


def classify_row(row_index: int) -> RowRole | None:
    """Return the role of a 0-based row index, or None if the row is ignored."""
    for rows, role in ROW_LAYOUT:
        if row_index in rows:
            return role
    return None


def parse_date_headers(rows) -> list[str]:
    """Non-empty header cells after the first column, in column order."""
    if len(rows) <= DATE_HEADER_ROW:
        return []
    return [cell for cell in rows[DATE_HEADER_ROW][1:] if cell and cell.strip()]


def parse_week(tab: WeekTab) -> ParsedWeek:
    """
    Parse one week tab into shift records.

    Cells are paired with the header at the same offset in the header list,
    so a cell is dropped when it is empty or has no header to pair with.
    Short rows simply produce fewer entries.
    """
    date_headers = parse_date_headers(tab.rows)
    records = []

    for row_index, row in enumerate(tab.rows):
        if classify_row(row_index) not in SHIFT_ROLES:
            continue
        if not row or not row[0].strip():
            continue

        dates = {}
        for header, value in zip(date_headers, row[1:]):
            if value and value.strip():
                dates[header] = value

        records.append(
            ShiftRecord(
                shift_label=row[0],
                dates=dates,
                week=tab.title,
                source_row=row_index + 1,
            )
        )

    logger.debug(
        "Tab %r: %d date headers, %d shift rows", tab.title, len(date_headers), len(records)
    )
    return ParsedWeek(tab=tab, date_headers=date_headers, records=records)


def render_week_table(tab: WeekTab) -> str:
    """Render the header rows and shift rows of a tab as an HTML table."""
    parts = [
        f'<div class="sheet-tab"><h3>{escape(tab.title)}</h3>'
        '<table class="google-sheet-table">'
    ]

    for row_index, row in enumerate(tab.rows):
        role = classify_row(row_index)
        if role is None:
            continue

        parts.append("<tr>")
        for col_index, cell in enumerate(row):
            if role is RowRole.HEADER:
                css_class = "sheet-header"
            elif col_index == 0:
                css_class = "shift-column"
            elif cell.strip():
                css_class = "has-employee"
            else:
                css_class = ""
            parts.append(f'<td class="{css_class}">{escape(cell)}</td>')
        parts.append("</tr>")

    parts.append("</table></div>")
    return "".join(parts)
