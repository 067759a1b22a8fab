"""Tests for week tab parsing and rendering."""

import random

from models.schedule import RowRole, WeekTab
from services.grid import classify_row, parse_date_headers, parse_week, render_week_table

SHIFT_ROWS = {5} | set(range(7, 17)) | set(range(18, 26))  # 1-based


def test_row_layout_roles():
    assert [classify_row(i) for i in range(3)] == [RowRole.HEADER] * 3
    assert classify_row(3) is None
    assert classify_row(4) is RowRole.REQUESTED_OFF
    assert classify_row(5) is None
    assert all(classify_row(i) is RowRole.DAY_SHIFT for i in range(6, 16))
    assert classify_row(10) is RowRole.DAY_SHIFT
    assert classify_row(16) is None
    assert all(classify_row(i) is RowRole.NIGHT_SHIFT for i in range(17, 25))
    assert classify_row(25) is None


def test_date_headers_come_from_third_row(week_rows):
    assert parse_date_headers(week_rows) == ["7 - Jul", "8 - Jul", "9 - Jul"]


def test_date_headers_missing_row():
    assert parse_date_headers([["a"], ["b"]]) == []


def test_parse_week_selects_shift_rows(week_tab):
    parsed = parse_week(week_tab)

    assert [r.source_row for r in parsed.records] == [5, 7, 8, 9, 11, 13, 18, 19, 20]
    assert [r.shift_label for r in parsed.records][:2] == ["Requests off", "Server 9:00-close"]
    assert all(r.week == "week 28_2025" for r in parsed.records)
    labels = {r.shift_label for r in parsed.records}
    assert "Coverage notes" not in labels
    assert "AM" not in labels
    assert "Totals" not in labels


def test_parse_week_maps_cells_to_headers(week_tab):
    records = {r.shift_label: r for r in parse_week(week_tab).records}

    assert records["Requests off"].dates == {"7 - Jul": "Ana", "9 - Jul": "Ben"}
    assert records["Server 9:00-close"].dates == {
        "7 - Jul": "Ana",
        "8 - Jul": "Ben",
        "9 - Jul": "Cara",
    }
    # Short row: only the cells present are mapped
    assert records["Host 8:30-2:00"].dates == {"7 - Jul": "Ben"}


def test_cells_beyond_headers_are_dropped():
    rows = [[""], [""], ["", "7 - Jul"], [""], ["Requests off", "Ana", "Ben", "Cara"]]
    record = parse_week(WeekTab.from_rows("week 1", rows)).records[0]
    assert record.dates == {"7 - Jul": "Ana"}


def test_empty_tab():
    parsed = parse_week(WeekTab.from_rows("week 1", []))
    assert parsed.records == []
    assert parsed.date_headers == []


def test_record_serialization(week_tab):
    record = parse_week(week_tab).records[0]
    assert record.to_dict() == {
        "shift": "Requests off",
        "dates": {"7 - Jul": "Ana", "9 - Jul": "Ben"},
        "week": "week 28_2025",
        "originalRow": 5,
    }


def test_random_grids_never_emit_rows_outside_layout():
    rng = random.Random(7)
    for _ in range(200):
        rows = [
            [rng.choice(["", "x", "Server 9:00-close", "7 - Jul"]) for _ in range(rng.randint(0, 6))]
            for _ in range(rng.randint(0, 40))
        ]
        for record in parse_week(WeekTab.from_rows("week", rows)).records:
            assert record.source_row in SHIFT_ROWS
            assert record.shift_label.strip()


def test_render_includes_headers_and_shift_rows(week_tab):
    html = render_week_table(week_tab)

    assert html.startswith('<div class="sheet-tab"><h3>week 28_2025</h3>')
    assert html.endswith("</table></div>")
    assert '<td class="sheet-header">7 - Jul</td>' in html
    assert '<td class="shift-column">Server 9:00-close</td>' in html
    assert '<td class="has-employee">Ana</td>' in html
    assert "Coverage notes" not in html
    assert "Totals" not in html
    assert "Prep &lt;early&gt;" in html
    # 3 header rows + 10 day rows + 1 requested off + 8 night rows present in the grid
    assert html.count("<tr>") == 22
