"""Tests for shift time and date label resolution."""

from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

import pytest

from services.shift_times import (
    add_wall_clock,
    default_shift_time,
    parse_date_label,
    resolve_shift_time,
)

PHOENIX = ZoneInfo("America/Phoenix")
DAY = date(2025, 7, 7)
SHIFT_LENGTH = timedelta(hours=5, minutes=30)


def start_of(label, row, day=DAY):
    return resolve_shift_time(label, row, day, PHOENIX).start


def test_day_row_keeps_morning_hour():
    assert start_of("9:00-close", 7).time() == time(9, 0)


def test_night_row_moves_to_evening():
    assert start_of("9:00-close", 18).time() == time(21, 0)


def test_noon_stays_noon_in_day_and_night_rows():
    assert start_of("12:00-close", 10).time() == time(12, 0)
    assert start_of("11 o'clock 12:00-close", 11).time() == time(12, 0)
    assert start_of("Late 12:00-5:30", 20).time() == time(12, 0)


def test_row_outside_ranges_keeps_raw_hour():
    assert start_of("3:00-close", 5).time() == time(3, 0)
    assert start_of("3:00-close", 17).time() == time(3, 0)


def test_end_time_is_start_plus_duration():
    times = resolve_shift_time("Mgr 10:00-4:00", 8, DAY, PHOENIX)
    assert times.start == datetime(2025, 7, 7, 10, 0, tzinfo=PHOENIX)
    assert times.end == datetime(2025, 7, 7, 15, 30, tzinfo=PHOENIX)
    assert not times.is_all_day


def test_end_crosses_midnight():
    times = resolve_shift_time("Closer 11:00-close", 19, DAY, PHOENIX)
    assert times.start == datetime(2025, 7, 7, 23, 0, tzinfo=PHOENIX)
    assert times.end == datetime(2025, 7, 8, 4, 30, tzinfo=PHOENIX)


@pytest.mark.parametrize("row", [7, 11, 16, 18, 25, 5, 1])
@pytest.mark.parametrize("hour", range(1, 13))
def test_duration_holds_for_every_start(row, hour):
    times = resolve_shift_time(f"Shift {hour}:15-close", row, date(2025, 12, 31), PHOENIX)
    assert times.end - times.start == SHIFT_LENGTH
    assert (times.end.astimezone(ZoneInfo("UTC")) - times.start.astimezone(ZoneInfo("UTC"))) == SHIFT_LENGTH


def test_resolution_is_repeatable():
    first = resolve_shift_time("Bar 4:00-close", 18, DAY, PHOENIX)
    second = resolve_shift_time("Bar 4:00-close", 18, DAY, PHOENIX)
    assert first == second


def test_instants_are_in_phoenix_time():
    start = start_of("9:00-close", 7)
    assert start.utcoffset() == timedelta(hours=-7)


def test_end_marker_may_be_a_time_or_close():
    assert start_of("Host 8:30-2:00", 9).time() == time(8, 30)
    assert start_of("Host 8:30-Close", 9).time() == time(8, 30)


def test_requests_off_is_all_day():
    times = resolve_shift_time("Requests Off", 5, DAY, PHOENIX)
    assert times.is_all_day
    assert times.start == times.end == DAY
    assert not isinstance(times.start, datetime)


def test_label_without_time_returns_none():
    assert resolve_shift_time("Prep <early>", 13, DAY, PHOENIX) is None
    assert resolve_shift_time("Server 9-close", 7, DAY, PHOENIX) is None


def test_impossible_hour_returns_none():
    # 13 in a night row would become 25
    assert resolve_shift_time("13:00-close", 18, DAY, PHOENIX) is None


def test_default_window():
    times = default_shift_time(DAY, PHOENIX)
    assert times.start == datetime(2025, 7, 7, 9, 0, tzinfo=PHOENIX)
    assert times.end == datetime(2025, 7, 7, 17, 0, tzinfo=PHOENIX)


@pytest.mark.parametrize(
    "label, expected",
    [
        ("7 - Jul", date(2025, 7, 7)),
        ("12-Jul", date(2025, 7, 12)),
        ("1 - January", date(2025, 1, 1)),
        ("30 - sep", date(2025, 9, 30)),
        ("Mon 3 - Nov", date(2025, 11, 3)),
    ],
)
def test_parse_date_label(label, expected):
    assert parse_date_label(label, 2025) == expected


@pytest.mark.parametrize("label", ["Jul 7", "7 - Foo", "31 - Feb", "", "Monday"])
def test_parse_date_label_failures(label):
    assert parse_date_label(label, 2025) is None


def test_wall_clock_addition_across_dst_change():
    denver = ZoneInfo("America/Denver")
    times = resolve_shift_time("Bar 10:00-close", 18, date(2025, 3, 8), denver)

    assert times.start == datetime(2025, 3, 8, 22, 0, tzinfo=denver)
    assert times.end.tzinfo is denver
    assert (times.end.day, times.end.hour, times.end.minute) == (9, 3, 30)


def test_add_wall_clock_keeps_zone():
    start = datetime(2025, 7, 7, 21, 0, tzinfo=PHOENIX)
    assert add_wall_clock(start, SHIFT_LENGTH) == datetime(2025, 7, 8, 2, 30, tzinfo=PHOENIX)
