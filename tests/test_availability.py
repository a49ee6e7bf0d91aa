from datetime import datetime, time

import pytest

from readyride.availability import (
    format_operating_hours,
    is_open,
    is_service_open,
    parse_time_string,
)


@pytest.mark.parametrize(
    "value,minutes",
    [
        ("9:00 AM", 540),
        ("12:00 AM", 0),
        ("12:30 PM", 750),
        ("10:15 pm", 1335),
        ("  7:05PM ", 1145),
        ("11:59 PM", 1439),
    ],
)
def test_parse_time_string(value, minutes):
    assert parse_time_string(value) == minutes


@pytest.mark.parametrize("value", ["garbage", "", "9 AM", "21:00", None])
def test_unparseable_times_map_to_midnight(value):
    assert parse_time_string(value) == 0


def test_open_during_day():
    assert is_open("9:00 AM", "10:00 PM", time(14, 0)) is True


def test_closed_after_hours():
    assert is_open("9:00 AM", "5:00 PM", time(20, 0)) is False


def test_window_bounds_are_inclusive():
    assert is_open("9:00 AM", "5:00 PM", time(9, 0))
    assert is_open("9:00 AM", "5:00 PM", time(17, 0))
    assert not is_open("9:00 AM", "5:00 PM", time(17, 1))


def test_overnight_window():
    assert is_open("10:00 PM", "6:00 AM", time(2, 0)) is True
    assert is_open("10:00 PM", "6:00 AM", time(23, 30)) is True
    assert is_open("10:00 PM", "6:00 AM", time(12, 0)) is False


def test_accepts_datetime():
    assert is_open("9:00 AM", "5:00 PM", datetime(2026, 10, 18, 8, 59)) is False


@pytest.mark.parametrize("now", [time(0, 0), time(8, 0), time(14, 0), time(23, 59)])
def test_garbage_hours_fail_open(now):
    assert is_open("garbage", "also garbage", now) is True


def test_one_unreadable_bound_counts_as_midnight():
    assert is_open("garbage", "5:00 PM", time(20, 0)) is False
    assert is_open("garbage", "5:00 PM", time(12, 0)) is True
    assert is_open(None, "5:00 PM", time(20, 0)) is False
    assert is_open("9:00 PM", "late", time(22, 0)) is True


def test_missing_hours_fail_open():
    assert is_open(None, None, time(20, 0)) is True


def test_bad_clock_fails_open():
    assert is_open("9:00 AM", "5:00 PM", "not a clock") is True


def test_service_without_hours_is_open():
    assert is_service_open(None, None, time(3, 0)) is True
    assert is_service_open("8:00 AM", "", time(3, 0)) is True
    assert is_service_open("8:00 AM", "6:00 PM", time(3, 0)) is False


def test_format_operating_hours():
    assert format_operating_hours("9:00 AM", "10:00 PM") == "9:00 AM - 10:00 PM"
