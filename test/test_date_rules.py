from datetime import date, datetime, time

import pytest

from conftest import REFERENCE
from dates.rules import TIME_PATTERNS, clock_time, find_clock, next_weekday, scan


@pytest.mark.parametrize(
    "name,force_next,expected",
    [
        ("wednesday", False, date(2025, 1, 1)),
        ("wednesday", True, date(2025, 1, 8)),
        ("friday", False, date(2025, 1, 3)),
        ("friday", True, date(2025, 1, 10)),
        ("Monday", False, date(2025, 1, 6)),
    ],
)
def test_next_weekday(name, force_next, expected):
    assert next_weekday(REFERENCE.date(), name, force_next) == expected


@pytest.mark.parametrize(
    "text,expected",
    [
        ("8am", time(8, 0)),
        ("at 3:30pm", time(15, 30)),
        ("9.15 a.m.", time(9, 15)),
        ("12am", time(0, 0)),
        ("12pm", time(12, 0)),
        ("15:30", time(15, 30)),
        ("at 9h", time(9, 0)),
        ("14h", time(14, 0)),
        ("noon", time(12, 0)),
    ],
)
def test_clock_times(text, expected):
    _, value = find_clock(text)
    assert value == expected


def test_impossible_and_duration_like_times():
    assert find_clock("13pm") is None
    assert find_clock("2h") is None
    assert find_clock("2 hours") is None
    match = TIME_PATTERNS[0].search("0am")
    assert clock_time(match) is None


def test_time_alone_lands_on_reference_day():
    matches, rest = scan("Standup 8am", REFERENCE)
    assert len(matches) == 1
    assert matches[0].text == "8am"
    assert matches[0].start.value == datetime(2025, 1, 1, 8, 0)
    assert matches[0].start.known == {"hour"}
    assert rest.strip() == "Standup"


def test_scan_orders_and_masks():
    text = "Dentist 2025-03-04 at 9:30am"
    matches, rest = scan(text, REFERENCE)
    assert [m.text for m in matches] == ["2025-03-04", "at 9:30am"]
    assert matches[0].start.known == {"year", "month", "day"}
    assert matches[1].start.known == {"hour", "minute"}
    assert len(rest) == len(text)
    assert rest.split() == ["Dentist"]


def test_relative_days_and_weekdays():
    matches, _ = scan("the day after tomorrow", REFERENCE)
    assert matches[0].start.value.date() == date(2025, 1, 3)

    matches, _ = scan("on next friday", REFERENCE)
    assert matches[0].text == "on next friday"
    assert matches[0].start.value.date() == date(2025, 1, 10)

    matches, _ = scan("tonight", REFERENCE)
    assert matches[0].start.value.date() == date(2025, 1, 1)
    assert not matches[0].start.is_certain("hour")


def test_invalid_iso_date_is_skipped():
    matches, rest = scan("Report 2025-02-30", REFERENCE)
    assert matches == []
    assert rest == "Report 2025-02-30"
