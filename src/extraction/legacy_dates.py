"""
Regex-only date and time extraction.

Used when the date engine raises. Best effort: handles ISO dates, "Dec 25",
a handful of relative phrases and clock times, never ranges.
"""
from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from dates.rules import TIME_PATTERNS, WEEKDAYS, clock_time, next_weekday
from extraction.date_fields import DateFields
from extraction.working_text import remove_first

_WEEKDAY_GROUP = "|".join(WEEKDAYS)

MONTHS = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

ISO_DATE = re.compile(r"\b(\d{4})-(\d{2})-(\d{2})\b")
MONTH_DAY = re.compile(
    r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec|january|february|march|"
    r"april|june|july|august|september|october|november|december)\s+(\d{1,2})\b",
    re.IGNORECASE,
)


def _relative_rules(today: date) -> List[Tuple[re.Pattern, Callable[[re.Match], date]]]:
    return [
        (re.compile(r"\btoday\b", re.IGNORECASE), lambda m: today),
        (re.compile(r"\b(tomorrow|tmrw)\b", re.IGNORECASE), lambda m: today + timedelta(days=1)),
        (re.compile(r"\byesterday\b", re.IGNORECASE), lambda m: today - timedelta(days=1)),
        (re.compile(r"\bin (\d+) days?\b", re.IGNORECASE), lambda m: today + timedelta(days=int(m.group(1)))),
        (re.compile(r"\bnext week\b", re.IGNORECASE), lambda m: today + timedelta(weeks=1)),
        (re.compile(r"\bnext month\b", re.IGNORECASE), lambda m: today + relativedelta(months=1)),
        (re.compile(r"\bnext year\b", re.IGNORECASE), lambda m: today + relativedelta(years=1)),
        (
            re.compile(rf"\bnext ({_WEEKDAY_GROUP})\b", re.IGNORECASE),
            lambda m: next_weekday(today, m.group(1), force_next=True),
        ),
        (
            # "every monday" belongs to the recurrence stage
            re.compile(rf"(?<!every )(?<!each )\b({_WEEKDAY_GROUP})\b", re.IGNORECASE),
            lambda m: next_weekday(today, m.group(1)),
        ),
    ]


def _specific_date(text: str, today: date) -> Tuple[Optional[date], str]:
    match = ISO_DATE.search(text)
    if match:
        try:
            found = date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
            return found, remove_first(ISO_DATE, text)
        except ValueError:
            pass

    match = MONTH_DAY.search(text)
    if match:
        month = MONTHS[match.group(1).lower()]
        day = int(match.group(2))
        try:
            found = date(today.year, month, day)
            if found < today:
                found = date(today.year + 1, month, day)
            return found, remove_first(MONTH_DAY, text)
        except ValueError:
            pass

    return None, text


def _relative_date(text: str, today: date) -> Tuple[Optional[date], str]:
    for pattern, resolve in _relative_rules(today):
        match = pattern.search(text)
        if match:
            return resolve(match), remove_first(pattern, text)
    return None, text


def _time(text: str) -> Tuple[Optional[str], str]:
    for pattern in TIME_PATTERNS:
        match = pattern.search(text)
        if match:
            value = clock_time(match)
            if value is not None:
                return value.strftime("%H:%M"), remove_first(pattern, text)
    return None, text


def extract_legacy_dates(
    text: str,
    reference: datetime,
    fields: DateFields,
    default_to_scheduled: bool,
) -> Tuple[DateFields, str]:
    result = fields.copy()
    target = result.target(default_to_scheduled)
    if target is None:
        return result, text

    today = reference.date()
    found, working = _specific_date(text, today)
    if found is None:
        found, working = _relative_date(working, today)
    if found is not None:
        setattr(result, f"{target}_date", found.isoformat())

    if getattr(result, f"{target}_time") is None:
        time, working = _time(working)
        if time is not None:
            setattr(result, f"{target}_time", time)

    return result, working
