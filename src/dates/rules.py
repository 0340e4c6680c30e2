"""
Fixed rules for the date and time phrases typed most often.

They run before dateparser: ISO dates, relative day words, weekdays and clock
times are resolved here against the reference instant, and the spans they
claim are blanked out so dateparser only sees what is left.
"""
from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Callable, List, Optional, Tuple

from dates.schemas import DateComponents, DateMatch

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
_WEEKDAY_GROUP = "|".join(WEEKDAYS)

WEEKDAY_PATTERN = re.compile(rf"\b({_WEEKDAY_GROUP})\b", re.IGNORECASE)

_AT = r"(?:\bat\s+|@\s*)"

TIME_PATTERNS = [
    # 3pm, 3:30pm, at 9.15 a.m.
    re.compile(
        rf"{_AT}?\b(?P<hour>\d{{1,2}})(?:[:.](?P<minute>\d{{2}}))?\s*(?P<suffix>a\.?m\.?|p\.?m\.?)(?!\w)",
        re.IGNORECASE,
    ),
    # 15:30
    re.compile(rf"{_AT}?\b(?P<hour>\d{{1,2}}):(?P<minute>\d{{2}})\b"),
    # at 9h; a bare "2h" is left to the estimate stage
    re.compile(rf"{_AT}(?P<hour>\d{{1,2}})h\b", re.IGNORECASE),
    # 14h
    re.compile(r"\b(?P<hour>1[3-9]|2[0-3])h\b", re.IGNORECASE),
    re.compile(rf"{_AT}?\b(?P<word>noon|midnight)\b", re.IGNORECASE),
]


def next_weekday(today: date, name: str, force_next: bool = False) -> date:
    """Upcoming ``name``; today counts unless ``force_next`` asks for next week's."""
    days_ahead = WEEKDAYS.index(name.lower()) - today.weekday()
    if days_ahead == 0 and not force_next:
        return today
    if days_ahead <= 0 or force_next:
        days_ahead += 7
    return today + timedelta(days=days_ahead)


def _iso(today: date, match: re.Match) -> date:
    return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))


DateRule = Tuple[re.Pattern, Callable[[date, re.Match], date], frozenset]

_DAY = frozenset({"day"})

DAY_RULES: List[DateRule] = [
    (re.compile(r"\b(\d{4})-(\d{2})-(\d{2})\b"), _iso, frozenset({"year", "month", "day"})),
    (
        re.compile(r"\b(?:the\s+)?day\s+after\s+tomorrow\b", re.IGNORECASE),
        lambda today, m: today + timedelta(days=2),
        _DAY,
    ),
    (re.compile(r"\b(?:today|tonight)\b", re.IGNORECASE), lambda today, m: today, _DAY),
    (
        re.compile(r"\b(?:tomorrow|tmrw)\b", re.IGNORECASE),
        lambda today, m: today + timedelta(days=1),
        _DAY,
    ),
    (re.compile(r"\byesterday\b", re.IGNORECASE), lambda today, m: today - timedelta(days=1), _DAY),
    (
        re.compile(rf"\b(?:on\s+)?next\s+({_WEEKDAY_GROUP})\b", re.IGNORECASE),
        lambda today, m: next_weekday(today, m.group(1), force_next=True),
        _DAY,
    ),
    (
        re.compile(rf"\b(?:on\s+)?(?:this\s+)?({_WEEKDAY_GROUP})\b", re.IGNORECASE),
        lambda today, m: next_weekday(today, m.group(1)),
        _DAY,
    ),
]


def clock_time(match: re.Match) -> Optional[time]:
    """Time of day written in a TIME_PATTERNS match, or None when impossible."""
    parts = match.groupdict()
    word = (parts.get("word") or "").lower()
    if word:
        return time(12, 0) if word == "noon" else time(0, 0)

    hour = int(parts["hour"])
    minute = int(parts.get("minute") or 0)
    suffix = (parts.get("suffix") or "").replace(".", "").lower()

    if hour > 23 or minute > 59:
        return None

    if suffix in ("am", "pm"):
        if hour == 0 or hour > 12:
            return None
        if suffix == "pm" and hour != 12:
            hour += 12
        elif suffix == "am" and hour == 12:
            hour = 0

    return time(hour, minute)


def clock_known(match: re.Match) -> frozenset:
    parts = match.groupdict()
    if parts.get("minute") or parts.get("word"):
        return frozenset({"hour", "minute"})
    return frozenset({"hour"})


def find_clock(text: str) -> Optional[Tuple[re.Match, time]]:
    for pattern in TIME_PATTERNS:
        for match in pattern.finditer(text):
            value = clock_time(match)
            if value is not None:
                return match, value
    return None


def _blank(text: str, start: int, stop: int) -> str:
    return text[:start] + " " * (stop - start) + text[stop:]


def scan(text: str, reference: datetime) -> Tuple[List[DateMatch], str]:
    """Resolve what the rules know.

    Returns the matches, ordered by position, and ``text`` with their spans
    replaced by spaces so offsets in the remainder stay valid.
    """
    today = reference.date()
    masked = text
    found: List[DateMatch] = []

    for pattern, resolve, known in DAY_RULES:
        for match in pattern.finditer(masked):
            try:
                day = resolve(today, match)
            except ValueError:
                continue
            found.append(
                DateMatch(
                    text=text[match.start():match.end()],
                    index=match.start(),
                    start=DateComponents(value=datetime.combine(day, time()), known=known),
                )
            )
            masked = _blank(masked, match.start(), match.end())

    # times alone are pinned to the reference day
    for pattern in TIME_PATTERNS:
        for match in pattern.finditer(masked):
            value = clock_time(match)
            if value is None:
                continue
            found.append(
                DateMatch(
                    text=text[match.start():match.end()],
                    index=match.start(),
                    start=DateComponents(value=datetime.combine(today, value), known=clock_known(match)),
                )
            )
            masked = _blank(masked, match.start(), match.end())

    found.sort(key=lambda m: m.index)
    return found, masked
