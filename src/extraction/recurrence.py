from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from extraction.working_text import remove_first

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
_WEEKDAY_GROUP = "|".join(WEEKDAYS)

PERIOD_FREQUENCY = {
    "day": "daily",
    "week": "weekly",
    "month": "monthly",
    "year": "yearly",
}

ORDINAL_POSITION = {
    "first": 1,
    "second": 2,
    "third": 3,
    "fourth": 4,
    "last": -1,
}

EVERY_WEEKDAY = re.compile(rf"\bevery\s+({_WEEKDAY_GROUP})\b", re.IGNORECASE)
PLURAL_WEEKDAY = re.compile(rf"\b({_WEEKDAY_GROUP})s\b", re.IGNORECASE)
EVERY_OTHER = re.compile(r"\bevery\s+other\s+(day|week|month|year)\b", re.IGNORECASE)
EVERY_N = re.compile(r"\bevery\s+(\d+)\s+(day|week|month|year)s?\b", re.IGNORECASE)
EVERY_ORDINAL_WEEKDAY = re.compile(
    rf"\bevery\s+(first|second|third|fourth|last)\s+({_WEEKDAY_GROUP})\b", re.IGNORECASE
)

GENERIC_PATTERNS = [
    (re.compile(r"\b(daily|every day|each day)\b", re.IGNORECASE), "daily"),
    (re.compile(r"\b(weekly|every week|each week)\b", re.IGNORECASE), "weekly"),
    (re.compile(r"\b(monthly|every month|each month)\b", re.IGNORECASE), "monthly"),
    (re.compile(r"\b(yearly|annually|every year|each year)\b", re.IGNORECASE), "yearly"),
]


@dataclass(frozen=True)
class Recurrence:
    frequency: str
    days_of_week: Optional[List[str]] = None
    interval: Optional[int] = None
    position: Optional[int] = None


def _day(name: str) -> str:
    return name.lower().capitalize()


def extract_recurrence(text: str) -> Tuple[Optional[Recurrence], str]:
    match = EVERY_WEEKDAY.search(text)
    if match:
        rule = Recurrence("weekly", days_of_week=[_day(match.group(1))])
        return rule, remove_first(EVERY_WEEKDAY, text)

    match = PLURAL_WEEKDAY.search(text)
    if match:
        rule = Recurrence("weekly", days_of_week=[_day(match.group(1))])
        return rule, remove_first(PLURAL_WEEKDAY, text)

    match = EVERY_OTHER.search(text)
    if match:
        rule = Recurrence(PERIOD_FREQUENCY[match.group(1).lower()], interval=2)
        return rule, remove_first(EVERY_OTHER, text)

    match = EVERY_N.search(text)
    if match and int(match.group(1)) > 0:
        interval = int(match.group(1))
        rule = Recurrence(
            PERIOD_FREQUENCY[match.group(2).lower()],
            interval=interval if interval > 1 else None,
        )
        return rule, remove_first(EVERY_N, text)

    match = EVERY_ORDINAL_WEEKDAY.search(text)
    if match:
        rule = Recurrence(
            "monthly",
            days_of_week=[_day(match.group(2))],
            position=ORDINAL_POSITION[match.group(1).lower()],
        )
        return rule, remove_first(EVERY_ORDINAL_WEEKDAY, text)

    for pattern, frequency in GENERIC_PATTERNS:
        if pattern.search(text):
            return Recurrence(frequency), remove_first(pattern, text)

    return None, text
