from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from dateparser.search import search_dates
from dateutil.relativedelta import relativedelta

from dates import rules
from dates.base import DateEngine
from dates.schemas import DateComponents, DateMatch

logger = logging.getLogger(__name__)

_WEEKDAY = r"(?:mon|tues?|wed(?:nes)?|thu(?:rs?)?|fri|sat(?:ur)?|sun)(?:day)?"
_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|"
    r"aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)

# search_dates happily turns "2 hours" or "30 min" into a date; keep fragments
# that carry at least one real calendar cue or a clock time rules.TIME_PATTERNS
# accepts.
_DATE_CUE = re.compile(
    r"\d{4}-\d{1,2}-\d{1,2}"
    r"|\b\d{1,2}[/.]\d{1,2}(?:[/.]\d{2,4})?\b"
    r"|\b(?:today|tomorrow|tonight|yesterday)\b"
    rf"|\b{_WEEKDAY}\b"
    rf"|\b{_MONTH}\b"
    r"|\b(?:next|last|this)\s+\w+"
    r"|\bin\s+\d+\s+\w+"
    r"|\bago\b",
    re.IGNORECASE,
)

_YEAR_CUE = re.compile(r"\b\d{4}\b")
_MONTH_CUE = re.compile(
    rf"\d{{4}}-\d{{1,2}}-\d{{1,2}}|\b\d{{1,2}}[/.]\d{{1,2}}\b|\b{_MONTH}\b|\bmonths?\b",
    re.IGNORECASE,
)
_DAY_CUE = re.compile(
    rf"\d{{4}}-\d{{1,2}}-\d{{1,2}}|\b\d{{1,2}}[/.]\d{{1,2}}\b|\b{_WEEKDAY}\b"
    r"|\b(?:today|tomorrow|tonight|yesterday)\b"
    r"|\b\d{1,2}(?:st|nd|rd|th)?\b"
    r"|\b(?:days?|weeks?)\b",
    re.IGNORECASE,
)
_WEEKDAY_CUE = re.compile(rf"\b{_WEEKDAY}\b", re.IGNORECASE)

_TIME_JOINER = re.compile(r"\s*(?:at|@|,)?\s*", re.IGNORECASE)
_RANGE_JOINER = re.compile(r"\s*(?:-|–|to|until|till|through|thru)\s*", re.IGNORECASE)
_RANGE_OPENER = re.compile(r"\b(?:from|between)\s+$", re.IGNORECASE)


def _known_components(fragment: str) -> frozenset:
    known = set()
    date_part = fragment
    clock = rules.find_clock(fragment)
    if clock is not None:
        match, _ = clock
        known |= rules.clock_known(match)
        date_part = fragment[:match.start()] + " " + fragment[match.end():]

    if _YEAR_CUE.search(date_part):
        known.add("year")
    if _MONTH_CUE.search(date_part):
        known.add("month")
    if _DAY_CUE.search(date_part):
        known.add("day")
    return frozenset(known)


def _stated_value(fragment: str, value: datetime, known: frozenset, reference: datetime) -> datetime:
    """Put the written clock time on dateparser's value.

    dateparser reads compact times like "9am" as a month; without any date
    component in the fragment the day comes from the reference instant.
    """
    clock = rules.find_clock(fragment)
    if clock is None:
        return value
    _, stated = clock
    day = value.date() if known & {"year", "month", "day"} else reference.date()
    return datetime.combine(day, stated)


class DateparserEngine(DateEngine):
    """Date/time expression engine backed by ``dateparser.search``.

    Phrases covered by :mod:`dates.rules` are resolved there first; dateparser
    handles the rest (month names, numeric dates, "in 3 days", "next month").
    """

    def __init__(self, languages: Sequence[str] = ("en",)):
        self.languages = list(languages)

    def _settings(self, reference: datetime, forward_date: bool) -> dict:
        return {
            "RELATIVE_BASE": reference,
            "PREFER_DATES_FROM": "future" if forward_date else "current_period",
            "RETURN_AS_TIMEZONE_AWARE": False,
        }

    def _search(
        self, text: str, remainder: str, reference: datetime, forward_date: bool
    ) -> List[DateMatch]:
        if not remainder.strip():
            return []

        found = search_dates(
            remainder,
            languages=self.languages,
            settings=self._settings(reference, forward_date),
        ) or []

        matches: List[DateMatch] = []
        cursor = 0
        for fragment, value in found:
            index = remainder.find(fragment, cursor)
            if index < 0:
                logger.debug("dateparser fragment %r not located in input", fragment)
                continue
            cursor = index + len(fragment)

            if not _DATE_CUE.search(fragment) and rules.find_clock(fragment) is None:
                continue

            known = _known_components(fragment)
            matches.append(
                DateMatch(
                    text=text[index:cursor],
                    index=index,
                    start=DateComponents(
                        value=_stated_value(fragment, value, known, reference),
                        known=known,
                    ),
                )
            )
        return matches

    def parse(
        self, text: str, reference: datetime, forward_date: bool = True
    ) -> List[DateMatch]:
        if not text or not text.strip():
            return []

        matches, remainder = rules.scan(text, reference)
        matches.extend(self._search(text, remainder, reference, forward_date))
        matches.sort(key=lambda m: m.index)

        return _merge_ranges(text, _merge_date_and_time(text, matches))


def _combine_date_and_time(text: str, first: DateMatch, second: DateMatch) -> Optional[DateMatch]:
    first_timed = first.start.is_certain("hour")
    second_timed = second.start.is_certain("hour")
    if first_timed == second_timed:
        return None

    date_part, time_part = (second, first) if first_timed else (first, second)
    value = datetime.combine(date_part.start.value.date(), time_part.start.value.time())
    return DateMatch(
        text=text[first.index:second.stop],
        index=first.index,
        start=DateComponents(value=value, known=date_part.start.known | time_part.start.known),
    )


def _merge_date_and_time(text: str, matches: List[DateMatch]) -> List[DateMatch]:
    merged: List[DateMatch] = []
    i = 0
    while i < len(matches):
        current = matches[i]
        if i + 1 < len(matches):
            nxt = matches[i + 1]
            if _TIME_JOINER.fullmatch(text[current.stop:nxt.index]):
                combined = _combine_date_and_time(text, current, nxt)
                if combined is not None:
                    merged.append(combined)
                    i += 2
                    continue
        merged.append(current)
        i += 1
    return merged


def _range_end(start: DateComponents, end: DateMatch) -> DateComponents:
    """Move a range end that was forward-dated on its own past the range start."""
    value = end.start.value
    if value >= start.value:
        return end.start

    if _WEEKDAY_CUE.search(end.text):
        step = timedelta(weeks=1)
    elif not end.start.known & {"year", "month", "day"}:
        step = timedelta(days=1)
    elif end.start.is_certain("month") and not end.start.is_certain("year"):
        step = relativedelta(years=1)
    else:
        return end.start

    while value < start.value:
        value += step
    return DateComponents(value=value, known=end.start.known)


def _merge_ranges(text: str, matches: List[DateMatch]) -> List[DateMatch]:
    merged: List[DateMatch] = []
    i = 0
    while i < len(matches):
        current = matches[i]
        if i + 1 < len(matches):
            nxt = matches[i + 1]
            if _RANGE_JOINER.fullmatch(text[current.stop:nxt.index]):
                start = current.index
                opener = _RANGE_OPENER.search(text[:start])
                if opener:
                    start = opener.start()
                merged.append(
                    DateMatch(
                        text=text[start:nxt.stop],
                        index=start,
                        start=current.start,
                        end=_range_end(current.start, nxt),
                    )
                )
                i += 2
                continue
        merged.append(current)
        i += 1
    return merged
