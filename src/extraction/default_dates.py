from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Optional, Sequence, Tuple

from dates.base import DateEngine
from dates.schemas import DateMatch
from extraction.date_fields import DUE, SCHEDULED, DateFields
from extraction.legacy_dates import extract_legacy_dates
from extraction.working_text import cut

logger = logging.getLogger(__name__)

# "every Monday", "each other week", "every last Friday": left for the recurrence stage
_RECURRENCE_LEAD = re.compile(
    r"\b(?:every|each)\s+(?:(?:other|first|second|third|fourth|last)\s+)?$",
    re.IGNORECASE,
)
_LEADING_WEEKDAY = re.compile(
    r"(?:on\s+)?(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday)(?P<plural>s)?\b",
    re.IGNORECASE,
)


def _anchor_length(text: str, match: DateMatch) -> Optional[int]:
    """Length of the recurrence phrase at the start of ``match``, None when there is none."""
    lead = _LEADING_WEEKDAY.match(match.text)
    if lead and lead.group("plural"):
        return lead.end()
    if _RECURRENCE_LEAD.search(text[:match.index]) is not None:
        return lead.end() if lead else len(match.text)
    return None


def _first_usable(text: str, matches: Sequence[DateMatch]) -> Optional[Tuple[DateMatch, int]]:
    """First match worth assigning, with the offset its removal starts at.

    A recurrence anchor that also states a time ("every monday at 7am") is
    kept for its time; only the part after the weekday is removed.
    """
    for match in matches:
        anchor = _anchor_length(text, match)
        if anchor is None:
            return match, match.index
        if anchor < len(match.text) and match.start.is_certain("hour"):
            return match, match.index + anchor
    return None


def extract_default_dates(
    text: str,
    engine: DateEngine,
    reference: datetime,
    fields: DateFields,
    default_to_scheduled: bool,
) -> Tuple[DateFields, str]:
    """Assign a bare date expression to whichever date field is still open.

    Ranges always map start -> scheduled and end -> due. When the engine
    blows up the lightweight regex extractors take over.
    """
    result = fields.copy()
    if not result.any_open:
        return result, text

    try:
        matches = engine.parse(text, reference, forward_date=True)
    except Exception as e:
        logger.debug("Date engine failed, using fallback extractors: %s", e)
        return extract_legacy_dates(text, reference, result, default_to_scheduled)

    usable = _first_usable(text, matches)
    if usable is None:
        return result, text
    match, cut_from = usable

    if match.is_range:
        if result.is_open(SCHEDULED):
            result.assign(SCHEDULED, match.start)
        if result.is_open(DUE):
            result.assign(DUE, match.end)
    else:
        result.assign(result.target(default_to_scheduled), match.start)

    return result, cut(text, cut_from, match.stop)
