from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Optional, Tuple

from dates.base import DateEngine
from dates.schemas import DateMatch
from extraction.date_fields import DUE, SCHEDULED, DateFields
from extraction.working_text import collapse

logger = logging.getLogger(__name__)

TRIGGER_PATTERN = re.compile(
    r"\b(?:"
    r"(?P<due>due\s+(?:on\s+|by\s+)?|deadline\s+(?:on\s+)?|must\s+be\s+done\s+(?:by\s+)?)"
    r"|(?P<scheduled>scheduled\s+(?:for\s+)?|start\s+(?:on\s+)?|begin\s+(?:on\s+)?|work\s+on\s+)"
    r")",
    re.IGNORECASE,
)

# room for a stray preposition between the trigger and the expression
TRIGGER_TOLERANCE = 3


def _anchored_match(engine: DateEngine, tail: str, reference: datetime) -> Optional[DateMatch]:
    try:
        parsed = engine.parse(tail, reference, forward_date=True)
    except Exception as e:
        logger.debug("Date engine failed on trigger tail %r: %s", tail, e)
        return None
    if not parsed or parsed[0].index > TRIGGER_TOLERANCE:
        return None
    return parsed[0]


def extract_explicit_dates(
    text: str,
    engine: DateEngine,
    reference: datetime,
    fields: DateFields,
) -> Tuple[DateFields, str]:
    """Resolve "due ..." / "scheduled for ..." phrases.

    Triggers are visited left to right and every one is tried, so
    "scheduled for Monday due Friday" fills both fields. The first trigger of
    each kind that resolves wins; the rest stay in the text.
    """
    result = fields.copy()
    working = text
    position = 0

    while result.any_open:
        trigger = TRIGGER_PATTERN.search(working, position)
        if trigger is None:
            break

        kind = DUE if trigger.group("due") else SCHEDULED
        if not result.is_open(kind):
            position = trigger.end()
            continue

        hit = _anchored_match(engine, working[trigger.end():], reference)
        if hit is None:
            position = trigger.end()
            continue

        result.assign(kind, hit.start)

        span_start = trigger.end() + hit.index
        working = collapse(
            working[:trigger.start()]
            + " "
            + working[trigger.end():span_start]
            + " "
            + working[span_start + len(hit.text):]
        )
        position = trigger.start()

    return result, working
