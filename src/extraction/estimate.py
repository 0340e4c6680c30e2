from __future__ import annotations

import re
from typing import Optional, Tuple

from extraction.working_text import remove_first

# fixed priority order, first hit wins; "1h30m" is not seen by the bare-hour
# rule because the hour digit is followed by a word character
ESTIMATE_PATTERNS = [
    (re.compile(r"\b(\d+)\s*(?:min|mins|minute|minutes)\b", re.IGNORECASE), "minutes"),
    (re.compile(r"\b(\d+)\s*(?:hr|hrs|hour|hours)\b", re.IGNORECASE), "hours"),
    (re.compile(r"\b(\d+)\s*h\b", re.IGNORECASE), "hours"),
    (re.compile(r"\b(\d+)h\s*(\d+)m\b", re.IGNORECASE), "hour_min"),
    (re.compile(r"\b(\d+)m\b", re.IGNORECASE), "minutes"),
]


def _to_minutes(match: re.Match, unit: str) -> int:
    if unit == "hour_min":
        return int(match.group(1)) * 60 + int(match.group(2))
    if unit == "hours":
        return int(match.group(1)) * 60
    return int(match.group(1))


def extract_estimate(text: str) -> Tuple[Optional[int], str]:
    """Return (minutes, remaining text).

    A zero estimate counts as no estimate and leaves the text as it was.
    """
    for pattern, unit in ESTIMATE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        minutes = _to_minutes(match, unit)
        if minutes <= 0:
            return None, text
        return minutes, remove_first(pattern, text)

    return None, text
