from __future__ import annotations

import re
from datetime import datetime
from typing import Iterable, List

from tasknotes_nlp.models import UNTITLED_TASK, ParsedTaskData

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def is_valid_date_string(value: str) -> bool:
    if not DATE_PATTERN.match(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def is_valid_time_string(value: str) -> bool:
    return bool(TIME_PATTERN.match(value))


def unique(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(item for item in items if item))


def validate_and_cleanup(fields: dict) -> ParsedTaskData:
    """Final pass over the accumulated fields; always yields a well-formed result."""
    cleaned = dict(fields)

    title = (cleaned.get("title") or "").strip()
    cleaned["title"] = title or UNTITLED_TASK

    for key in ("due_date", "scheduled_date"):
        value = cleaned.get(key)
        if value is not None and not is_valid_date_string(value):
            del cleaned[key]

    for key in ("due_time", "scheduled_time"):
        value = cleaned.get(key)
        if value is not None and not is_valid_time_string(value):
            del cleaned[key]

    cleaned["tags"] = unique(cleaned.get("tags") or [])
    cleaned["contexts"] = unique(cleaned.get("contexts") or [])

    estimate = cleaned.get("estimate")
    if estimate is not None and estimate <= 0:
        del cleaned["estimate"]

    return ParsedTaskData(**cleaned)
