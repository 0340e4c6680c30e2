from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from dateutil.rrule import rrulestr

from tasknotes_nlp.models import ParsedTaskData

logger = logging.getLogger(__name__)

DETAILS_PREVIEW_LENGTH = 50

_UNITS = {"daily": "day", "weekly": "week", "monthly": "month", "yearly": "year"}
_ORDINALS = {1: "first", 2: "second", 3: "third", 4: "fourth", -1: "last"}


@dataclass(frozen=True)
class PreviewItem:
    icon: str
    text: str


def _when(date: str, time: Optional[str]) -> str:
    return f"{date} {time}" if time else date


def describe_recurrence(parsed: ParsedTaskData) -> str:
    rule = parsed.to_rrule()
    try:
        rrulestr(rule, dtstart=datetime(2000, 1, 1))
    except (ValueError, TypeError) as e:
        logger.debug("Rejected recurrence rule %r: %s", rule, e)
        return "Invalid recurrence"

    unit = _UNITS[parsed.recurrence]
    interval = parsed.recurrence_interval or 1
    text = f"every {interval} {unit}s" if interval > 1 else f"every {unit}"

    if parsed.days_of_week:
        days = ", ".join(parsed.days_of_week)
        if parsed.recurrence_position is not None:
            ordinal = _ORDINALS.get(parsed.recurrence_position, str(parsed.recurrence_position))
            text += f" on the {ordinal} {days}"
        else:
            text += f" on {days}"
    return text


def get_preview_data(parsed: ParsedTaskData) -> List[PreviewItem]:
    """Human-readable summary of the populated fields, in display order."""
    items: List[PreviewItem] = []

    if parsed.title:
        items.append(PreviewItem("edit-3", f'"{parsed.title}"'))
    if parsed.details:
        snippet = parsed.details[:DETAILS_PREVIEW_LENGTH]
        if len(parsed.details) > DETAILS_PREVIEW_LENGTH:
            snippet += "..."
        items.append(PreviewItem("file-text", f'Details: "{snippet}"'))
    if parsed.due_date:
        items.append(PreviewItem("calendar", f"Due: {_when(parsed.due_date, parsed.due_time)}"))
    if parsed.scheduled_date:
        items.append(
            PreviewItem(
                "calendar-clock",
                f"Scheduled: {_when(parsed.scheduled_date, parsed.scheduled_time)}",
            )
        )
    if parsed.priority:
        items.append(PreviewItem("alert-triangle", f"Priority: {parsed.priority}"))
    if parsed.status:
        items.append(PreviewItem("activity", f"Status: {parsed.status}"))
    if parsed.contexts:
        items.append(PreviewItem("map-pin", "Contexts: " + ", ".join(f"@{c}" for c in parsed.contexts)))
    if parsed.tags:
        items.append(PreviewItem("tag", "Tags: " + ", ".join(f"#{t}" for t in parsed.tags)))
    if parsed.recurrence:
        items.append(PreviewItem("repeat", f"Recurrence: {describe_recurrence(parsed)}"))
    if parsed.estimate:
        items.append(PreviewItem("clock", f"Estimate: {parsed.estimate} min"))

    return items


def get_preview_text(parsed: ParsedTaskData) -> str:
    return " • ".join(item.text for item in get_preview_data(parsed))
