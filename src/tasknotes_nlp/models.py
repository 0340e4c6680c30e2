from __future__ import annotations

from typing import Literal, Optional, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


UNTITLED_TASK = "Untitled Task"

Frequency = Literal["daily", "weekly", "monthly", "yearly"]

_RRULE_FREQ = {
    "daily": "DAILY",
    "weekly": "WEEKLY",
    "monthly": "MONTHLY",
    "yearly": "YEARLY",
}

_RRULE_DAY = {
    "Monday": "MO",
    "Tuesday": "TU",
    "Wednesday": "WE",
    "Thursday": "TH",
    "Friday": "FR",
    "Saturday": "SA",
    "Sunday": "SU",
}


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VocabularyEntry(_CamelModel):
    value: str = Field(..., min_length=1)
    label: str = ""


class StatusConfig(VocabularyEntry):
    pass


class PriorityConfig(VocabularyEntry):
    pass


class ExtractionConfig(_CamelModel):
    """Read-only settings a parser instance is built from."""

    status_configs: List[StatusConfig] = Field(default_factory=list)
    priority_configs: List[PriorityConfig] = Field(default_factory=list)

    # bare (non-trigger) dates go to scheduled when True, due otherwise
    default_to_scheduled: bool = True

    max_input_length: int = Field(5000, gt=0)


class ParsedTaskData(_CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    title: str = Field(..., min_length=1)
    details: Optional[str] = None

    due_date: Optional[str] = None
    scheduled_date: Optional[str] = None
    due_time: Optional[str] = None
    scheduled_time: Optional[str] = None

    priority: Optional[str] = None
    status: Optional[str] = None

    tags: List[str] = Field(default_factory=list)
    contexts: List[str] = Field(default_factory=list)

    recurrence: Optional[Frequency] = None
    days_of_week: Optional[List[str]] = None
    recurrence_interval: Optional[int] = Field(None, ge=1)
    recurrence_position: Optional[int] = None

    estimate: Optional[int] = Field(None, gt=0)

    def to_rrule(self) -> Optional[str]:
        """Render the recurrence as an RRULE body, e.g. ``FREQ=WEEKLY;BYDAY=MO``."""
        if self.recurrence is None:
            return None

        parts = [f"FREQ={_RRULE_FREQ[self.recurrence]}"]
        if self.recurrence_interval and self.recurrence_interval > 1:
            parts.append(f"INTERVAL={self.recurrence_interval}")
        if self.days_of_week:
            days = ",".join(_RRULE_DAY.get(d, d[:2].upper()) for d in self.days_of_week)
            parts.append(f"BYDAY={days}")
        if self.recurrence_position is not None:
            parts.append(f"BYSETPOS={self.recurrence_position}")
        return ";".join(parts)

