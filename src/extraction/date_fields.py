from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from dates.schemas import DateComponents

DUE = "due"
SCHEDULED = "scheduled"


def format_date(components: DateComponents) -> str:
    return components.value.strftime("%Y-%m-%d")


def format_time(components: DateComponents) -> Optional[str]:
    """HH:MM when the hour was stated; minute falls back to 00 when only implied."""
    if not components.is_certain("hour"):
        return None
    if components.is_certain("minute"):
        return components.value.strftime("%H:%M")
    return components.value.strftime("%H:00")


@dataclass
class DateFields:
    due_date: Optional[str] = None
    due_time: Optional[str] = None
    scheduled_date: Optional[str] = None
    scheduled_time: Optional[str] = None

    def copy(self) -> "DateFields":
        return replace(self)

    def is_open(self, kind: str) -> bool:
        return getattr(self, f"{kind}_date") is None

    @property
    def any_open(self) -> bool:
        return self.is_open(DUE) or self.is_open(SCHEDULED)

    def target(self, default_to_scheduled: bool) -> Optional[str]:
        """Field a bare date lands in: the configured default, else whichever is left."""
        preferred, other = (SCHEDULED, DUE) if default_to_scheduled else (DUE, SCHEDULED)
        if self.is_open(preferred):
            return preferred
        if self.is_open(other):
            return other
        return None

    def assign(self, kind: str, components: DateComponents) -> None:
        setattr(self, f"{kind}_date", format_date(components))
        time = format_time(components)
        if time is not None:
            setattr(self, f"{kind}_time", time)

    def as_dict(self) -> dict:
        return {k: v for k, v in self.__dict__.items() if v is not None}
