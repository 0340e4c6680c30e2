from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import FrozenSet, Optional

COMPONENTS = ("year", "month", "day", "hour", "minute")


@dataclass(frozen=True)
class DateComponents:
    """A resolved point in time plus which parts were stated in the input.

    Components missing from ``known`` were implied by the engine (defaulted
    from the reference instant or filled with zero).
    """

    value: datetime
    known: FrozenSet[str] = field(default_factory=frozenset)

    def is_certain(self, component: str) -> bool:
        return component in self.known


@dataclass(frozen=True)
class DateMatch:
    text: str
    index: int
    start: DateComponents
    end: Optional[DateComponents] = None

    @property
    def stop(self) -> int:
        return self.index + len(self.text)

    @property
    def is_range(self) -> bool:
        return self.end is not None and self.end.value != self.start.value
