from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from dates.schemas import DateMatch


class DateEngine(ABC):
    @abstractmethod
    def parse(
        self, text: str, reference: datetime, forward_date: bool = True
    ) -> List[DateMatch]:
        """
        Return every date/time expression found in ``text``, in order of appearance.
        Offsets are relative to ``text``. May raise; callers own the fallback policy.
        """
        raise NotImplementedError
