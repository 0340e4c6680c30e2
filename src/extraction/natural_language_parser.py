from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, List, Optional, Tuple

from dates.base import DateEngine
from dates.dateparser_engine import DateparserEngine
from extraction.date_fields import DateFields
from extraction.default_dates import extract_default_dates
from extraction.estimate import extract_estimate
from extraction.explicit_dates import extract_explicit_dates
from extraction.lexical import extract_contexts, extract_tags
from extraction.preview import PreviewItem, get_preview_data, get_preview_text
from extraction.recurrence import extract_recurrence
from extraction.validation import validate_and_cleanup
from extraction.vocabulary import FALLBACK_PRIORITIES, FALLBACK_STATUSES, VocabularyMatcher
from extraction.working_text import collapse
from tasknotes_nlp.models import ExtractionConfig, ParsedTaskData

logger = logging.getLogger(__name__)


def split_details(text: str) -> Tuple[str, Optional[str]]:
    """First line is parsed; everything after the first line break is kept as details."""
    stripped = text.strip()
    first_line, sep, rest = stripped.partition("\n")
    details = rest.strip() if sep else ""
    return first_line.strip(), details or None


class NaturalLanguageParser:
    """Turns one line of free-form text into a ParsedTaskData.

    Stages run in a fixed order, each stripping what it recognised from the
    working text: tags, contexts, priority, status, explicit date triggers,
    default dates, estimate, recurrence. Whatever survives is the title.
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        date_engine: Optional[DateEngine] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.config = config or ExtractionConfig()
        self.date_engine = date_engine or DateparserEngine()
        self.clock = clock
        self.priorities = VocabularyMatcher(self.config.priority_configs, FALLBACK_PRIORITIES)
        self.statuses = VocabularyMatcher(self.config.status_configs, FALLBACK_STATUSES)

    def _run(self, stage: str, func: Callable[..., Any], *args: Any) -> Optional[Any]:
        try:
            return func(*args)
        except Exception:
            logger.warning("%s extraction failed, skipping stage", stage, exc_info=True)
            return None

    def parse_input(self, text: str) -> ParsedTaskData:
        if not isinstance(text, str):
            raise TypeError(f"text must be a string, got {type(text).__name__}")
        if len(text) > self.config.max_input_length:
            raise ValueError(
                f"text is {len(text)} characters long, limit is {self.config.max_input_length}"
            )

        working, details = split_details(text)
        fields: dict = {"tags": [], "contexts": []}
        reference = self.clock()

        out = self._run("tags", extract_tags, working)
        if out:
            fields["tags"], working = out

        out = self._run("contexts", extract_contexts, working)
        if out:
            fields["contexts"], working = out

        out = self._run("priority", self.priorities.extract, working)
        if out:
            fields["priority"], working = out

        out = self._run("status", self.statuses.extract, working)
        if out:
            fields["status"], working = out

        dates = DateFields()
        out = self._run("explicit date", extract_explicit_dates, working, self.date_engine, reference, dates)
        if out:
            dates, working = out

        out = self._run(
            "date",
            extract_default_dates,
            working,
            self.date_engine,
            reference,
            dates,
            self.config.default_to_scheduled,
        )
        if out:
            dates, working = out
        fields.update(dates.as_dict())

        out = self._run("estimate", extract_estimate, working)
        if out:
            fields["estimate"], working = out

        out = self._run("recurrence", extract_recurrence, working)
        if out:
            rule, working = out
            if rule is not None:
                fields["recurrence"] = rule.frequency
                fields["days_of_week"] = rule.days_of_week
                fields["recurrence_interval"] = rule.interval
                fields["recurrence_position"] = rule.position

        fields["title"] = collapse(working)
        fields["details"] = details

        return validate_and_cleanup(fields)

    def get_preview_data(self, parsed: ParsedTaskData) -> List[PreviewItem]:
        return get_preview_data(parsed)

    def get_preview_text(self, parsed: ParsedTaskData) -> str:
        return get_preview_text(parsed)
