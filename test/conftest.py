from datetime import datetime

import pytest

from dates.base import DateEngine
from dates.dateparser_engine import DateparserEngine
from dates.schemas import DateComponents, DateMatch
from extraction.natural_language_parser import NaturalLanguageParser
from tasknotes_nlp.models import ExtractionConfig, PriorityConfig, StatusConfig

# Wednesday
REFERENCE = datetime(2025, 1, 1, 10, 0)


class FakeDateEngine(DateEngine):
    """Finds scripted phrases (case-insensitive) and reports them like a real engine."""

    def __init__(self, script=None, error: Exception = None):
        self.script = script or {}
        self.error = error
        self.calls = []

    def parse(self, text, reference, forward_date=True):
        self.calls.append(text)
        if self.error is not None:
            raise self.error

        found = []
        lower = text.lower()
        for phrase, (start, end) in self.script.items():
            index = lower.find(phrase.lower())
            if index >= 0:
                found.append(
                    DateMatch(text=text[index:index + len(phrase)], index=index, start=start, end=end)
                )
        return sorted(found, key=lambda m: (m.index, -len(m.text)))


def _point(year, month, day, hour=0, minute=0, known=("year", "month", "day")):
    return DateComponents(value=datetime(year, month, day, hour, minute), known=frozenset(known))


@pytest.fixture
def point():
    return _point


@pytest.fixture
def fake_engine_factory():
    def _make(script=None, error=None):
        return FakeDateEngine(script=script, error=error)
    return _make


@pytest.fixture
def tomorrow_engine(fake_engine_factory):
    return fake_engine_factory({"tomorrow": (_point(2025, 1, 2), None)})


@pytest.fixture
def configured():
    return ExtractionConfig(
        status_configs=[
            StatusConfig(value="open", label="Open"),
            StatusConfig(value="in-progress", label="In Progress"),
            StatusConfig(value="done", label="Done"),
        ],
        priority_configs=[
            PriorityConfig(value="low", label="Low"),
            PriorityConfig(value="normal", label="Normal"),
            PriorityConfig(value="high", label="High"),
            PriorityConfig(value="urgent", label="Urgent"),
        ],
        default_to_scheduled=True,
    )


@pytest.fixture
def parser_factory(fake_engine_factory):
    def _make(config=None, engine=None, script=None):
        return NaturalLanguageParser(
            config=config,
            date_engine=engine or fake_engine_factory(script),
            clock=lambda: REFERENCE,
        )
    return _make


@pytest.fixture
def dateparser_parser(parser_factory):
    return parser_factory(engine=DateparserEngine())
