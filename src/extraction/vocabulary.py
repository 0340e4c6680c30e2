from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from tasknotes_nlp.models import VocabularyEntry
from extraction.working_text import remove_first

Rule = Tuple[re.Pattern, str]

FALLBACK_PRIORITIES: List[Rule] = [
    (re.compile(r"\b(urgent|critical|highest|emergency)\b", re.IGNORECASE), "urgent"),
    (re.compile(r"\b(high|important|high priority)\b", re.IGNORECASE), "high"),
    (re.compile(r"\b(medium|normal|medium priority)\b", re.IGNORECASE), "normal"),
    (re.compile(r"\b(low|low priority|minor)\b", re.IGNORECASE), "low"),
]

FALLBACK_STATUSES: List[Rule] = [
    (re.compile(r"\b(todo|to do|open)\b", re.IGNORECASE), "open"),
    (re.compile(r"\b(in progress|in-progress|working|started|doing)\b", re.IGNORECASE), "in-progress"),
    (re.compile(r"\b(done|completed|finished)\b", re.IGNORECASE), "done"),
    (re.compile(r"\b(cancelled|canceled|dropped)\b", re.IGNORECASE), "cancelled"),
    (re.compile(r"\b(waiting|blocked|on hold)\b", re.IGNORECASE), "waiting"),
]


def whole_word(phrase: str) -> re.Pattern:
    # lookarounds instead of \b so labels like "!!" or "P1+" still work
    return re.compile(rf"(?<!\w){re.escape(phrase)}(?!\w)", re.IGNORECASE)


class VocabularyMatcher:
    """Maps text to the first configured vocabulary value found in it.

    Each entry contributes two rules, its value then its label; entries are
    tried in list order. With no entries the fallback rules are used.
    """

    def __init__(self, entries: Sequence[VocabularyEntry], fallback: Sequence[Rule]):
        rules: List[Rule] = []
        for entry in entries:
            for phrase in (entry.value, entry.label):
                if phrase and phrase.strip():
                    rules.append((whole_word(phrase.strip()), entry.value))
        self.rules = rules or list(fallback)

    def extract(self, text: str) -> Tuple[Optional[str], str]:
        for pattern, value in self.rules:
            if pattern.search(text):
                return value, remove_first(pattern, text)
        return None, text
