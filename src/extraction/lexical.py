from __future__ import annotations

import re
from typing import List, Tuple

from extraction.working_text import collapse

# nested tags ("#project/backend") keep their slashes
TAG_PATTERN = re.compile(r"#(\w+(?:/\w+)*)")
CONTEXT_PATTERN = re.compile(r"@(\w+)")


def _extract(pattern: re.Pattern, text: str) -> Tuple[List[str], str]:
    found = pattern.findall(text)
    if not found:
        return [], text
    return found, collapse(pattern.sub(" ", text))


def extract_tags(text: str) -> Tuple[List[str], str]:
    return _extract(TAG_PATTERN, text)


def extract_contexts(text: str) -> Tuple[List[str], str]:
    return _extract(CONTEXT_PATTERN, text)
