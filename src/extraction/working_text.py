import re

_WHITESPACE = re.compile(r"\s+")


def collapse(text: str) -> str:
    """Squeeze whitespace runs left behind by a strip into single spaces."""
    return _WHITESPACE.sub(" ", text).strip()


def cut(text: str, start: int, stop: int) -> str:
    return collapse(text[:start] + " " + text[stop:])


def remove_first(pattern: re.Pattern, text: str) -> str:
    return collapse(pattern.sub(" ", text, count=1))
