import string
from typing import Iterator

ASCII_WHITESPACE = " \t\n\r\x0b\x0c"
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

SEPARATOR = ","
MAX_INPUT_CHARS = 511


def fold_case(s: str) -> str:
    # ASCII only; non-ASCII letters pass through unchanged
    return s.translate(_ASCII_LOWER)


def normalize_keyword(keyword: str) -> str:
    return fold_case(keyword.strip(ASCII_WHITESPACE))


def split_tokens(raw: str) -> Iterator[str]:
    """Yield trimmed, non-empty comma-delimited tokens in input order.

    Case is left as supplied; folding happens at lookup time.
    """
    for segment in raw.split(SEPARATOR):
        token = segment.strip(ASCII_WHITESPACE)
        if token:
            yield token


def truncate_input(raw: str, limit: int = MAX_INPUT_CHARS) -> str:
    """Cut raw to limit characters. A limit of 0 means no limit."""
    if limit < 0:
        raise ValueError(f"Input limit must be 0 or more, got {limit}")
    if limit == 0 or len(raw) <= limit:
        return raw
    return raw[:limit]
