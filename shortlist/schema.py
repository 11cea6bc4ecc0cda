from typing import Any, Iterable, List

from .normalize import SEPARATOR, normalize_keyword


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and normalize_keyword(v) != ""


def _is_weight(v: Any) -> bool:
    # bool is an int subclass but never a meaningful weight
    return isinstance(v, int) and not isinstance(v, bool) and v >= 0


def validate_seed_entry(entry: Any) -> List[str]:
    """
    Returns a list of validation error messages for one (keyword, weight) pair.
    Empty list means valid.
    """
    errors: List[str] = []

    if not isinstance(entry, (tuple, list)) or len(entry) != 2:
        return [f"Seed entry must be a (keyword, weight) pair, got {entry!r}"]

    keyword, weight = entry
    if not _is_non_empty_str(keyword):
        errors.append(f"Keyword must be a non-empty string, got {keyword!r}")
    elif SEPARATOR in keyword:
        errors.append(f"Keyword '{keyword}' must not contain '{SEPARATOR}'")

    if not _is_weight(weight):
        errors.append(f"Weight for {keyword!r} must be a non-negative integer, got {weight!r}")

    return errors


def validate_seed(entries: Iterable[Any]) -> List[str]:
    """
    Validate a whole seed, including duplicate keywords after normalization.
    """
    errors: List[str] = []
    seen = {}

    for i, entry in enumerate(entries):
        entry_errors = validate_seed_entry(entry)
        if entry_errors:
            errors.extend(f"Entry {i}: {e}" for e in entry_errors)
            continue
        key = normalize_keyword(entry[0])
        if key in seen:
            errors.append(f"Entry {i}: duplicate keyword '{key}' (first seen at entry {seen[key]})")
        else:
            seen[key] = i

    return errors
