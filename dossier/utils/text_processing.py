"""
Text processing utilities for loosely-typed content.

These helpers never raise on unexpected shapes: anything that cannot be read
as text degrades to an empty string, and anything that cannot be read as a
list degrades to an empty list.
"""

import re
from typing import Any, Iterable, List, Mapping, Optional

WHITESPACE_RUN = re.compile(r"\s+")


def collapse_whitespace(value: Any) -> str:
    """
    Collapse any run of whitespace to a single space and trim the ends.

    Non-string scalars (numbers, booleans) are stringified first; None and
    containers become the empty string.

    Example:
        >>> collapse_whitespace("  Hi   there \\n ")
        'Hi there'
        >>> collapse_whitespace(2024)
        '2024'
    """
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return ""
    return WHITESPACE_RUN.sub(" ", str(value)).strip()


def coerce_list(value: Any) -> List[Any]:
    """
    Coerce a scalar-or-sequence field into a list.

    - None → []
    - list/tuple → list copy
    - anything else → [value]
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def clean_string_list(value: Any) -> List[str]:
    """Coerce to a list of whitespace-normalized strings, dropping empties."""
    cleaned = (collapse_whitespace(item) for item in coerce_list(value))
    return [item for item in cleaned if item]


def first_present(record: Mapping[str, Any], keys: Iterable[str]) -> Optional[Any]:
    """
    Return the first value under `keys` that is non-empty.

    A value is empty when it is None, a whitespace-only string, or an empty
    list. Used to reconcile historically different field names for one concept.

    Example:
        >>> first_present({"institution": "MIT", "school": ""}, ["school", "institution"])
        'MIT'
    """
    if not isinstance(record, Mapping):
        return None
    for key in keys:
        value = record.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        if isinstance(value, (list, tuple, dict)) and len(value) == 0:
            continue
        return value
    return None


def casefold_key(value: Any) -> str:
    """Case-insensitive, whitespace-normalized comparison key."""
    return collapse_whitespace(value).casefold()
