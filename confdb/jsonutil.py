"""Helpers over decoded JSON values."""

from __future__ import annotations

import json
from typing import Any, Iterable

from .logger import get_logger

_MISSING = object()


def add_unique_str(array: Any, value: str) -> bool:
    """Append a string to a list unless it is already there; True when appended."""
    if not isinstance(array, list) or not value:
        return False
    if any(isinstance(item, str) and item == value for item in array):
        return False
    array.append(value)
    return True


def get_value_with_keys(root: Any, keys: Iterable[str]) -> Any:
    """Follow a path of object keys from the root; KeyError if the path breaks."""
    current = root
    for key in keys:
        if not isinstance(current, dict) or key not in current:
            raise KeyError(key)
        current = current[key]
    return current


def log_diff_value(a: Any, b: Any) -> bool:
    """Log the top-level entries of a that differ in b; True when any differ."""
    if a == b or not isinstance(a, dict):
        return False
    logger = get_logger()
    other = b if isinstance(b, dict) else {}
    different = False
    for name, value in a.items():
        counterpart = other.get(name, _MISSING)
        if counterpart is _MISSING or counterpart != value:
            different = True
            logger.verbose(
                "\nA = (%s)\n\nB = (%s)",
                json.dumps(value, indent=4),
                "null" if counterpart is _MISSING else json.dumps(counterpart, indent=4),
            )
    if different:
        logger.debug("Two json objects are different")
    return different