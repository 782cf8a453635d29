"""
import_engine.validators - Field rules shared by imports and the JSON API.

Each rule takes a raw cell (or JSON) value plus the column label used in
messages, and either returns the normalised value or raises FieldError.
Rules never touch the database.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Callable

SLUG_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

# largest value a signed 64-bit INTEGER column holds
MAX_INTEGER = 2**63 - 1

Rule = Callable[[Any, str], Any]


class FieldError(ValueError):
    """One field failed its rule; the message is user-facing."""
    pass


def _is_number(value: Any) -> bool:
    # bool is an int subclass but a TRUE cell is not a salary
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def non_empty_string(value: Any, label: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise FieldError(f"{label} must be a non-empty string")


def non_negative_number(value: Any, label: str) -> float:
    """
    Accept a number >= 0, or a string holding one.  A value that is
    neither a number nor a string gets the shorter "valid number" message.
    """
    bad = f"{label} must be a valid non-negative number"
    if _is_number(value):
        try:
            parsed = float(value)
        except OverflowError:
            raise FieldError(bad) from None
    elif isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            raise FieldError(bad) from None
    else:
        raise FieldError(f"{label} must be a valid number")

    if not math.isfinite(parsed) or parsed < 0:
        raise FieldError(bad)
    return parsed


def non_negative_integer(value: Any, label: str) -> int:
    """Integer counterpart of non_negative_number; 5.0 counts as 5."""
    bad = f"{label} must be a valid non-negative integer"
    if _is_number(value):
        if isinstance(value, int):
            parsed = value
        elif math.isfinite(value) and float(value).is_integer():
            parsed = int(value)
        else:
            raise FieldError(bad)
    elif isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            raise FieldError(bad) from None
    else:
        raise FieldError(f"{label} must be a valid integer")

    if parsed < 0 or parsed > MAX_INTEGER:
        raise FieldError(bad)
    return parsed


def slug(value: Any, label: str = "Slug") -> str:
    """Non-empty string in lowercase-hyphenated form (API input only)."""
    text = non_empty_string(value, label)
    if not SLUG_RE.match(text):
        raise FieldError(
            f"{label} must contain only lowercase letters, numbers, and hyphens"
        )
    return text
