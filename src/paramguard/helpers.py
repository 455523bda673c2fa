"""Argument and value helpers shared by rules, formatters and the engine."""

import re
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

# Numeric strings: optional surrounding whitespace, sign, decimal and exponent.
NUMERIC_PATTERN = re.compile(
    r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$"
)

_INTEGER_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")

_ARGUMENT_SEPARATOR = re.compile(r"\s*,\s*")


def is_numeric(value: Any) -> bool:
    """Return True for numbers and numeric strings. Booleans are not numeric."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float, Decimal)):
        return True
    if isinstance(value, str):
        return NUMERIC_PATTERN.match(value) is not None
    return False


def to_number(value: Any) -> int | float | Decimal:
    """Convert a numeric value (see is_numeric) to a number.

    Raises:
        ValueError: If the value is not numeric
    """
    if not is_numeric(value):
        raise ValueError(f"Not a numeric value: {value!r}")
    if isinstance(value, str):
        if _INTEGER_PATTERN.match(value):
            return int(value)
        return float(value)
    return value


def _number_text(value: int | float | Decimal) -> str:
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return str(value)


def as_text(value: Any) -> str | None:
    """Return the string form of a string-or-numeric value, else None."""
    if isinstance(value, str):
        return value
    if is_numeric(value):
        return _number_text(value)
    return None


def split_to_list(argument: Any) -> Sequence[Any]:
    """Normalize a rule argument into an ordered sequence.

    Lists and tuples are returned unchanged. Strings are split on commas,
    trimming whitespace around each item ("a, b ,c" -> ["a", "b", "c"]).
    A blank string or None yields an empty list; any other scalar becomes
    a one-item list holding the value itself.
    """
    if isinstance(argument, (list, tuple)):
        return argument
    if argument is None:
        return []
    if not isinstance(argument, str):
        return [argument]

    argument = argument.strip()
    if not argument:
        return []
    return _ARGUMENT_SEPARATOR.split(argument)


def describe_value(value: Any) -> str:
    """Render a value as a short token for use inside messages."""
    if value is None:
        return "null value"
    if value is True:
        return "(boolean) true"
    if value is False:
        return "(boolean) false"
    if is_numeric(value):
        return as_text(value)
    return str(value)


def range_bounds(argument: Any) -> tuple[Any, Any] | None:
    """Return the (lowest, highest) items of a split argument.

    Items keep their original form so messages show what the caller wrote.
    Numeric items compare as numbers; otherwise items compare as strings.
    Returns None for an empty argument.
    """
    items = list(split_to_list(argument))
    if not items:
        return None

    if all(is_numeric(item) for item in items):
        key = to_number
    else:
        key = str
    return min(items, key=key), max(items, key=key)
