"""Built-in rules for paramguard.

Every rule is a pure predicate(value, argument) -> bool. Flag-style rules
(isset, required, numeric, email, ...) take a boolean argument that switches
the rule on; a falsy argument disables the rule and it always passes.

Rules:
- Presence: isset, required
- Type/format: numeric, digits, integer, boolean, email, ip, ipv4, ipv6, url
- Character classes: alpha*, iso_latin_alpha*
- Comparison: in, equal, min, max, between
- Length: min_length, max_length, between_length
- Pattern: regex
"""

import re
from decimal import Decimal
from typing import Any

from paramguard.exceptions import ConfigurationError
from paramguard.helpers import (
    as_text,
    is_numeric,
    range_bounds,
    split_to_list,
    to_number,
)
from paramguard.rules.patterns import (
    DIGITS_PATTERN,
    ISO_LATIN_PATTERNS,
    consists_of,
    is_email,
    is_ip,
    is_url,
)
from paramguard.rules.registry import RuleRegistry
from paramguard.types import Predicate


def register_builtin_rules(registry: RuleRegistry) -> None:
    """Register all built-in rules with the given registry."""
    for name, predicate in BUILTIN_RULES.items():
        registry.register(name, predicate)


# -----------------------------------------------------------------------------
# Presence
# -----------------------------------------------------------------------------


def _isset(value: Any, active: Any) -> bool:
    return not active or value is not None


def _required(value: Any, active: Any) -> bool:
    if not active:
        return True
    if value is None:
        return False
    if isinstance(value, str) and value.strip() == "":
        return False
    return True


# -----------------------------------------------------------------------------
# Type / Format
# -----------------------------------------------------------------------------


def _numeric(value: Any, active: Any) -> bool:
    return not active or is_numeric(value)


def _digits(value: Any, active: Any) -> bool:
    if not active:
        return True
    text = as_text(value)
    return text is not None and DIGITS_PATTERN.fullmatch(text) is not None


_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INTEGER_SYNTAX = re.compile(r"[+-]?(?:0|[1-9][0-9]*)")


def _integer(value: Any, active: Any) -> bool:
    """Integers, integral floats and canonical integer strings within int64."""
    if not active:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return _INT64_MIN <= value <= _INT64_MAX
    if isinstance(value, float):
        return value.is_integer() and _INT64_MIN <= int(value) <= _INT64_MAX
    if isinstance(value, Decimal):
        if not value.is_finite() or value != value.to_integral_value():
            return False
        return _INT64_MIN <= int(value) <= _INT64_MAX
    if isinstance(value, str):
        text = value.strip()
        if not _INTEGER_SYNTAX.fullmatch(text):
            return False
        return _INT64_MIN <= int(text) <= _INT64_MAX
    return False


def _boolean(value: Any, active: Any) -> bool:
    """Strictly one of True, False, 0, 1, "0", "1"."""
    if not active:
        return True
    if isinstance(value, bool):
        return True
    if type(value) is int:
        return value in (0, 1)
    return isinstance(value, str) and value in ("0", "1")


def _email(value: Any, active: Any) -> bool:
    return not active or (isinstance(value, str) and is_email(value))


def _ip_rule(version: int | None) -> Predicate:
    def check(value: Any, active: Any) -> bool:
        return not active or (isinstance(value, str) and is_ip(value, version))

    return check


def _url(value: Any, active: Any) -> bool:
    return not active or (isinstance(value, str) and is_url(value))


# -----------------------------------------------------------------------------
# Character Classes
# -----------------------------------------------------------------------------


def _alpha_rule(strings_only: bool, **classes: bool) -> Predicate:
    """Unicode letters and marks, plus the classes switched on."""

    def check(value: Any, active: Any) -> bool:
        if not active:
            return True
        text = value if isinstance(value, str) else None
        if not strings_only:
            text = as_text(value)
        return text is not None and consists_of(text, **classes)

    return check


def _iso_latin_rule(variant: str, strings_only: bool) -> Predicate:
    pattern = ISO_LATIN_PATTERNS[variant]

    def check(value: Any, active: Any) -> bool:
        if not active:
            return True
        text = value if isinstance(value, str) else None
        if not strings_only:
            text = as_text(value)
        return text is not None and pattern.fullmatch(text) is not None

    return check


# -----------------------------------------------------------------------------
# Comparison
# -----------------------------------------------------------------------------


def _in(value: Any, argument: Any) -> bool:
    """Membership with strict (type and value) equality."""
    return any(
        type(item) is type(value) and item == value
        for item in split_to_list(argument)
    )


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


def _loosely_equal(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return _truthy(left) == _truthy(right)
    if left is None or right is None:
        other = right if left is None else left
        if isinstance(other, str):
            return other == ""
        return other is None or other == 0
    if is_numeric(left) and is_numeric(right):
        return to_number(left) == to_number(right)

    left_text, right_text = as_text(left), as_text(right)
    if left_text is not None and right_text is not None:
        return left_text == right_text
    return left == right


def _equal(value: Any, argument: Any) -> bool:
    return _loosely_equal(value, argument)


def _compare_number(value: Any, bound: Any, *, minimum: bool) -> bool:
    if not is_numeric(value) or not is_numeric(bound):
        return False
    if minimum:
        return to_number(value) >= to_number(bound)
    return to_number(value) <= to_number(bound)


def _min(value: Any, argument: Any) -> bool:
    return _compare_number(value, argument, minimum=True)


def _max(value: Any, argument: Any) -> bool:
    return _compare_number(value, argument, minimum=False)


def _between(value: Any, argument: Any) -> bool:
    bounds = range_bounds(argument)
    if bounds is None:
        return False
    low, high = bounds
    return _compare_number(value, low, minimum=True) and _compare_number(
        value, high, minimum=False
    )


# -----------------------------------------------------------------------------
# Length
# -----------------------------------------------------------------------------


def _length(value: Any) -> int | None:
    text = as_text(value)
    return None if text is None else len(text)


def _min_length(value: Any, argument: Any) -> bool:
    length = _length(value)
    return length is not None and _compare_number(length, argument, minimum=True)


def _max_length(value: Any, argument: Any) -> bool:
    length = _length(value)
    return length is not None and _compare_number(length, argument, minimum=False)


def _between_length(value: Any, argument: Any) -> bool:
    bounds = range_bounds(argument)
    length = _length(value)
    if bounds is None or length is None:
        return False
    low, high = bounds
    return _compare_number(length, low, minimum=True) and _compare_number(
        length, high, minimum=False
    )


# -----------------------------------------------------------------------------
# Pattern
# -----------------------------------------------------------------------------


def _regex(value: Any, argument: Any) -> bool:
    """Search the string-or-numeric value for the pattern (str or compiled)."""
    text = as_text(value)
    if text is None:
        return False
    try:
        return re.search(argument, text) is not None
    except (re.error, TypeError) as e:
        raise ConfigurationError(f"Invalid pattern for rule `regex`: {argument!r} ({e})") from e


BUILTIN_RULES: dict[str, Predicate] = {
    "isset": _isset,
    "required": _required,
    "numeric": _numeric,
    "digits": _digits,
    "alpha": _alpha_rule(True),
    "alpha_num": _alpha_rule(False, numbers=True),
    "alpha_dash": _alpha_rule(False, numbers=True, dashes=True),
    "alpha_space": _alpha_rule(True, spaces=True),
    "alpha_num_space": _alpha_rule(False, numbers=True, spaces=True),
    "alpha_dash_space": _alpha_rule(False, numbers=True, spaces=True, dashes=True),
    "iso_latin_alpha": _iso_latin_rule("alpha", True),
    "iso_latin_alpha_num": _iso_latin_rule("alpha_num", False),
    "iso_latin_alpha_dash": _iso_latin_rule("alpha_dash", False),
    "iso_latin_alpha_space": _iso_latin_rule("alpha_space", True),
    "iso_latin_alpha_num_space": _iso_latin_rule("alpha_num_space", False),
    "iso_latin_alpha_dash_space": _iso_latin_rule("alpha_dash_space", False),
    "in": _in,
    "equal": _equal,
    "min": _min,
    "max": _max,
    "min_length": _min_length,
    "max_length": _max_length,
    "between": _between,
    "between_length": _between_length,
    "email": _email,
    "boolean": _boolean,
    "integer": _integer,
    "ip": _ip_rule(None),
    "ipv4": _ip_rule(4),
    "ipv6": _ip_rule(6),
    "url": _url,
    "regex": _regex,
}
