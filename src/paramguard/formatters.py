"""Message formatters for paramguard.

A formatter rewrites the rule-specific placeholders of a message template
once `:parameter` has been substituted:
- in: `:list`
- equal: `:other`
- min, min_length: `:min`
- max, max_length: `:max`
- between, between_length: `:min` and `:max`

Substitution is plain string replacement of every occurrence.
"""

from collections.abc import Callable, Mapping
from typing import Any

from paramguard.exceptions import ConfigurationError
from paramguard.helpers import as_text, describe_value, range_bounds, split_to_list
from paramguard.types import Formatter


def _literal(argument: Any) -> str:
    text = as_text(argument)
    return text if text is not None else describe_value(argument)


class FormatterRegistry:
    """Registry of message formatters keyed by rule name.

    Rules without a formatter keep their template unchanged.
    """

    def __init__(self, formatters: Mapping[str, Formatter] | None = None):
        self._formatters: dict[str, Formatter] = dict(formatters or {})
        self._frozen = False

    def register(self, name: str, formatter: Formatter) -> None:
        if self._frozen:
            raise ConfigurationError(
                f"Cannot register formatter '{name}': the registry is frozen. "
                "Use extend() to build a new registry."
            )
        if not callable(formatter):
            raise ConfigurationError(f"Formatter for rule '{name}' must be callable")
        self._formatters[name] = formatter

    def formatter(self, name: str) -> Callable[[Formatter], Formatter]:
        """Decorator form of register()."""

        def decorator(formatter: Formatter) -> Formatter:
            self.register(name, formatter)
            return formatter

        return decorator

    def get(self, name: str) -> Formatter | None:
        return self._formatters.get(name)

    def is_registered(self, name: str) -> bool:
        return name in self._formatters

    def list_registered(self) -> list[str]:
        return sorted(self._formatters)

    def format(self, name: str, argument: Any, template: str) -> str:
        """Rewrite the placeholders of `template` for rule `name`."""
        formatter = self._formatters.get(name)
        if formatter is None:
            return template
        return formatter(argument, template)

    def freeze(self) -> "FormatterRegistry":
        frozen = FormatterRegistry(self._formatters)
        frozen._frozen = True
        return frozen

    def extend(self, formatters: Mapping[str, Formatter]) -> "FormatterRegistry":
        extended = FormatterRegistry(self._formatters)
        for name, formatter in formatters.items():
            extended.register(name, formatter)
        return extended


# =============================================================================
# Built-in Formatters
# =============================================================================


def format_list(argument: Any, template: str) -> str:
    """Replace `:list` with "a, b and c" (two or fewer items: "a, b")."""
    elements = [describe_value(item) for item in split_to_list(argument)]
    if len(elements) > 2:
        stringified = ", ".join(elements[:-1]) + " and " + elements[-1]
    else:
        stringified = ", ".join(elements)
    return template.replace(":list", stringified)


def format_other(argument: Any, template: str) -> str:
    return template.replace(":other", _literal(argument))


def format_min(argument: Any, template: str) -> str:
    return template.replace(":min", _literal(argument))


def format_max(argument: Any, template: str) -> str:
    return template.replace(":max", _literal(argument))


def format_range(argument: Any, template: str) -> str:
    """Replace `:min` and `:max` with the lowest and highest range items."""
    bounds = range_bounds(argument)
    if bounds is None:
        return template
    low, high = bounds
    return template.replace(":min", _literal(low)).replace(":max", _literal(high))


BUILTIN_FORMATTERS: dict[str, Formatter] = {
    "in": format_list,
    "equal": format_other,
    "min": format_min,
    "min_length": format_min,
    "max": format_max,
    "max_length": format_max,
    "between": format_range,
    "between_length": format_range,
}

default_formatters = FormatterRegistry(BUILTIN_FORMATTERS).freeze()
