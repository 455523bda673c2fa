"""Core types for the paramguard validation engine.

A rule specification maps each parameter key to an ordered mapping of
rule name -> rule argument. Dicts preserve insertion order, which is the
order rules are evaluated in.

Two rule names are reserved and never dispatched to the rule registry:
- nullable: skip every rule of the field when its value is None
- callback: a callable invoked as callback(value, InvalidRequestError)
"""

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

# (value, argument) -> passed
Predicate = Callable[[Any, Any], bool]

# (argument, template) -> template
Formatter = Callable[[Any, str], str]

RuleSpec = Mapping[str, Mapping[str, Any]]
MessageOverrides = Mapping[str, Mapping[str, str]]
AliasMap = Mapping[str, str]

NULLABLE = "nullable"
CALLBACK = "callback"
RESERVED_RULES = frozenset({NULLABLE, CALLBACK})


@runtime_checkable
class ParameterSource(Protocol):
    """Protocol for objects that own a parameter bag (e.g. gateway requests)."""

    def get_parameters(self) -> Mapping[str, Any]:
        """Return the current parameters keyed by name."""
        ...


@runtime_checkable
class AliasSource(Protocol):
    """Optional capability supplying default display names for parameters."""

    def get_parametric_converter(self) -> Mapping[str, str]:
        """Return parameter key -> display name."""
        ...
