"""paramguard: declarative, fail-fast validation of flat parameter maps.

Rules are declared per parameter, evaluated in order, and the first
violation raises InvalidRequestError with a rendered message. Mistakes in
the rule specification itself raise ConfigurationError.

Usage:
    from paramguard import InvalidRequestError, validate_data_with_rules

    try:
        validate_data_with_rules(
            {"amount": 5, "currency": "usd"},
            {
                "amount": {"required": True, "min": 10},
                "currency": {"in": "USD, EUR, GBP"},
            },
        )
    except InvalidRequestError as e:
        print(e.message)  # The amount parameter must be at least 10.
"""

from paramguard.engine import (
    ValidationEngine,
    default_engine,
    validate_data_with_rules,
    validate_with_rules,
)
from paramguard.exceptions import (
    ConfigurationError,
    InvalidRequestError,
    ParamGuardError,
)
from paramguard.formatters import FormatterRegistry, default_formatters
from paramguard.helpers import describe_value, split_to_list
from paramguard.messages import DEFAULT_MESSAGES, MessageCatalog, default_catalog
from paramguard.rules import RuleRegistry, default_rules
from paramguard.ruleset import RuleSet, load_ruleset
from paramguard.types import AliasSource, ParameterSource

__all__ = [
    # Engine
    "ValidationEngine",
    "default_engine",
    "validate_data_with_rules",
    "validate_with_rules",
    # Errors
    "ConfigurationError",
    "InvalidRequestError",
    "ParamGuardError",
    # Registries
    "FormatterRegistry",
    "RuleRegistry",
    "default_formatters",
    "default_rules",
    # Messages
    "DEFAULT_MESSAGES",
    "MessageCatalog",
    "default_catalog",
    # Helpers
    "describe_value",
    "split_to_list",
    # Rule sets
    "RuleSet",
    "load_ruleset",
    # Caller capabilities
    "AliasSource",
    "ParameterSource",
]
