"""Validation engine for paramguard.

Evaluates a rule specification against a flat parameter mapping and raises
on the first violation:
1. Fields are visited in declaration order
2. A field with `nullable: true` and a None/missing value is skipped
3. Rules run in declaration order; `callback` rules are invoked directly
4. The first failing rule raises InvalidRequestError with a rendered message

Unknown rules and non-callable callbacks raise ConfigurationError.
"""

import logging
from collections.abc import Mapping
from typing import Any

from paramguard.exceptions import ConfigurationError, InvalidRequestError
from paramguard.formatters import FormatterRegistry, default_formatters
from paramguard.helpers import describe_value
from paramguard.messages import MessageCatalog, default_catalog
from paramguard.rules import RuleRegistry, default_rules
from paramguard.types import (
    CALLBACK,
    NULLABLE,
    AliasMap,
    AliasSource,
    MessageOverrides,
    ParameterSource,
    RuleSpec,
)

logger = logging.getLogger(__name__)


class ValidationEngine:
    """Fail-fast evaluator of rule specifications.

    The engine holds no per-call state; one instance can serve concurrent
    callers as long as its registries are not mutated.

    Example:
        engine = ValidationEngine()
        engine.validate(
            {"amount": 5},
            {"amount": {"required": True, "min": 10}},
        )
        # InvalidRequestError: The amount parameter must be at least 10.
    """

    def __init__(
        self,
        rules: RuleRegistry | None = None,
        formatters: FormatterRegistry | None = None,
        catalog: MessageCatalog | None = None,
        aliases: AliasMap | None = None,
    ):
        """Initialize the engine.

        Args:
            rules: Rule predicates (default: built-in rules)
            formatters: Message formatters (default: built-in formatters)
            catalog: Default message templates
            aliases: Default parameter key -> display name
        """
        self.rules = rules if rules is not None else default_rules
        self.formatters = formatters if formatters is not None else default_formatters
        self.catalog = catalog or default_catalog
        self.aliases: AliasMap = dict(aliases or {})

    def validate(
        self,
        data: Mapping[str, Any],
        rule_spec: RuleSpec,
        messages: MessageOverrides | None = None,
        aliases: AliasMap | None = None,
    ) -> None:
        """Validate `data` against `rule_spec`.

        Args:
            data: Parameters keyed by name
            rule_spec: Parameter key -> ordered mapping of rule name -> argument
            messages: Custom templates, parameter key -> rule name -> template
            aliases: Display names, merged over the engine's default aliases

        Raises:
            InvalidRequestError: On the first rule that fails
            ConfigurationError: On an unknown rule or a non-callable callback
        """
        messages = messages or {}
        display_names = {**self.aliases, **(aliases or {})}

        for key, rules in rule_spec.items():
            value = data.get(key)

            if rules.get(NULLABLE) and value is None:
                logger.debug("Skipping nullable parameter '%s'", key)
                continue

            parameter = display_names.get(key, key)

            for rule_name, argument in rules.items():
                if rule_name == NULLABLE:
                    continue

                if rule_name == CALLBACK:
                    self._run_callback(key, value, argument)
                    continue

                if not self._check(key, rule_name, value, argument):
                    custom = (messages.get(key) or {}).get(rule_name)
                    message = self.format_message(parameter, rule_name, argument, custom)
                    logger.debug("Parameter '%s' failed rule '%s'", key, rule_name)
                    raise InvalidRequestError(message, field=key, rule=rule_name)

    def validate_source(
        self,
        source: ParameterSource,
        rule_spec: RuleSpec,
        messages: MessageOverrides | None = None,
        aliases: AliasMap | None = None,
    ) -> None:
        """Validate the parameters of an object exposing get_parameters().

        If the source also exposes get_parametric_converter(), its mapping
        supplies default display names; `aliases` entries take precedence.
        """
        source_aliases: AliasMap = {}
        if isinstance(source, AliasSource):
            converter = source.get_parametric_converter()
            if isinstance(converter, Mapping):
                source_aliases = converter

        self.validate(
            source.get_parameters(),
            rule_spec,
            messages,
            {**source_aliases, **(aliases or {})},
        )

    def format_message(
        self,
        parameter: str,
        rule_name: str,
        argument: Any,
        template: str | None = None,
    ) -> str:
        """Render the failure message for a rule.

        Uses `template` when given, else the catalog template for the rule,
        else the catalog's default template.
        """
        message = template or self.catalog.template_for(rule_name)
        message = message.replace(":parameter", parameter)
        return self.formatters.format(rule_name, argument, message)

    def _check(self, key: str, rule_name: str, value: Any, argument: Any) -> bool:
        try:
            predicate = self.rules.get(rule_name)
        except KeyError:
            message = (
                f"Call to undefined validator `{rule_name}` on "
                f"{type(self.rules).__name__} for parameter `{key}`"
            )
            logger.error("Invalid rule specification: %s", message)
            raise ConfigurationError(message) from None
        return bool(predicate(value, argument))

    def _run_callback(self, key: str, value: Any, callback: Any) -> None:
        if not callable(callback):
            message = (
                "The reference of rule named `callback` must be a valid callable. "
                f"You provided {describe_value(callback)}."
            )
            logger.error("Invalid rule specification for '%s': %s", key, message)
            raise ConfigurationError(message)
        callback(value, InvalidRequestError)


default_engine = ValidationEngine()


def validate_data_with_rules(
    data: Mapping[str, Any],
    rule_spec: RuleSpec,
    messages: MessageOverrides | None = None,
    aliases: AliasMap | None = None,
) -> None:
    """Validate `data` with the default engine. See ValidationEngine.validate."""
    default_engine.validate(data, rule_spec, messages, aliases)


def validate_with_rules(
    source: ParameterSource,
    rule_spec: RuleSpec,
    messages: MessageOverrides | None = None,
    aliases: AliasMap | None = None,
) -> None:
    """Validate a parameter source with the default engine."""
    default_engine.validate_source(source, rule_spec, messages, aliases)
