"""Load rule sets declared in YAML files.

A rule set file looks like:

    name: purchase
    rules:
      amount:
        required: true
        between: 1, 5000
      currency:
        in: [USD, EUR, GBP]
    messages:
      amount:
        between: "Amounts must be between :min and :max."
    aliases:
      amount: purchase amount

`callback` rules are code and cannot be declared in files.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from paramguard.engine import ValidationEngine, default_engine
from paramguard.exceptions import ConfigurationError
from paramguard.types import CALLBACK


@dataclass(frozen=True)
class RuleSet:
    """A named rule specification with its messages and aliases."""

    rules: dict[str, dict[str, Any]]
    messages: dict[str, dict[str, str]] = field(default_factory=dict)
    aliases: dict[str, str] = field(default_factory=dict)
    name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RuleSet:
        """Create a RuleSet from a parsed YAML/JSON mapping.

        Raises:
            ConfigurationError: If the mapping is malformed
        """
        rules = data.get("rules")
        if not isinstance(rules, Mapping):
            raise ConfigurationError("Rule set requires a 'rules' mapping")

        parsed_rules: dict[str, dict[str, Any]] = {}
        for key, field_rules in rules.items():
            if not isinstance(field_rules, Mapping):
                raise ConfigurationError(f"Rules for parameter '{key}' must be a mapping")
            if CALLBACK in field_rules:
                raise ConfigurationError(
                    f"Parameter '{key}': `callback` rules cannot be declared in a rule set file"
                )
            parsed_rules[str(key)] = dict(field_rules)

        messages = data.get("messages") or {}
        aliases = data.get("aliases") or {}
        if not isinstance(messages, Mapping) or not all(
            isinstance(templates, Mapping) for templates in messages.values()
        ):
            raise ConfigurationError("Rule set 'messages' must map parameters to rule templates")
        if not isinstance(aliases, Mapping):
            raise ConfigurationError("Rule set 'aliases' must be a mapping")

        return cls(
            rules=parsed_rules,
            messages={
                str(k): {str(r): str(t) for r, t in v.items()}
                for k, v in messages.items()
            },
            aliases={str(k): str(v) for k, v in aliases.items()},
            name=str(data.get("name", "")),
        )

    def validate(
        self,
        data: Mapping[str, Any],
        engine: ValidationEngine | None = None,
    ) -> None:
        """Validate `data` against this rule set (fail-fast)."""
        engine = engine or default_engine
        engine.validate(data, self.rules, self.messages, self.aliases)


def load_ruleset(path: Path) -> RuleSet:
    """Load a RuleSet from a YAML file.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        with Path(path).open() as fh:
            raw = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot load rule set {path}: {e}") from e

    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"Rule set {path} must contain a mapping")

    ruleset = RuleSet.from_dict(raw)
    if not ruleset.name:
        ruleset = replace(ruleset, name=Path(path).stem)
    return ruleset
