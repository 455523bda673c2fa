"""
schema.py - lint rule set YAML files.

Checks a rule set file in three passes:
1. YAML parsing
2. JSON Schema validation against schemas/ruleset.schema.json
3. Every rule name is registered (reserved names excepted)

Usage:
    from paramguard.schema import validate_ruleset_file

    for issue in validate_ruleset_file(Path("rules/purchase.yaml")):
        print(issue)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from paramguard.rules import RuleRegistry, default_rules
from paramguard.types import RESERVED_RULES

logger = logging.getLogger(__name__)

_SCHEMAS_DIR = Path(__file__).parent / "schemas"
RULESET_SCHEMA = "ruleset.schema.json"


Severity = Literal["error", "warning"]


@dataclass(frozen=True)
class ValidationIssue:
    """One lint finding, located by a slash path such as "rules/amount/min"."""

    file: Path
    message: str
    path: str = ""
    severity: Severity = "error"

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    def __str__(self) -> str:
        where = f"{self.file} at {self.path}" if self.path else str(self.file)
        return f"[{self.severity.upper()}] {where}: {self.message}"


@lru_cache(maxsize=None)
def _load_schema(name: str) -> dict[str, Any]:
    with (_SCHEMAS_DIR / name).open() as fh:
        return json.load(fh)


def _location(error: ValidationError) -> str:
    # list items (e.g. `in: [USD, EUR]`) render as "rules/currency/in[1]"
    location = ""
    for part in error.absolute_path:
        if isinstance(part, int):
            location += f"[{part}]"
        else:
            location += f"/{part}" if location else str(part)
    return location


def validate_ruleset_document(
    doc: Any,
    file: Path,
    rules: RuleRegistry | None = None,
) -> list[ValidationIssue]:
    """Validate an already-parsed rule set document."""
    if rules is None:
        rules = default_rules
    validator = Draft202012Validator(_load_schema(RULESET_SCHEMA))

    issues = [
        ValidationIssue(file=file, message=error.message, path=_location(error))
        for error in sorted(validator.iter_errors(doc), key=lambda e: [str(p) for p in e.path])
    ]
    if issues or not isinstance(doc, dict):
        return issues

    for key, field_rules in doc["rules"].items():
        for rule_name in field_rules:
            if rule_name in RESERVED_RULES or rule_name in rules:
                continue
            issues.append(
                ValidationIssue(
                    file=file,
                    message=f"Unknown rule '{rule_name}'",
                    path=f"rules/{key}/{rule_name}",
                )
            )

    for key in doc.get("messages") or {}:
        if key not in doc["rules"]:
            issues.append(
                ValidationIssue(
                    file=file,
                    message=f"Messages declared for parameter '{key}' which has no rules",
                    path=f"messages/{key}",
                    severity="warning",
                )
            )

    return issues


def validate_ruleset_file(
    path: Path,
    rules: RuleRegistry | None = None,
) -> list[ValidationIssue]:
    """
    Validate a rule set YAML file.

    Args:
        path:  Path to the YAML file.
        rules: Registry used to resolve rule names (default: built-in rules).

    Returns:
        A list of :class:`ValidationIssue` objects (empty on success).
    """
    try:
        with Path(path).open() as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [ValidationIssue(file=path, message=f"YAML parse error: {exc}")]

    if raw is None:
        return [ValidationIssue(file=path, message="File is empty or contains only whitespace")]

    issues = validate_ruleset_document(raw, path, rules)
    logger.debug("Linted %s: %d issue(s)", path, len(issues))
    return issues
