"""Rule predicates and the registry that maps rule names to them.

Usage:
    from paramguard.rules import default_rules

    default_rules.get("min")(12, 10)  # True
"""

from paramguard.rules.builtins import BUILTIN_RULES, register_builtin_rules
from paramguard.rules.registry import RuleRegistry


def build_default_rules() -> RuleRegistry:
    """Create the frozen registry holding every built-in rule."""
    registry = RuleRegistry()
    register_builtin_rules(registry)
    return registry.freeze()


default_rules = build_default_rules()

__all__ = [
    "BUILTIN_RULES",
    "RuleRegistry",
    "build_default_rules",
    "default_rules",
    "register_builtin_rules",
]
