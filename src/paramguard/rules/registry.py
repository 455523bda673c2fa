"""Rule registry for paramguard.

Maps rule names (as written in a rule specification) to predicates of the
form predicate(value, argument) -> bool.
"""

from collections.abc import Callable, Mapping

from paramguard.exceptions import ConfigurationError
from paramguard.types import RESERVED_RULES, Predicate


class RuleRegistry:
    """Registry of named rule predicates.

    Rules must be registered before a rule specification can reference them.
    The built-in rules live in the frozen `default_rules` registry; callers
    that need extra rules build a new registry with `extend`.

    Example:
        rules = default_rules.extend({"even": lambda value, arg: value % 2 == 0})
        rules.get("even")(4, True)  # True
    """

    def __init__(self, predicates: Mapping[str, Predicate] | None = None):
        self._predicates: dict[str, Predicate] = {}
        self._frozen = False
        for name, predicate in (predicates or {}).items():
            self.register(name, predicate)

    def register(self, name: str, predicate: Predicate) -> None:
        """Register a predicate under a rule name.

        Raises:
            ConfigurationError: If the registry is frozen, the name is
                reserved, or the predicate is not callable
        """
        if self._frozen:
            raise ConfigurationError(
                f"Cannot register rule '{name}': the registry is frozen. "
                "Use extend() to build a new registry."
            )
        if name in RESERVED_RULES:
            raise ConfigurationError(f"Rule name '{name}' is reserved")
        if not callable(predicate):
            raise ConfigurationError(f"Predicate for rule '{name}' must be callable")
        self._predicates[name] = predicate

    def rule(self, name: str) -> Callable[[Predicate], Predicate]:
        """Decorator form of register()."""

        def decorator(predicate: Predicate) -> Predicate:
            self.register(name, predicate)
            return predicate

        return decorator

    def get(self, name: str) -> Predicate:
        """Get a predicate by rule name.

        Raises:
            KeyError: If no predicate is registered under the name
        """
        return self._predicates[name]

    def is_registered(self, name: str) -> bool:
        return name in self._predicates

    def list_registered(self) -> list[str]:
        """List all registered rule names."""
        return sorted(self._predicates)

    def freeze(self) -> "RuleRegistry":
        """Return a read-only copy of this registry."""
        frozen = RuleRegistry(self._predicates)
        frozen._frozen = True
        return frozen

    def extend(self, predicates: Mapping[str, Predicate]) -> "RuleRegistry":
        """Return a new (unfrozen) registry with additional predicates."""
        extended = RuleRegistry(self._predicates)
        for name, predicate in predicates.items():
            extended.register(name, predicate)
        return extended

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, name: object) -> bool:
        return name in self._predicates

    def __len__(self) -> int:
        return len(self._predicates)
