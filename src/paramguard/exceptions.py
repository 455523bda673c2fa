"""Error kinds raised by the paramguard engine.

Two disjoint kinds exist:
- InvalidRequestError: the data failed a rule (user-facing message)
- ConfigurationError: the rule specification itself is wrong (a bug)
"""


class ParamGuardError(Exception):
    """Base class for all paramguard errors."""
    pass


class InvalidRequestError(ParamGuardError):
    """A parameter failed validation.

    Attributes:
        message: Fully rendered, human-readable message
        field: Parameter key that failed, or None when raised by a callback
        rule: Rule name that failed, or None when raised by a callback
    """

    def __init__(self, message: str, field: str | None = None, rule: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.rule = rule


class ConfigurationError(ParamGuardError):
    """The rule specification is invalid (unknown rule, bad callback, etc.)."""
    pass
