"""Default message templates and the message catalog.

Templates use `:parameter` for the parameter display name plus the
rule-specific placeholders handled by paramguard.formatters.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

import yaml

from paramguard.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

MESSAGES_PATH_ENV = "PARAMGUARD_MESSAGES_PATH"

DEFAULT_MESSAGES: Mapping[str, str] = MappingProxyType({
    "default": "The :parameter parameter is invalid.",
    "isset": "The :parameter parameter is required",
    "required": "The :parameter parameter should be assigned a value.",
    "numeric": "The :parameter parameter must be a numeric.",
    "digits": "The :parameter parameter must be entirely digit characters.",
    "alpha": "The :parameter parameter may only contain letters.",
    "alpha_num": "The :parameter parameter may only contain letters and numbers.",
    "alpha_dash": "The :parameter parameter may only contain letters, numbers, dashes and underscores.",
    "alpha_space": "The :parameter parameter may only contain letters and whitespace.",
    "alpha_num_space": "The :parameter parameter may only contain letters, numbers and whitespace.",
    "alpha_dash_space": "The :parameter parameter may only contain letters, numbers, dashes, underscores and whitespace.",
    "iso_latin_alpha": "The :parameter parameter may only contain iso-latin letters.",
    "iso_latin_alpha_num": "The :parameter parameter may only contain iso-latin letters and numbers.",
    "iso_latin_alpha_dash": "The :parameter parameter may only contain iso-latin letters, numbers, dashes and underscores.",
    "iso_latin_alpha_space": "The :parameter parameter may only contain iso-latin letters and whitespace.",
    "iso_latin_alpha_num_space": "The :parameter parameter may only contain iso-latin letters, numbers and whitespace.",
    "iso_latin_alpha_dash_space": "The :parameter parameter may only contain iso-latin letters, numbers, dashes, underscores and whitespace.",
    "in": "The :parameter parameter only accept one of the following values: :list.",
    "equal": "The :parameter parameter must be equal to :other.",
    "min": "The :parameter parameter must be at least :min.",
    "max": "The :parameter parameter may not be greater than :max.",
    "min_length": "The :parameter parameter must be at least :min characters.",
    "max_length": "The :parameter parameter may not be greater than :max characters.",
    "between": "The :parameter parameter must be between :min and :max.",
    "between_length": "The :parameter parameter must be between :min and :max characters.",
    "email": "The :parameter parameter must be a valid email address.",
    "regex": "The :parameter parameter format is invalid.",
    "boolean": "The :parameter parameter field must be true or false.",
    "integer": "The :parameter parameter must be an integer.",
    "ip": "The :parameter parameter must be a valid IP address.",
    "ipv4": "The :parameter parameter must be a valid IPv4 address.",
    "ipv6": "The :parameter parameter must be a valid IPv6 address.",
    "url": "The :parameter parameter must be an URL format.",
})


@dataclass(frozen=True)
class MessageCatalog:
    """Immutable table of rule name -> message template.

    Attributes:
        messages: Read-only mapping; always contains a "default" template
        version: Free-form version tag of the catalog contents
    """

    messages: Mapping[str, str] = field(default_factory=lambda: DEFAULT_MESSAGES)
    version: str = "1"

    def __post_init__(self) -> None:
        merged = dict(self.messages)
        merged.setdefault("default", DEFAULT_MESSAGES["default"])
        object.__setattr__(self, "messages", MappingProxyType(merged))

    def template_for(self, rule_name: str) -> str:
        """Return the rule's template, falling back to the default template."""
        return self.messages.get(rule_name, self.messages["default"])

    def with_overrides(
        self, overrides: Mapping[str, str], version: str | None = None
    ) -> MessageCatalog:
        """Return a new catalog with `overrides` layered over these templates."""
        return MessageCatalog(
            messages={**self.messages, **overrides},
            version=version or self.version,
        )

    @classmethod
    def from_yaml(cls, path: Path) -> MessageCatalog:
        """Load template overrides from YAML, layered over the built-in table.

        Expected shape:
            version: "2024-01"
            messages:
              min: "The :parameter must be :min or more."

        Raises:
            ConfigurationError: If the file is unreadable or malformed
        """
        try:
            with Path(path).open() as fh:
                raw = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot load message catalog {path}: {e}") from e

        overrides = (raw.get("messages") or {}) if isinstance(raw, dict) else None
        if not isinstance(overrides, dict):
            raise ConfigurationError(
                f"Message catalog {path} must be a mapping with a 'messages' mapping"
            )

        messages = {str(k): str(v) for k, v in overrides.items()}
        logger.debug("Loaded %d message template(s) from %s", len(messages), path)
        return cls().with_overrides(messages, version=str(raw.get("version", "1")))

    @classmethod
    def from_env(cls) -> MessageCatalog:
        """Create the catalog from environment variables.

        Resolution order:
        1. PARAMGUARD_MESSAGES_PATH env var (YAML file, see from_yaml)
        2. Default: the built-in templates
        """
        path = os.environ.get(MESSAGES_PATH_ENV)
        if path:
            return cls.from_yaml(Path(path))
        return cls()


default_catalog = MessageCatalog()
