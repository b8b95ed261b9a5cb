"""Validator configuration.

ValidatorConfig is a frozen dataclass; the session swaps it for a new
instance on every setter call, so a validation pass never sees a
half-applied change.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class ValidatorConfig:
    """Validator configuration. Immutable after creation.

    ::

        config = ValidatorConfig(
            show_validation_rules=True,
            default_messages={"notEmpty": "Please fill in this field"},
        )
    """

    # Keep rule name -> message mappings in the error store instead of
    # plain message lists
    show_validation_rules: bool = False

    # Normalized rule name -> fallback message template
    default_messages: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "default_messages", MappingProxyType(dict(self.default_messages))
        )

    def with_default_messages(self, messages: Mapping[str, str]) -> ValidatorConfig:
        """Return a copy with *messages* as the whole default set."""
        return replace(self, default_messages=messages)

    def with_default_message(self, rule: str, message: str) -> ValidatorConfig:
        """Return a copy with one default message added or replaced."""
        return replace(self, default_messages={**self.default_messages, rule: message})
