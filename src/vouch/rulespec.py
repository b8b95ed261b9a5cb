"""Per-field rule specs.

A field is described either by a bare chain or by a chain plus message
overrides::

    rules = {
        "username": chain(not_empty(), length(3, 20)),
        "email": WithOverrides(
            chain(not_empty(), email()),
            messages={"email": "That address looks wrong"},
        ),
        "password": WithOverrides(chain(length(8)), message="Too short"),
    }

Both shapes are normalized to ``Direct | WithOverrides`` by
``as_rule_spec``, which also accepts the mapping form
``{"rules": ..., "message": ..., "messages": ...}``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from vouch.errors import ConfigurationError
from vouch.rules import Chain


@dataclass(frozen=True, slots=True)
class Direct:
    """A chain with no message overrides."""

    chain: Chain

    def __post_init__(self) -> None:
        _require_chain(self.chain)


@dataclass(frozen=True, slots=True)
class WithOverrides:
    """A chain with a single replacement message and/or per-rule messages.

    ``message`` short-circuits resolution: when set and the chain fails,
    the field's errors are exactly ``[message]``. ``messages`` maps rule
    names to templates and has the highest priority in the cascade.
    """

    chain: Chain | None
    message: str | None = None
    messages: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _require_chain(self.chain)
        if self.message is not None and not isinstance(self.message, str):
            msg = f"Override message must be a string, got {type(self.message).__name__}"
            raise ConfigurationError(msg)
        if not isinstance(self.messages, Mapping):
            msg = f"Override messages must be a mapping, got {type(self.messages).__name__}"
            raise ConfigurationError(msg)
        for rule, text in self.messages.items():
            if not isinstance(text, str):
                msg = f"Override message for rule {rule!r} must be a string, got {type(text).__name__}"
                raise ConfigurationError(msg)
        object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))


type RuleSpec = Direct | WithOverrides


def _require_chain(chain: Any) -> None:
    if chain is None:
        msg = "Rule spec needs an assertion chain, got nothing"
        raise ConfigurationError(msg)
    if not isinstance(chain, Chain):
        msg = f"Rule spec needs an assertion chain, got {type(chain).__name__}"
        raise ConfigurationError(msg)


def as_rule_spec(value: Any) -> RuleSpec:
    """Normalize a chain, a spec, or a ``{"rules": ...}`` mapping.

    Raises:
        ConfigurationError: If no chain can be found.
    """
    match value:
        case Direct() | WithOverrides():
            return value
        case Chain():
            return Direct(value)
        case Mapping():
            return WithOverrides(
                value.get("rules"),
                message=value.get("message"),
                messages=value.get("messages") or {},
            )
        case None:
            msg = "Rule spec needs an assertion chain, got nothing"
            raise ConfigurationError(msg)
        case _:
            msg = f"Rule spec needs an assertion chain, got {type(value).__name__}"
            raise ConfigurationError(msg)
