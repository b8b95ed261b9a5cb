"""Message resolution for failed chains.

Turns a ``NestedValidationError`` into one final message per failed rule.
Four sources can supply a message for a rule, lowest priority first:

1. The rule's own default template
2. The validator's configured default messages
3. The per-call ``messages`` passed to a validate operation
4. The field's ``WithOverrides.messages``

The cascade is key-wise: a later source replaces a rule's message only
when it supplies one for that rule name, and rules keep the position of
their first appearance. Empty messages are dropped at the end.
"""

from __future__ import annotations

from collections.abc import Mapping

from vouch.failures import NestedValidationError
from vouch.rules import Chain


def resolve_messages(
    failure: NestedValidationError,
    chain: Chain,
    *,
    default_messages: Mapping[str, str] | None = None,
    call_messages: Mapping[str, str] | None = None,
    rule_messages: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Resolve the final rule name -> message mapping for one field.

    Returns an empty dict when nothing failed that the chain declares,
    e.g. a chain without rules.
    """
    names = chain.rule_names()
    if not names:
        return {}
    resolved = failure.find_messages(names)

    for overrides in (default_messages, call_messages, rule_messages):
        if overrides:
            resolved.update(failure.find_messages(overrides))

    return {rule: message for rule, message in resolved.items() if message}
