"""Structured chain failures.

A failed ``Chain.assert_valid`` raises one ``NestedValidationError`` that
carries a ``RuleFailure`` per rejecting rule. Messages are looked up by
canonical rule name through ``find_messages``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from vouch.errors import ConfigurationError, VouchError
from vouch.messages import render_message, stringify


@dataclass(frozen=True, slots=True)
class RuleFailure:
    """One rule that rejected a value.

    Attributes:
        rule: Canonical rule name (``notEmpty``, ``length``, ...).
        template: The rule's default message template.
        params: Template parameters, including ``input``.
    """

    rule: str
    template: str
    params: Mapping[str, Any] = field(default_factory=dict)


class NestedValidationError(VouchError):
    """Raised by a chain when one or more of its rules fail.

    Attributes:
        failures: Failures in chain order.
        input: The value that was asserted.
        name: The chain's display name, if any.
    """

    def __init__(
        self,
        failures: Sequence[RuleFailure],
        *,
        input: Any = None,
        name: str | None = None,
    ) -> None:
        self.failures = tuple(failures)
        self.input = input
        self.name = name
        # Later failures with the same rule name shadow earlier ones
        self._by_rule = {f.rule: f for f in self.failures}
        super().__init__(self.full_message())

    def context(self, failure: RuleFailure | None = None) -> dict[str, Any]:
        """Template context for rendering *failure*'s messages."""
        display = self.name if self.name is not None else stringify(self.input)
        params = failure.params if failure is not None else {}
        return {**params, "name": display, "input": self.input}

    def render(self, template: str, failure: RuleFailure | None = None) -> str:
        """Render *template* against a failure (the first one by default)."""
        if failure is None and self.failures:
            failure = self.failures[0]
        return render_message(template, self.context(failure))

    def find_messages(self, names: Iterable[str] | Mapping[str, str]) -> dict[str, str]:
        """Resolve messages for the given rule names.

        Accepts either a sequence of rule names (default templates are
        rendered) or a mapping of rule name -> custom template. Every
        requested name appears in the result; names whose rule did not
        fail map to ``""``.

        Raises:
            ConfigurationError: If a custom template is not a string.
        """
        if isinstance(names, Mapping):
            pairs: Iterable[tuple[str, str | None]] = names.items()
        else:
            pairs = ((n, None) for n in names)

        found: dict[str, str] = {}
        for rule, custom in pairs:
            if custom is not None and not isinstance(custom, str):
                msg = (
                    f"Custom message for rule {rule!r} must be a string, "
                    f"got {type(custom).__name__}"
                )
                raise ConfigurationError(msg)
            failure = self._by_rule.get(rule)
            if failure is None:
                found[rule] = ""
                continue
            found[rule] = self.render(custom if custom is not None else failure.template, failure)
        return found

    def messages(self) -> list[str]:
        """Default messages for every failure, in chain order."""
        return [self.render(f.template, f) for f in self.failures]

    def full_message(self) -> str:
        return "; ".join(self.messages())
