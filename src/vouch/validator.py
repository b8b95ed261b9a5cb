"""The validation session.

A ``Validator`` runs per-field rule chains over a set of inputs, resolves
failures into messages and keeps every value and error for later reads::

    from vouch import Validator, WithOverrides, chain, length, not_empty

    validator = Validator(default_messages={"notEmpty": "Required"})
    validator.validate_mapping(
        {"username": "", "bio": "x" * 500},
        {
            "username": chain(not_empty(), length(3, 20)),
            "bio": WithOverrides(chain(length(max=280)), message="Keep it short"),
        },
    )
    validator.is_valid()                    # False
    validator.get_first_error("username")   # "Required"
    validator.get_errors("bio")             # ["Keep it short"]

Validation failures never raise out of the validate operations; they
become store entries. Only malformed configuration raises
(``ConfigurationError``).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from vouch.config import ValidatorConfig
from vouch.errors import ConfigurationError
from vouch.extraction import is_object
from vouch.failures import NestedValidationError
from vouch.inputs import ExtractedInput, MappingInput, ObjectInput, ValidationInput
from vouch.resolution import resolve_messages
from vouch.result import ValidationResult
from vouch.rulespec import RuleSpec, WithOverrides, as_rule_spec
from vouch.store import ResultStore

logger = logging.getLogger("vouch.validator")

type Rules = Mapping[str, Any]


class Validator(ResultStore):
    """Validation session: configuration plus error and value stores.

    One session serves one logical validation pass (typically one
    request). It is not thread-safe.
    """

    def __init__(
        self,
        config: ValidatorConfig | None = None,
        *,
        show_validation_rules: bool | None = None,
        default_messages: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__()
        config = config or ValidatorConfig()
        if show_validation_rules is not None:
            config = ValidatorConfig(show_validation_rules, config.default_messages)
        if default_messages is not None:
            config = config.with_default_messages(default_messages)
        self._config = config

    # -- Configuration --

    @property
    def config(self) -> ValidatorConfig:
        return self._config

    def set_config(self, config: ValidatorConfig) -> None:
        self._config = config

    def get_show_validation_rules(self) -> bool:
        return self._config.show_validation_rules

    def set_show_validation_rules(self, show: bool) -> None:
        self._config = ValidatorConfig(show, self._config.default_messages)
        logger.debug("show_validation_rules set to %s", show)

    def get_default_messages(self) -> Mapping[str, str]:
        return self._config.default_messages

    def set_default_messages(self, messages: Mapping[str, str]) -> None:
        self._config = self._config.with_default_messages(messages)

    def get_default_message(self, rule: str) -> str:
        return self._config.default_messages.get(rule, "")

    def set_default_message(self, rule: str, message: str) -> None:
        self._config = self._config.with_default_message(rule, message)

    # -- Bulk validation --

    def validate(
        self,
        source: ValidationInput,
        rules: Rules,
        group: str | None = None,
        messages: Mapping[str, str] | None = None,
    ) -> Validator:
        """Validate a tagged input.

        Raises:
            ConfigurationError: If *source* is not a ``MappingInput``,
                ``ObjectInput`` or ``ExtractedInput``.
        """
        match source:
            case MappingInput(data=data):
                return self.validate_mapping(data, rules, group, messages)
            case ObjectInput(obj=obj):
                return self.validate_object(obj, rules, group, messages)
            case ExtractedInput():
                return self._validate_input(source, rules, group, messages)
            case _:
                msg = (
                    "validate() expects a MappingInput, ObjectInput or ExtractedInput, "
                    f"got {type(source).__name__}"
                )
                raise ConfigurationError(msg)

    def validate_mapping(
        self,
        data: Mapping[str, Any],
        rules: Rules,
        group: str | None = None,
        messages: Mapping[str, str] | None = None,
    ) -> Validator:
        """Validate the entries of a mapping. Missing keys validate ``None``."""
        if not isinstance(data, Mapping):
            msg = f"validate_mapping() expects a mapping, got {type(data).__name__}"
            raise ConfigurationError(msg)
        return self._validate_input(MappingInput(data), rules, group, messages)

    def validate_object(
        self,
        obj: Any,
        rules: Rules,
        group: str | None = None,
        messages: Mapping[str, str] | None = None,
    ) -> Validator:
        """Validate an object's properties, private ones included.

        Raises:
            ConfigurationError: If *obj* is ``None``, a scalar, or a mapping.
        """
        if not is_object(obj):
            msg = f"validate_object() expects an object, got {type(obj).__name__}"
            raise ConfigurationError(msg)
        return self._validate_input(ObjectInput(obj), rules, group, messages)

    def validate_request(
        self,
        request: Any,
        rules: Rules,
        group: str | None = None,
        messages: Mapping[str, str] | None = None,
    ) -> Validator:
        """Validate request parameters (parsed body first, then query string)."""
        return self._validate_input(ExtractedInput(request), rules, group, messages)

    def _validate_input(
        self,
        source: ValidationInput,
        rules: Rules,
        group: str | None,
        messages: Mapping[str, str] | None,
    ) -> Validator:
        for key, spec in rules.items():
            self.validate_value(source.read(key), spec, key, group, messages)
        return self

    # -- Single field --

    def validate_value(
        self,
        value: Any,
        rule_spec: Any,
        key: str,
        group: str | None = None,
        messages: Mapping[str, str] | None = None,
    ) -> Validator:
        """Validate one value and store it under *key*.

        The value is stored whatever the outcome; errors are written only
        when the chain fails.

        Raises:
            ConfigurationError: If *rule_spec* has no chain or carries a
                non-string message.
        """
        spec = as_rule_spec(rule_spec)
        self.set_value(key, value, group)

        try:
            spec.chain.assert_valid(value)
        except NestedValidationError as e:
            self._store_failure(e, spec, key, group, messages)
        return self

    def _store_failure(
        self,
        failure: NestedValidationError,
        spec: RuleSpec,
        key: str,
        group: str | None,
        messages: Mapping[str, str] | None,
    ) -> None:
        overrides = spec if isinstance(spec, WithOverrides) else None

        if overrides is not None and overrides.message is not None:
            self.set_errors([failure.render(overrides.message)], key, group)
            logger.debug("%s failed, replaced by single override message", _label(key, group))
            return

        resolved = resolve_messages(
            failure,
            spec.chain,
            default_messages=self._config.default_messages,
            call_messages=messages,
            rule_messages=overrides.messages if overrides is not None else None,
        )
        if not resolved:
            logger.debug("%s failed without resolvable messages", _label(key, group))
            return

        self.record(
            key,
            resolved,
            group,
            keep_rule_names=self._config.show_validation_rules,
        )
        logger.debug("%s failed: %s", _label(key, group), ", ".join(resolved))

    # -- Snapshot --

    def result(self) -> ValidationResult:
        """Return an immutable snapshot of the stored values and errors."""
        return ValidationResult(values=self.get_values(), errors=self.get_errors())


def _label(key: str, group: str | None) -> str:
    return key if group is None else f"{group}.{key}"
