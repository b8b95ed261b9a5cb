"""Vouch: validation sessions with layered error messages.

Run rule chains over request parameters, mappings or object properties,
collect every failure, and resolve one message per failed rule::

    from vouch import Validator, chain, email, length, not_empty

    validator = Validator()
    validator.validate_mapping(form, {
        "username": chain(not_empty(), length(3, 20)),
        "email": chain(not_empty(), email()),
    })
    if not validator.is_valid():
        # validator.get_errors() == {"email": ['"bob@" must be valid email']}
        ...

Messages come from four sources, lowest priority first: the rule's own
template, the validator's default messages, the per-call ``messages``
argument, and the field's ``WithOverrides.messages``.
"""

from vouch.config import ValidatorConfig
from vouch.errors import ConfigurationError, VouchError
from vouch.failures import NestedValidationError, RuleFailure
from vouch.http import ParsedRequest, RequestLike
from vouch.inputs import ExtractedInput, MappingInput, ObjectInput, ValidationInput
from vouch.result import ValidationResult
from vouch.rules import (
    Chain,
    Rule,
    between,
    bool_type,
    callback,
    chain,
    email,
    equals,
    get_rule,
    int_type,
    int_val,
    length,
    no_whitespace,
    not_empty,
    not_optional,
    numeric,
    one_of,
    regex,
    registered_rules,
    rule_name,
    string_type,
    url,
)
from vouch.rulespec import Direct, RuleSpec, WithOverrides, as_rule_spec
from vouch.store import ResultStore, SlotKey
from vouch.validator import Validator

__version__ = "0.1.0"
__all__ = [
    "Chain",
    "ConfigurationError",
    "Direct",
    "ExtractedInput",
    "MappingInput",
    "NestedValidationError",
    "ObjectInput",
    "ParsedRequest",
    "RequestLike",
    "ResultStore",
    "Rule",
    "RuleFailure",
    "RuleSpec",
    "SlotKey",
    "ValidationInput",
    "ValidationResult",
    "Validator",
    "ValidatorConfig",
    "VouchError",
    "WithOverrides",
    "as_rule_spec",
    "between",
    "bool_type",
    "callback",
    "chain",
    "email",
    "equals",
    "get_rule",
    "int_type",
    "int_val",
    "length",
    "no_whitespace",
    "not_empty",
    "not_optional",
    "numeric",
    "one_of",
    "regex",
    "registered_rules",
    "rule_name",
    "string_type",
    "url",
]
