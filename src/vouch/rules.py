"""Built-in rules and the assertion chain.

Every rule is a small object with a ``check(value) -> bool`` predicate, a
default message template, and a canonical name declared on the class::

    class Even(Rule, name="even"):
        template = "{{ name }} must be an even number"

        def check(self, value: Any) -> bool:
            return isinstance(value, int) and value % 2 == 0

The name is what error messages are keyed by (``notEmpty``,
``stringType``, ...). Declaring it on the class keeps it stable across
renames and subclassing; nothing is derived from ``__name__``.

Rules compose into a ``Chain``::

    username = chain(not_empty(), string_type(), length(3, 20))
    username.assert_valid("al")   # raises NestedValidationError
"""

from __future__ import annotations

import re
from collections.abc import Callable, Collection, Iterator
from typing import Any, ClassVar

from vouch.errors import ConfigurationError
from vouch.failures import NestedValidationError, RuleFailure

# Canonical rule name -> rule class
_registry: dict[str, type[Rule]] = {}


class Rule:
    """One atomic predicate inside a chain.

    Subclasses pass ``name=`` in the class statement to register
    themselves. Abstract helpers may omit it; they stay unregistered.
    """

    name: ClassVar[str]
    template: ClassVar[str] = "{{ name }} is invalid"

    def __init_subclass__(cls, *, name: str | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if name is None:
            return
        existing = _registry.get(name)
        if existing is not None and existing is not cls:
            msg = f"Rule name {name!r} is already registered by {existing.__qualname__}"
            raise ConfigurationError(msg)
        cls.name = name
        _registry[name] = cls

    def check(self, value: Any) -> bool:
        raise NotImplementedError

    def params(self) -> dict[str, Any]:
        """Template parameters describing this rule instance."""
        return {}

    def failure(self, value: Any) -> RuleFailure:
        return RuleFailure(
            rule=self.name,
            template=self.template,
            params={"input": value, **self.params()},
        )

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self.params().items())
        return f"{type(self).__name__}({args})"


def rule_name(rule: Rule) -> str:
    """Return the canonical name a rule's messages are keyed by."""
    try:
        return type(rule).name
    except AttributeError:
        msg = f"{type(rule).__qualname__} does not declare a rule name"
        raise ConfigurationError(msg) from None


def get_rule(name: str) -> type[Rule]:
    """Look up a registered rule class by canonical name."""
    if name not in _registry:
        msg = f"Rule {name!r} is not registered. Available rules: " + ", ".join(
            registered_rules()
        )
        raise ConfigurationError(msg)
    return _registry[name]


def registered_rules() -> list[str]:
    """List all registered rule names."""
    return sorted(_registry)


# ---------------------------------------------------------------------------
# Chain
# ---------------------------------------------------------------------------


class Chain:
    """An ordered composition of rules evaluated together against one value.

    ``assert_valid`` runs every rule (not just up to the first failure) and
    raises a single ``NestedValidationError`` carrying one failure per
    rule that rejected the value.
    """

    __slots__ = ("_name", "_rules")

    def __init__(self, *rules: Rule, name: str | None = None) -> None:
        for r in rules:
            if not isinstance(r, Rule):
                msg = f"Chain members must be Rule instances, got {type(r).__name__}"
                raise ConfigurationError(msg)
        self._rules = tuple(rules)
        self._name = name

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    @property
    def name(self) -> str | None:
        return self._name

    def named(self, name: str) -> Chain:
        """Return a copy that renders ``{{ name }}`` as *name*."""
        return Chain(*self._rules, name=name)

    def then(self, *rules: Rule) -> Chain:
        """Return a copy with *rules* appended."""
        return Chain(*self._rules, *rules, name=self._name)

    def rule_names(self) -> list[str]:
        return [rule_name(r) for r in self._rules]

    def validate(self, value: Any) -> bool:
        return all(r.check(value) for r in self._rules)

    def assert_valid(self, value: Any) -> None:
        failures = [r.failure(value) for r in self._rules if not r.check(value)]
        if failures:
            raise NestedValidationError(failures, input=value, name=self._name)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        inner = ", ".join(repr(r) for r in self._rules)
        return f"Chain({inner})"


def chain(*rules: Rule, name: str | None = None) -> Chain:
    """Compose *rules* into a ``Chain``."""
    return Chain(*rules, name=name)


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


class NotEmpty(Rule, name="notEmpty"):
    template = "{{ name }} must not be empty"

    def check(self, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return bool(value.strip())
        if isinstance(value, (list, tuple, dict, set, frozenset)):
            return bool(value)
        return True


class NotOptional(Rule, name="notOptional"):
    """Rejects ``None`` and the empty string, but accepts ``0`` or ``[]``."""

    template = "{{ name }} must not be optional"

    def check(self, value: Any) -> bool:
        return value is not None and value != ""


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


class StringType(Rule, name="stringType"):
    template = "{{ name }} must be of type string"

    def check(self, value: Any) -> bool:
        return isinstance(value, str)


class IntType(Rule, name="intType"):
    template = "{{ name }} must be of type integer"

    def check(self, value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)


class BoolType(Rule, name="boolType"):
    template = "{{ name }} must be of type boolean"

    def check(self, value: Any) -> bool:
        return isinstance(value, bool)


class IntVal(Rule, name="intVal"):
    """Value is an integer or a string that parses as one."""

    template = "{{ name }} must be an integer number"

    def check(self, value: Any) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        try:
            int(str(value).strip())
        except ValueError, TypeError:
            return False
        return True


class Numeric(Rule, name="numeric"):
    """Value is a number or a string that parses as one."""

    template = "{{ name }} must be numeric"

    def check(self, value: Any) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, (int, float)):
            return True
        try:
            float(str(value).strip())
        except ValueError, TypeError:
            return False
        return True


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


class Length(Rule, name="length"):
    """``len(value)`` lies within ``[min, max]``; either bound may be open."""

    def __init__(self, min: int | None = None, max: int | None = None) -> None:
        if min is None and max is None:
            msg = "length() needs at least one of min or max"
            raise ConfigurationError(msg)
        self.min = min
        self.max = max

    @property
    def template(self) -> str:  # type: ignore[override]
        if self.min is not None and self.max is not None:
            return "{{ name }} must have a length between {{ min }} and {{ max }}"
        if self.min is not None:
            return "{{ name }} must have a length greater than {{ min }}"
        return "{{ name }} must have a length lower than {{ max }}"

    def params(self) -> dict[str, Any]:
        return {"min": self.min, "max": self.max}

    def check(self, value: Any) -> bool:
        try:
            size = len(value)
        except TypeError:
            return False
        if self.min is not None and size < self.min:
            return False
        return self.max is None or size <= self.max


class Between(Rule, name="between"):
    """Value compares within ``[min, max]`` inclusive."""

    template = "{{ name }} must be between {{ min }} and {{ max }}"

    def __init__(self, min: Any, max: Any) -> None:
        self.min = min
        self.max = max

    def params(self) -> dict[str, Any]:
        return {"min": self.min, "max": self.max}

    def check(self, value: Any) -> bool:
        try:
            return self.min <= value <= self.max
        except TypeError:
            return False


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Basic email pattern: checks structure, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")

# Basic URL pattern: checks scheme + host structure
_URL_RE = re.compile(r"^https?://[^\s/$.?#].\S*$", re.IGNORECASE)


class Email(Rule, name="email"):
    template = "{{ name }} must be valid email"

    def check(self, value: Any) -> bool:
        return isinstance(value, str) and _EMAIL_RE.match(value) is not None


class Url(Rule, name="url"):
    template = "{{ name }} must be a URL"

    def check(self, value: Any) -> bool:
        return isinstance(value, str) and _URL_RE.match(value) is not None


class Regex(Rule, name="regex"):
    template = "{{ name }} must validate against {{ regex }}"

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._compiled = re.compile(pattern)

    def params(self) -> dict[str, Any]:
        return {"regex": self.pattern}

    def check(self, value: Any) -> bool:
        return isinstance(value, str) and self._compiled.search(value) is not None


class NoWhitespace(Rule, name="noWhitespace"):
    template = "{{ name }} must not contain whitespaces"

    def check(self, value: Any) -> bool:
        if value is None:
            return True
        return isinstance(value, str) and not any(c.isspace() for c in value)


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


class In(Rule, name="in"):
    template = "{{ name }} must be in {{ haystack }}"

    def __init__(self, haystack: Collection[Any]) -> None:
        self.haystack = haystack

    def params(self) -> dict[str, Any]:
        return {"haystack": ", ".join(str(h) for h in self.haystack)}

    def check(self, value: Any) -> bool:
        try:
            return value in self.haystack
        except TypeError:
            return False


class Equals(Rule, name="equals"):
    template = "{{ name }} must equal {{ compare_to }}"

    def __init__(self, compare_to: Any) -> None:
        self.compare_to = compare_to

    def params(self) -> dict[str, Any]:
        return {"compare_to": self.compare_to}

    def check(self, value: Any) -> bool:
        return value == self.compare_to


# ---------------------------------------------------------------------------
# Custom
# ---------------------------------------------------------------------------


class Callback(Rule, name="callback"):
    """Wraps a plain predicate for one-off checks."""

    template = "{{ name }} must be valid"

    def __init__(self, predicate: Callable[[Any], bool]) -> None:
        self.predicate = predicate

    def check(self, value: Any) -> bool:
        return bool(self.predicate(value))


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def not_empty() -> Rule:
    return NotEmpty()


def not_optional() -> Rule:
    return NotOptional()


def string_type() -> Rule:
    return StringType()


def int_type() -> Rule:
    return IntType()


def bool_type() -> Rule:
    return BoolType()


def int_val() -> Rule:
    return IntVal()


def numeric() -> Rule:
    return Numeric()


def length(min: int | None = None, max: int | None = None) -> Rule:
    return Length(min, max)


def between(min: Any, max: Any) -> Rule:
    return Between(min, max)


def email() -> Rule:
    return Email()


def url() -> Rule:
    return Url()


def regex(pattern: str) -> Rule:
    return Regex(pattern)


def no_whitespace() -> Rule:
    return NoWhitespace()


def one_of(*choices: Any) -> Rule:
    return In(tuple(choices))


def equals(compare_to: Any) -> Rule:
    return Equals(compare_to)


def callback(predicate: Callable[[Any], bool]) -> Rule:
    return Callback(predicate)
