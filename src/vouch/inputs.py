"""Tagged validation inputs.

``Validator.validate`` routes on the tag rather than on the runtime shape
of the data, so a mapping-like object can still be validated by property
and vice versa::

    validator.validate(MappingInput(payload), rules)
    validator.validate(ObjectInput(user), rules)
    validator.validate(ExtractedInput(request), rules)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from vouch.extraction import object_property, request_param


@dataclass(frozen=True, slots=True)
class MappingInput:
    """Values are the entries of a mapping."""

    data: Mapping[str, Any]

    def read(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


@dataclass(frozen=True, slots=True)
class ObjectInput:
    """Values are the named properties of an object."""

    obj: Any

    def read(self, key: str, default: Any = None) -> Any:
        return object_property(self.obj, key, default)


@dataclass(frozen=True, slots=True)
class ExtractedInput:
    """Values come from an extraction function applied to a source.

    The default extractor reads request parameters (parsed body first,
    then query string).
    """

    source: Any
    extract: Callable[[Any, str, Any], Any] = request_param

    def read(self, key: str, default: Any = None) -> Any:
        return self.extract(self.source, key, default)


type ValidationInput = MappingInput | ObjectInput | ExtractedInput
