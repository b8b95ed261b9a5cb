"""Reading field values out of objects and requests.

``object_property`` resolves a field name against an object's attributes,
including its underscore-private and name-mangled state.
``request_param`` resolves a parameter against a request's parsed body
and query string.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from vouch.errors import ConfigurationError

_MISSING = object()

# Values that carry no named state of their own
_SCALARS = (str, bytes, bytearray, int, float, complex, bool)


def is_object(value: Any) -> bool:
    """Return True if *value* has named properties worth reading."""
    return value is not None and not isinstance(value, (*_SCALARS, Mapping))


def object_property(obj: Any, name: str, default: Any = None) -> Any:
    """Return *obj*'s property *name*, or *default* if it has none.

    Lookup order: the public attribute, then ``_name``, then the
    name-mangled ``_Class__name`` for each class in the MRO.

    Raises:
        ConfigurationError: If *obj* is ``None``, a scalar, or a mapping.
    """
    if not is_object(obj):
        msg = f"Expected an object to read {name!r} from, got {type(obj).__name__}"
        raise ConfigurationError(msg)

    for candidate in _candidates(type(obj), name):
        value = getattr(obj, candidate, _MISSING)
        if value is not _MISSING:
            return value
    return default


def _candidates(cls: type, name: str) -> list[str]:
    names = [name]
    if name.startswith("_"):
        return names
    names.append(f"_{name}")
    names.extend(f"_{klass.__name__.lstrip('_')}__{name}" for klass in cls.__mro__[:-1])
    return names


def request_param(request: Any, name: str, default: Any = None) -> Any:
    """Return a request parameter, checking body before query string.

    Lookup order: the parsed body as a mapping, the parsed body as an
    object (by property), the query mapping. First hit wins.
    """
    body = getattr(request, "parsed_body", None)
    if isinstance(body, Mapping):
        if name in body:
            return body[name]
    elif is_object(body):
        value = object_property(body, name, _MISSING)
        if value is not _MISSING:
            return value

    query = getattr(request, "query", None)
    if isinstance(query, Mapping) and name in query:
        return query[name]
    return default
