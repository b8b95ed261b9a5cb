"""Request-like parameter sources.

Validation only needs two things from a request: its query parameters
and its already-parsed body. Anything exposing ``query`` and
``parsed_body`` attributes satisfies ``RequestLike``; ``ParsedRequest``
is a plain immutable holder for callers without a framework request.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RequestLike(Protocol):
    """Anything with a query mapping and a parsed body."""

    @property
    def query(self) -> Mapping[str, Any]: ...

    @property
    def parsed_body(self) -> Any: ...


@dataclass(frozen=True, slots=True)
class ParsedRequest:
    """A request reduced to what validation reads.

    ``parsed_body`` is whatever the caller's framework decoded the body
    to: a mapping, an object, or ``None`` when there was no body.
    """

    query: Mapping[str, Any] = field(default_factory=dict)
    parsed_body: Any = None
