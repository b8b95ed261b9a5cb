"""Message template rendering.

Rule messages are kida templates::

    "{{ name }} must have a length between {{ min }} and {{ max }}"

The render context carries ``name`` (the chain's display name, or the
quoted input when the chain is unnamed), ``input`` (the raw value) and
every parameter the failing rule exposes.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from kida import Environment
from kida.environment.exceptions import (
    TemplateRuntimeError,
    TemplateSyntaxError,
    UndefinedError,
)

from vouch.errors import ConfigurationError

if TYPE_CHECKING:
    from kida.template import Template

# Messages are plain text; escaping would turn quotes into entities
_env = Environment(autoescape=False)


@lru_cache(maxsize=256)
def _compile(source: str) -> Template:
    return _env.from_string(source)


def render_message(source: str, context: Mapping[str, Any]) -> str:
    """Render a message template against *context*.

    Sources without template markup are returned untouched, so plain
    override messages never pay for a compile.

    Raises:
        ConfigurationError: If the message is not a valid template, or
            refers to something the context lacks.
    """
    if "{{" not in source and "{%" not in source:
        return source
    try:
        return _compile(source).render(dict(context))
    except (TemplateSyntaxError, TemplateRuntimeError, UndefinedError) as e:
        msg = f"Invalid message template {source!r}: {e}"
        raise ConfigurationError(msg) from e


def stringify(value: Any) -> str:
    """Quote a raw input for display as the default ``name``."""
    if value is None:
        return "null"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    try:
        return json.dumps(value, ensure_ascii=False, default=repr)
    except TypeError, ValueError:
        return repr(value)
