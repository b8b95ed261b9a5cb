"""Error and value storage for a validation session.

Both stores are keyed by ``SlotKey(group, key)``; ``group=None`` is the
ungrouped namespace. Grouped and ungrouped slots never fall back to one
another: ``get_errors("email")`` does not see ``("signup", "email")``.

An error slot is a list of messages, or a rule name -> message dict when
the validator keeps rule names. Position 0 is the primary error either
way.

Full-store reads return a nested view: ungrouped keys at the top level,
each group as a dict under its name::

    {"email": ["..."], "signup": {"password": ["..."]}}

A group name and an ungrouped key share that top level, so a store
refuses to hold both under the same name.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any, NamedTuple

from vouch.errors import ConfigurationError

type ErrorSlot = list[str] | dict[str | int, str]


class SlotKey(NamedTuple):
    group: str | None
    key: str


def _copy_slot(slot: Any) -> ErrorSlot:
    if isinstance(slot, Mapping):
        return dict(slot)
    if isinstance(slot, str):
        return [slot]
    return list(slot)


def _is_slot(value: Any) -> bool:
    """True for a message list or a rule -> message mapping."""
    if isinstance(value, (list, tuple)):
        return True
    return isinstance(value, Mapping) and all(isinstance(v, str) for v in value.values())


def _check_top_level(store: Mapping[SlotKey, Any], group: str | None, key: str) -> None:
    """Raise if writing ``(group, key)`` would collide in the nested view."""
    if group is not None:
        clash = SlotKey(None, group) in store
        name = group
    else:
        clash = any(sk.group == key for sk in store)
        name = key
    if clash:
        msg = f"{name!r} is used both as a group and as an ungrouped key"
        raise ConfigurationError(msg)


class ResultStore:
    """Per-key error messages and values, optionally grouped."""

    def __init__(self) -> None:
        self._errors: dict[SlotKey, ErrorSlot] = {}
        self._values: dict[SlotKey, Any] = {}

    # -- Values --

    def set_value(self, key: str, value: Any, group: str | None = None) -> None:
        _check_top_level(self._values, group, key)
        self._values[SlotKey(group, key)] = value

    def get_value(self, key: str, group: str | None = None, default: Any = None) -> Any:
        return self._values.get(SlotKey(group, key), default)

    def set_values(self, values: Mapping[str, Any], group: str | None = None) -> None:
        """Replace every value, or only *group*'s values when given."""
        if group is None:
            self._values = {SlotKey(None, k): v for k, v in values.items()}
            return
        _check_top_level(self._values, group, "")
        self._values = {sk: v for sk, v in self._values.items() if sk.group != group}
        self._values.update((SlotKey(group, k), v) for k, v in values.items())

    def get_values(self, group: str | None = None) -> dict[str, Any]:
        """Return *group*'s values, or the nested view of all values."""
        if group is not None:
            return {sk.key: v for sk, v in self._values.items() if sk.group == group}
        return _nested(self._values, lambda v: v)

    # -- Errors: writes --

    def set_errors(
        self,
        errors: Any,
        key: str | None = None,
        group: str | None = None,
    ) -> None:
        """Replace errors at one of three levels.

        - ``key`` given: replace that slot (within ``group`` if given)
        - ``group`` only: replace every slot of the group with ``errors``,
          a key -> messages mapping
        - neither: replace the whole store from a nested view

        Raises:
            ConfigurationError: If the write would put a group and an
                ungrouped key under the same name.
        """
        if key is not None:
            _check_top_level(self._errors, group, key)
            self._errors[SlotKey(group, key)] = _copy_slot(errors)
            return

        if group is not None:
            _check_top_level(self._errors, group, "")
            self._errors = {sk: s for sk, s in self._errors.items() if sk.group != group}
            for k, slot in errors.items():
                self._errors[SlotKey(group, k)] = _copy_slot(slot)
            return

        self._errors = {}
        for name, entry in errors.items():
            if _is_slot(entry):
                self._errors[SlotKey(None, name)] = _copy_slot(entry)
            else:
                for k, slot in entry.items():
                    self._errors[SlotKey(name, k)] = _copy_slot(slot)

    def add_error(self, key: str, message: str, group: str | None = None) -> None:
        """Append one message to a slot, creating it if absent."""
        sk = SlotKey(group, key)
        if sk not in self._errors:
            _check_top_level(self._errors, group, key)
        slot = self._errors.setdefault(sk, [])
        if isinstance(slot, dict):
            index = len(slot)
            while index in slot:
                index += 1
            slot[index] = message
        else:
            slot.append(message)

    def add_errors(self, key: str, messages: Iterable[str], group: str | None = None) -> None:
        for message in messages:
            self.add_error(key, message, group)

    def remove_errors(self, key: str | None = None, group: str | None = None) -> None:
        """Clear matching slots. Absent slots are left alone.

        Cleared slots stay in the store as empty entries. With no
        arguments the whole store is emptied.
        """
        if key is None and group is None:
            self._errors = {}
            return
        for sk, slot in self._errors.items():
            if sk.group == group and (key is None or sk.key == key):
                slot.clear()

    def record(
        self,
        key: str,
        messages: Mapping[str, str],
        group: str | None = None,
        *,
        keep_rule_names: bool = False,
    ) -> None:
        """Store resolved messages for a failed field, replacing its slot."""
        _check_top_level(self._errors, group, key)
        slot: ErrorSlot = dict(messages) if keep_rule_names else list(messages.values())
        self._errors[SlotKey(group, key)] = slot

    # -- Errors: reads --

    def get_errors(self, key: str | None = None, group: str | None = None) -> Any:
        """Return one slot, one group, or the nested view of the store.

        Missing slots read as an empty list, missing groups as an empty dict.
        """
        if key is not None:
            slot = self._errors.get(SlotKey(group, key))
            return _copy_slot(slot) if slot is not None else []
        if group is not None:
            return {sk.key: _copy_slot(s) for sk, s in self._errors.items() if sk.group == group}
        return _nested(self._errors, _copy_slot)

    def get_error(self, key: str, index: int = 0, group: str | None = None) -> str:
        """Return the message at *index* in a slot, or ``""``."""
        slot = self._errors.get(SlotKey(group, key))
        if not slot:
            return ""
        messages = list(slot.values()) if isinstance(slot, dict) else slot
        if not 0 <= index < len(messages):
            return ""
        return messages[index]

    def get_first_error(self, key: str, group: str | None = None) -> str:
        return self.get_error(key, 0, group)

    def has_errors(self, key: str, group: str | None = None) -> bool:
        return bool(self._errors.get(SlotKey(group, key)))

    def is_valid(self) -> bool:
        """True when the error store holds no entries at all.

        A slot emptied by ``remove_errors`` is still an entry.
        """
        return not self._errors

    def count(self) -> int:
        """Number of top-level entries in the error store.

        An ungrouped key counts once; a group counts once however many
        keys it holds.
        """
        return len({sk.key if sk.group is None else sk.group for sk in self._errors})


def _nested(store: Mapping[SlotKey, Any], copy: Callable[[Any], Any]) -> dict[str, Any]:
    """Render a composite-keyed store as ungrouped keys plus group dicts."""
    view: dict[str, Any] = {}
    for sk, item in store.items():
        if sk.group is None:
            view[sk.key] = copy(item)
        else:
            view.setdefault(sk.group, {})[sk.key] = copy(item)
    return view
