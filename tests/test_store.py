"""Tests for vouch.store: composite-keyed error and value stores."""

import pytest

from vouch.errors import ConfigurationError
from vouch.store import ResultStore, SlotKey


class TestValues:
    def test_set_and_get(self) -> None:
        store = ResultStore()
        store.set_value("name", "alice")
        assert store.get_value("name") == "alice"

    def test_missing_default(self) -> None:
        store = ResultStore()
        assert store.get_value("missing") is None
        assert store.get_value("missing", default="x") == "x"

    def test_overwrite(self) -> None:
        store = ResultStore()
        store.set_value("n", 1)
        store.set_value("n", 2)
        assert store.get_value("n") == 2

    def test_round_trip(self) -> None:
        store = ResultStore()
        values = {"a": 1, "b": {"nested": True}, "c": None}
        store.set_values(values)
        assert store.get_values() == values

    def test_set_values_replaces_everything(self) -> None:
        store = ResultStore()
        store.set_value("zip", "123", "address")
        store.set_values({"a": 1})
        assert store.get_values() == {"a": 1}

    def test_groups(self) -> None:
        store = ResultStore()
        store.set_value("zip", "12345", "address")
        store.set_value("zip", "ungrouped")
        assert store.get_value("zip", "address") == "12345"
        assert store.get_value("zip") == "ungrouped"
        assert store.get_values("address") == {"zip": "12345"}
        assert store.get_values() == {"zip": "ungrouped", "address": {"zip": "12345"}}

    def test_set_values_for_group_only(self) -> None:
        store = ResultStore()
        store.set_value("name", "alice")
        store.set_value("old", 1, "g")
        store.set_values({"new": 2}, "g")
        assert store.get_values() == {"name": "alice", "g": {"new": 2}}


class TestErrorWrites:
    def test_add_error_creates_slot(self) -> None:
        store = ResultStore()
        store.add_error("email", "bad")
        store.add_error("email", "worse")
        assert store.get_errors("email") == ["bad", "worse"]

    def test_add_errors(self) -> None:
        store = ResultStore()
        store.add_errors("email", ["a", "b"], "signup")
        assert store.get_errors("email", "signup") == ["a", "b"]

    def test_add_error_to_rule_keyed_slot(self) -> None:
        store = ResultStore()
        store.record("email", {"email": "bad"}, keep_rule_names=True)
        store.add_error("email", "taken")
        assert store.get_errors("email") == {"email": "bad", 1: "taken"}
        assert store.get_error("email", 1) == "taken"

    def test_set_errors_for_key(self) -> None:
        store = ResultStore()
        store.add_error("k", "old")
        store.set_errors(["new"], "k")
        assert store.get_errors("k") == ["new"]

    def test_set_errors_for_group(self) -> None:
        store = ResultStore()
        store.add_error("a", "x", "g")
        store.set_errors({"b": ["y"]}, group="g")
        assert store.get_errors(group="g") == {"b": ["y"]}

    def test_set_errors_whole_store(self) -> None:
        store = ResultStore()
        store.add_error("stale", "x")
        errors = {
            "email": ["bad"],
            "title": {"notEmpty": "required"},
            "address": {"zip": ["short"], "city": {"notEmpty": "required"}},
        }
        store.set_errors(errors)
        assert store.get_errors() == errors
        assert store.get_errors("zip", "address") == ["short"]
        assert store.get_errors("stale") == []

    def test_record_plain_list(self) -> None:
        store = ResultStore()
        store.record("k", {"notEmpty": "a", "stringType": "b"})
        assert store.get_errors("k") == ["a", "b"]

    def test_record_replaces(self) -> None:
        store = ResultStore()
        store.add_error("k", "manual")
        store.record("k", {"notEmpty": "a"})
        assert store.get_errors("k") == ["a"]

    def test_reads_are_copies(self) -> None:
        store = ResultStore()
        store.add_error("k", "a")
        store.get_errors("k").append("b")
        assert store.get_errors("k") == ["a"]


class TestErrorReads:
    def test_first_error_missing(self) -> None:
        assert ResultStore().get_first_error("k") == ""

    def test_first_error(self) -> None:
        store = ResultStore()
        store.set_errors(["a", "b"], "k")
        assert store.get_first_error("k") == "a"

    def test_get_error_index(self) -> None:
        store = ResultStore()
        store.set_errors(["a", "b"], "k")
        assert store.get_error("k", 1) == "b"
        assert store.get_error("k", 5) == ""

    def test_negative_index_is_out_of_range(self) -> None:
        store = ResultStore()
        store.set_errors(["a", "b"], "k")
        assert store.get_error("k", -1) == ""
        store.record("r", {"notEmpty": "a"}, keep_rule_names=True)
        assert store.get_error("r", -1) == ""

    def test_get_error_on_rule_keyed_slot(self) -> None:
        store = ResultStore()
        store.record("k", {"notEmpty": "a", "email": "b"}, keep_rule_names=True)
        assert store.get_first_error("k") == "a"
        assert store.get_error("k", 1) == "b"

    def test_group_isolation(self) -> None:
        store = ResultStore()
        store.set_errors(["e"], "k", "g1")
        assert store.get_errors("k") == []
        assert store.get_first_error("k") == ""
        assert store.get_errors("k", "g2") == []
        assert store.get_errors("k", "g1") == ["e"]

    def test_grouped_lookup_never_falls_back(self) -> None:
        store = ResultStore()
        store.set_errors(["ungrouped"], "k")
        assert store.get_error("k", 0, "g") == ""

    def test_missing_group(self) -> None:
        assert ResultStore().get_errors(group="nope") == {}

    def test_has_errors(self) -> None:
        store = ResultStore()
        store.add_error("k", "a")
        assert store.has_errors("k") is True
        assert store.has_errors("other") is False


class TestRemoveAndValidity:
    def test_empty_store_valid(self) -> None:
        store = ResultStore()
        assert store.is_valid() is True
        assert store.count() == 0

    def test_remove_key(self) -> None:
        store = ResultStore()
        store.add_error("k", "a")
        store.add_error("other", "b")
        store.remove_errors("k")
        assert store.get_errors("k") == []
        assert store.get_errors() == {"k": [], "other": ["b"]}

    def test_cleared_slot_keeps_store_invalid(self) -> None:
        store = ResultStore()
        store.add_error("k", "a")
        store.remove_errors("k")
        assert store.is_valid() is False
        assert store.count() == 1

    def test_empty_slot_counts_as_entry(self) -> None:
        store = ResultStore()
        store.set_errors([], "k")
        assert store.is_valid() is False
        assert store.count() == 1

    def test_remove_absent_is_noop(self) -> None:
        store = ResultStore()
        store.remove_errors("ghost")
        store.remove_errors("ghost", "g")
        assert store.get_errors() == {}

    def test_remove_group(self) -> None:
        store = ResultStore()
        store.add_error("a", "x", "g")
        store.add_error("b", "y", "g")
        store.add_error("a", "z")
        store.remove_errors(group="g")
        assert store.get_errors(group="g") == {"a": [], "b": []}
        assert store.get_errors("a") == ["z"]

    def test_remove_all(self) -> None:
        store = ResultStore()
        store.add_error("a", "x", "g")
        store.add_error("b", "y")
        store.remove_errors()
        assert store.get_errors() == {}
        assert store.is_valid() is True

    def test_remove_keeps_slot_shape(self) -> None:
        store = ResultStore()
        store.record("k", {"notEmpty": "a"}, keep_rule_names=True)
        store.remove_errors("k")
        assert store.get_errors("k") == {}

    def test_count_top_level_entries(self) -> None:
        store = ResultStore()
        store.add_errors("a", ["1", "2", "3"])
        store.add_error("x", "1", "g")
        store.add_error("y", "1", "g")
        assert store.count() == 2

    def test_count_includes_cleared_slots(self) -> None:
        store = ResultStore()
        store.add_error("a", "1")
        store.add_error("b", "1")
        store.remove_errors("a")
        assert store.count() == 2

    def test_remove_all_resets_count(self) -> None:
        store = ResultStore()
        store.add_error("a", "1")
        store.remove_errors()
        assert store.count() == 0


class TestTopLevelNames:
    def test_group_named_like_ungrouped_error_key(self) -> None:
        store = ResultStore()
        store.add_error("address", "required")
        with pytest.raises(ConfigurationError, match="address"):
            store.add_error("zip", "short", "address")
        assert store.get_errors() == {"address": ["required"]}

    def test_ungrouped_key_named_like_group(self) -> None:
        store = ResultStore()
        store.set_errors(["short"], "zip", "address")
        with pytest.raises(ConfigurationError):
            store.set_errors(["required"], "address")
        with pytest.raises(ConfigurationError):
            store.record("address", {"notEmpty": "required"})

    def test_group_write_checks_name(self) -> None:
        store = ResultStore()
        store.add_error("address", "required")
        with pytest.raises(ConfigurationError):
            store.set_errors({"zip": ["short"]}, group="address")

    def test_values_checked_too(self) -> None:
        store = ResultStore()
        store.set_value("address", "Main St")
        with pytest.raises(ConfigurationError):
            store.set_value("zip", "12345", "address")
        with pytest.raises(ConfigurationError):
            store.set_values({"zip": "12345"}, "address")
        assert store.get_values() == {"address": "Main St"}

    def test_nested_view_round_trips(self) -> None:
        store = ResultStore()
        store.add_error("email", "bad")
        store.add_error("zip", "short", "address")
        copy = ResultStore()
        copy.set_errors(store.get_errors())
        assert copy.get_errors() == store.get_errors()

    def test_same_key_in_group_and_ungrouped_is_fine(self) -> None:
        store = ResultStore()
        store.add_error("zip", "a")
        store.add_error("zip", "b", "address")
        assert store.get_errors() == {"zip": ["a"], "address": {"zip": ["b"]}}


class TestSlotKey:
    def test_ungrouped_and_grouped_differ(self) -> None:
        assert SlotKey(None, "k") != SlotKey("g", "k")
