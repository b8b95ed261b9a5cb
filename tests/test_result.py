"""Tests for vouch.result: ValidationResult snapshot."""

import pytest

from vouch.result import ValidationResult


class TestValidationResult:
    def test_is_valid_no_errors(self) -> None:
        r = ValidationResult(values={"x": "1"}, errors={})
        assert r.is_valid is True
        assert bool(r) is True

    def test_is_valid_with_errors(self) -> None:
        r = ValidationResult(values={}, errors={"x": ["bad"]})
        assert r.is_valid is False
        assert not r

    def test_rule_keyed_errors(self) -> None:
        r = ValidationResult(values={}, errors={"x": {"notEmpty": "bad"}})
        assert r.is_valid is False

    def test_grouped_errors(self) -> None:
        r = ValidationResult(values={}, errors={"g": {"x": ["bad"]}})
        assert r.is_valid is False

    def test_cleared_slots_still_invalid(self) -> None:
        r = ValidationResult(values={}, errors={"x": []})
        assert r.is_valid is False

    def test_frozen(self) -> None:
        r = ValidationResult(values={}, errors={})
        with pytest.raises(AttributeError):
            r.values = {}  # type: ignore[misc]
