"""Tests for fieldcheck.result — ValidationResult, FieldOutcome, ScopeOutcome."""

from fieldcheck.fields import FieldDescriptor
from fieldcheck.result import FieldOutcome, ScopeOutcome, ValidationResult


class TestValidationResult:
    def test_ok(self) -> None:
        result = ValidationResult.ok()
        assert result.error is False
        assert result.message is None
        assert result

    def test_fail(self) -> None:
        result = ValidationResult.fail("Required")
        assert result.error is True
        assert result.message == "Required"
        assert not result


class TestScopeOutcome:
    def test_empty_scope_passes(self) -> None:
        assert ScopeOutcome().passed is True

    def test_and_of_fields(self) -> None:
        a = FieldOutcome(FieldDescriptor("a"), passed=True)
        b = FieldOutcome(FieldDescriptor("b"), passed=False, failed_rule="required", message="Required")
        outcome = ScopeOutcome((a, b))
        assert outcome.passed is False
        assert outcome.failures == (b,)
        assert outcome.errors == {"b": "Required"}
        assert not outcome

    def test_all_pass(self) -> None:
        a = FieldOutcome(FieldDescriptor("a"), passed=True)
        assert ScopeOutcome((a, a)).passed is True
