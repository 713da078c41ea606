"""Validation results — immutable containers for rule, field, and scope outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fieldcheck.fields import FieldDescriptor


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of running one validator against one value.

    Exactly one of two shapes holds: a silent pass (``error=False``,
    ``message=None``) or a failure carrying a human-readable message.
    The result is truthy when it passes::

        result = REGISTRY[RuleKey.REQUIRED]("")
        if not result:
            print(result.message)  # "Required"
    """

    error: bool
    message: str | None = None

    @classmethod
    def ok(cls) -> ValidationResult:
        """A passing result."""
        return _PASS

    @classmethod
    def fail(cls, message: str) -> ValidationResult:
        """A failing result carrying *message*."""
        return cls(error=True, message=message)

    def __bool__(self) -> bool:
        return not self.error


_PASS = ValidationResult(error=False)


@dataclass(frozen=True, slots=True)
class FieldOutcome:
    """Pass/fail for a single field.

    ``failed_rule`` and ``message`` are set only when the field failed,
    and name the *first* failing rule; later rules were never run.
    """

    field: FieldDescriptor
    passed: bool
    failed_rule: str | None = None
    message: str | None = None

    def __bool__(self) -> bool:
        return self.passed


@dataclass(frozen=True, slots=True)
class ScopeOutcome:
    """Aggregate over every field resolved for one ``validate()`` pass.

    ``passed`` is the logical AND of all field outcomes, so an empty
    scope passes. Falsy when any field failed.
    """

    outcomes: tuple[FieldOutcome, ...] = ()

    @property
    def passed(self) -> bool:
        return all(o.passed for o in self.outcomes)

    @property
    def failures(self) -> tuple[FieldOutcome, ...]:
        """Outcomes of the fields that failed, in evaluation order."""
        return tuple(o for o in self.outcomes if not o.passed)

    @property
    def errors(self) -> dict[str, str]:
        """Map of field id to the message of its first failing rule."""
        return {o.field.field_id: o.message or "" for o in self.outcomes if not o.passed}

    def __bool__(self) -> bool:
        return self.passed
