"""Validation engine — rule dispatch, field and scope aggregation.

Walks each field's rule list against the registry in declared order
and stops at the first failure. Across a scope every field is
validated, so each failing field gets its own marker.

Usage::

    source = StaticFieldSource()
    source.add("email", rules="required,email", value="")
    engine = ValidationEngine(source)

    if not engine.validate(clear_prior_errors=True):
        for marker in engine.board.markers:
            print(marker.field_id, marker.message)  # email Required
"""

import logging
from collections.abc import Callable

from fieldcheck.config import ValidationConfig
from fieldcheck.errors import MissingRulesError
from fieldcheck.fields import FieldDescriptor, FieldSource, parse_rules
from fieldcheck.markers import Marker, MarkerBoard
from fieldcheck.result import FieldOutcome, ScopeOutcome
from fieldcheck.rules import Validator, lookup

logger = logging.getLogger("fieldcheck.engine")


class ValidationEngine:
    """Runs declared rules against fields and reports failures as markers.

    Args:
        source: Resolves the fields for ``validate()``.
        board: Where failure markers are displayed. A fresh board is
            created from *config* when omitted.
        config: Marker and annotation settings.
        lookup: Maps a rule key to a validator or ``None``. Defaults to
            the built-in registry.
    """

    __slots__ = ("_lookup", "board", "config", "source")

    def __init__(
        self,
        source: FieldSource,
        *,
        board: MarkerBoard | None = None,
        config: ValidationConfig | None = None,
        lookup: Callable[[str], Validator | None] = lookup,
    ) -> None:
        self.config = config or ValidationConfig()
        self.source = source
        self.board = board if board is not None else MarkerBoard(self.config)
        self._lookup = lookup

    # -- Single field -----------------------------------------------------

    def evaluate_field(
        self, field: FieldDescriptor, explicit_rules: str | None = None
    ) -> FieldOutcome:
        """Run a field's rules without touching the marker board.

        Raises:
            MissingRulesError: Neither *explicit_rules* nor the field
                provide a rule list.
        """
        rules = parse_rules(explicit_rules) if explicit_rules else field.rules
        if rules is None:
            raise MissingRulesError(field.field_id)

        value = field.effective_value
        for key in rules:
            validator = self._lookup(key)
            if validator is None:
                logger.debug("Skipping unknown rule %r on %r", key, field.field_id)
                continue
            result = validator(value)
            if result.error:
                logger.debug("%r failed %r: %s", field.field_id, key, result.message)
                return FieldOutcome(field, passed=False, failed_rule=key, message=result.message)
        return FieldOutcome(field, passed=True)

    def validate_field(self, field: FieldDescriptor, explicit_rules: str | None = None) -> bool:
        """Validate one field and display a marker on its first failure.

        Args:
            field: The field to check.
            explicit_rules: Comma-separated rule keys to use instead of
                the field's declared rules.

        Returns:
            True when no rule failed (including when every requested
            rule key is unknown).
        """
        outcome = self.evaluate_field(field, explicit_rules)
        if not outcome.passed:
            self.display_error(field, outcome.message or "")
        return outcome.passed

    # -- Scope ------------------------------------------------------------

    def validate_scope(
        self, scope: str | None = None, clear_prior_errors: bool = False
    ) -> ScopeOutcome:
        """Validate every field the source resolves for *scope*.

        Every field is evaluated even after one fails. Failing fields
        get a marker each.
        """
        if clear_prior_errors:
            self.board.clear()
        fields = self.source(scope)
        outcomes: list[FieldOutcome] = []
        for field in fields:
            outcome = self.evaluate_field(field)
            if not outcome.passed:
                self.display_error(field, outcome.message or "")
            outcomes.append(outcome)
        result = ScopeOutcome(tuple(outcomes))
        logger.debug(
            "Validated %d field(s) in scope %r: %d failed",
            len(outcomes),
            scope,
            len(result.failures),
        )
        return result

    def validate(self, scope: str | None = None, clear_prior_errors: bool = False) -> bool:
        """Validate a scope and return whether every field passed.

        Args:
            scope: Container id, or ``None`` for every visible annotated
                field.
            clear_prior_errors: Remove all displayed markers first.
        """
        return self.validate_scope(scope, clear_prior_errors).passed

    # -- Presentation -----------------------------------------------------

    def display_error(self, field: FieldDescriptor, message: str) -> Marker:
        """Show *message* next to *field*.

        Also usable directly to report failures from custom checks with
        the same placement and dismissal behavior as rule failures.
        """
        return self.board.display(field, message)
