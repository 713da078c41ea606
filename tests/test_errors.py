"""Tests for fieldcheck.errors — exception hierarchy and error messages."""

import pytest

from fieldcheck.errors import (
    ConfigurationError,
    FieldcheckError,
    MissingRulesError,
    UnknownMarkerError,
)


class TestHierarchy:
    def test_configuration_error_is_fieldcheck_error(self) -> None:
        assert issubclass(ConfigurationError, FieldcheckError)

    def test_missing_rules_is_fieldcheck_error(self) -> None:
        assert issubclass(MissingRulesError, FieldcheckError)

    def test_unknown_marker_is_key_error(self) -> None:
        assert issubclass(UnknownMarkerError, FieldcheckError)
        assert issubclass(UnknownMarkerError, KeyError)


class TestMessages:
    def test_missing_rules(self) -> None:
        err = MissingRulesError("email")
        assert err.field_id == "email"
        assert str(err) == "Field 'email' declares no validation rules"

    def test_unknown_marker_str_is_plain(self) -> None:
        err = UnknownMarkerError(7)
        assert err.marker_id == 7
        assert str(err) == "No displayed marker with id 7"

    def test_catchable_as_base(self) -> None:
        with pytest.raises(FieldcheckError):
            raise MissingRulesError("x")
