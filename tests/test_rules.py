"""Tests for fieldcheck.rules — built-in validators and registry lookup."""

import pytest

from fieldcheck.result import ValidationResult
from fieldcheck.rules import (
    REGISTRY,
    TEST_CARD_NUMBER,
    RuleKey,
    credit_card,
    cvv,
    email,
    lookup,
    positive,
    required,
    string,
    to_number,
)

# ---------------------------------------------------------------------------
# Individual rule tests
# ---------------------------------------------------------------------------


class TestRequired:
    def test_empty_string(self) -> None:
        assert required("") == ValidationResult(error=True, message="Required")

    def test_none(self) -> None:
        assert required(None).error is True

    def test_zero_passes(self) -> None:
        assert required("0").error is False

    def test_whitespace_passes(self) -> None:
        assert required(" ").error is False

    def test_pass_has_no_message(self) -> None:
        assert required("hello").message is None


class TestEmail:
    def test_valid(self) -> None:
        assert email("user@example.com").error is False

    def test_valid_with_dots(self) -> None:
        assert email("first.last@sub.domain.org").error is False

    def test_quoted_local_part(self) -> None:
        assert email('"john doe"@example.com').error is False

    def test_ipv4_literal_domain(self) -> None:
        assert email("user@[192.168.0.1]").error is False

    def test_single_letter_tld(self) -> None:
        assert email("user@example.c").error is True

    def test_missing_at(self) -> None:
        assert email("userexample.com").error is True

    def test_leading_dot(self) -> None:
        assert email(".user@example.com").error is True

    def test_trailing_newline(self) -> None:
        assert email("user@example.com\n").error is True

    def test_empty_and_none(self) -> None:
        assert email("") == ValidationResult(error=True, message="Invalid email address")
        assert email(None).error is True


class TestString:
    def test_letters(self) -> None:
        assert string("abc").error is False

    def test_contains_digit(self) -> None:
        assert string("abc1") == ValidationResult(error=True, message="Invalid value")

    def test_empty(self) -> None:
        assert string("") == ValidationResult(error=True, message="Empty value")

    def test_none(self) -> None:
        assert string(None).message == "Empty value"

    def test_non_ascii_digit_is_not_a_digit(self) -> None:
        assert string("abc٣").error is False


class TestCreditCard:
    @pytest.mark.parametrize(
        "number",
        [
            "4111111111111111",  # Visa
            "4222222222222",  # Visa, 13 digits
            "5500000000000004",  # MasterCard
            "340000000000009",  # Amex
            "30000000000004",  # Diners Club
            "6011000000000004",  # Discover
            "3530111333300000",  # JCB
        ],
    )
    def test_issuer_numbers(self, number: str) -> None:
        assert credit_card(number).error is False

    def test_test_card_bypass(self) -> None:
        assert TEST_CARD_NUMBER == "4567456745674567"
        assert credit_card("4567456745674567").error is False

    def test_short_number(self) -> None:
        assert credit_card("1234") == ValidationResult(error=True, message="Invalid credit card")

    def test_spaces_rejected(self) -> None:
        assert credit_card("4111 1111 1111 1111").error is True

    def test_empty(self) -> None:
        assert credit_card("").message == "Empty value"


class TestCvv:
    def test_three_digits(self) -> None:
        assert cvv("123").error is False

    def test_four_digits(self) -> None:
        assert cvv("1234").error is False

    def test_too_short(self) -> None:
        assert cvv("12") == ValidationResult(error=True, message="Invalid CVV")

    def test_letters(self) -> None:
        assert cvv("12a").error is True

    def test_empty(self) -> None:
        assert cvv("").message == "Empty value"


class TestPositive:
    def test_zero(self) -> None:
        assert positive("0").error is False

    def test_decimal(self) -> None:
        assert positive("3.5").error is False

    def test_negative(self) -> None:
        assert positive("-1") == ValidationResult(error=True, message="Invalid value")

    def test_not_a_number(self) -> None:
        assert positive("abc").error is True

    def test_negative_zero(self) -> None:
        assert positive("-0").error is False

    def test_blank_coerces_to_zero(self) -> None:
        assert positive("").error is False
        assert positive("  ").error is False

    def test_pass_has_no_message(self) -> None:
        assert positive("7").message is None


class TestToNumber:
    def test_surrounding_whitespace(self) -> None:
        assert to_number(" 42 ") == 42.0

    def test_exponent(self) -> None:
        assert to_number("1e3") == 1000.0

    def test_leading_dot(self) -> None:
        assert to_number(".5") == 0.5

    def test_hex(self) -> None:
        assert to_number("0x10") == 16.0

    def test_binary_and_octal(self) -> None:
        assert to_number("0b101") == 5.0
        assert to_number("0o17") == 15.0

    def test_signed_hex_is_nan(self) -> None:
        assert to_number("-0x10") != to_number("-0x10")

    def test_infinity(self) -> None:
        assert to_number("Infinity") == float("inf")
        assert to_number("-Infinity") == float("-inf")

    @pytest.mark.parametrize("text", ["inf", "nan", "1_000", "1,5", "12px"])
    def test_python_only_spellings_are_nan(self, text: str) -> None:
        number = to_number(text)
        assert number != number

    def test_none_is_zero(self) -> None:
        assert to_number(None) == 0.0


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_closed_rule_set(self) -> None:
        assert set(REGISTRY) == {
            "email",
            "required",
            "string",
            "creditCard",
            "cvv",
            "positive",
        }

    def test_read_only(self) -> None:
        with pytest.raises(TypeError):
            REGISTRY["custom"] = required  # type: ignore[index]

    def test_lookup_known(self) -> None:
        assert lookup("creditCard") is credit_card
        assert lookup(RuleKey.CVV) is cvv

    @pytest.mark.parametrize("name", ["creditcard", " email", "email ", "", "unknown"])
    def test_lookup_unknown_is_none(self, name: str) -> None:
        assert lookup(name) is None

    @pytest.mark.parametrize("key", list(RuleKey))
    @pytest.mark.parametrize("value", ["", "abc", "0", "-1", "user@example.com", None])
    def test_validators_are_pure(self, key: RuleKey, value: str | None) -> None:
        validator = REGISTRY[key]
        assert validator(value) == validator(value)

    @pytest.mark.parametrize("key", list(RuleKey))
    def test_message_only_on_failure(self, key: RuleKey) -> None:
        for value in ("", "abc", "123", "4567456745674567", None):
            result = REGISTRY[key](value)
            assert (result.message is not None) == result.error
