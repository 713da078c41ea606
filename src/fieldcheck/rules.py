"""Built-in validation rules.

Each validator is a pure callable with the signature::

    def rule(value: str | None) -> ValidationResult:
        '''Fail with a fixed message, or pass silently.'''

The rule set is closed: ``RuleKey`` enumerates every key a field may
declare, and ``REGISTRY`` maps each key to its validator. ``lookup()``
returns ``None`` for anything else so callers branch on absence
explicitly instead of relying on a missing dict key.

Validators never raise. ``None`` (an absent value) is accepted
everywhere and treated like an empty string, except by ``positive``,
where it coerces to zero.
"""

import math
import re
from collections.abc import Callable, Mapping
from enum import StrEnum
from types import MappingProxyType

from fieldcheck.result import ValidationResult

# Type alias for a validator function
type Validator = Callable[[str | None], ValidationResult]


class RuleKey(StrEnum):
    """Every rule key a field may declare."""

    EMAIL = "email"
    REQUIRED = "required"
    STRING = "string"
    CREDIT_CARD = "creditCard"
    CVV = "cvv"
    POSITIVE = "positive"


# Failure messages
REQUIRED_MESSAGE = "Required"
EMAIL_MESSAGE = "Invalid email address"
EMPTY_MESSAGE = "Empty value"
INVALID_MESSAGE = "Invalid value"
CREDIT_CARD_MESSAGE = "Invalid credit card"
CVV_MESSAGE = "Invalid CVV"

# Sandbox card number accepted regardless of the issuer patterns
TEST_CARD_NUMBER = "4567456745674567"


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(value: str | None) -> ValidationResult:
    """Value must be present and not the empty string.

    Whitespace counts as present: ``" "`` passes, as does ``"0"``.
    """
    if value is None or value == "":
        return ValidationResult.fail(REQUIRED_MESSAGE)
    return ValidationResult.ok()


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Local part: dotted atoms or a quoted string.
# Domain: dotted atoms ending in a 2+ letter TLD, or a bracketed IPv4 literal.
_EMAIL_RE = re.compile(
    r"(?:[^<>()\[\]\\.,;:\s@\"]+(?:\.[^<>()\[\]\\.,;:\s@\"]+)*|\".+\")"
    r"@"
    r"(?:\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\]|(?:[a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,})"
)


def email(value: str | None) -> ValidationResult:
    """Value must be a complete email address."""
    if value is None or not _EMAIL_RE.fullmatch(value):
        return ValidationResult.fail(EMAIL_MESSAGE)
    return ValidationResult.ok()


_DIGIT_RE = re.compile(r"\d", re.ASCII)


def string(value: str | None) -> ValidationResult:
    """Value must be non-empty and contain no decimal digits."""
    if not value:
        return ValidationResult.fail(EMPTY_MESSAGE)
    if _DIGIT_RE.search(value):
        return ValidationResult.fail(INVALID_MESSAGE)
    return ValidationResult.ok()


# Visa, MasterCard, Discover, Amex, Diners Club, JCB
_CREDIT_CARD_RE = re.compile(
    r"(?:4[0-9]{12}(?:[0-9]{3})?"
    r"|5[1-5][0-9]{14}"
    r"|6(?:011|5[0-9][0-9])[0-9]{12}"
    r"|3[47][0-9]{13}"
    r"|3(?:0[0-5]|[68][0-9])[0-9]{11}"
    r"|(?:2131|1800|35\d{3})\d{11})",
    re.ASCII,
)


def credit_card(value: str | None) -> ValidationResult:
    """Value must be a card number from a major issuer.

    ``TEST_CARD_NUMBER`` always passes, even though it matches no issuer.
    """
    if not value:
        return ValidationResult.fail(EMPTY_MESSAGE)
    if _CREDIT_CARD_RE.fullmatch(value) or value == TEST_CARD_NUMBER:
        return ValidationResult.ok()
    return ValidationResult.fail(CREDIT_CARD_MESSAGE)


_CVV_RE = re.compile(r"\d{3,4}", re.ASCII)


def cvv(value: str | None) -> ValidationResult:
    """Value must be three or four decimal digits."""
    if not value:
        return ValidationResult.fail(EMPTY_MESSAGE)
    if not _CVV_RE.fullmatch(value):
        return ValidationResult.fail(CVV_MESSAGE)
    return ValidationResult.ok()


# ---------------------------------------------------------------------------
# Numeric
# ---------------------------------------------------------------------------

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_RADIX_RE = re.compile(r"0(?:([xX])[0-9a-fA-F]+|([oO])[0-7]+|([bB])[01]+)", re.ASCII)
_INFINITIES = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


def to_number(value: str | None) -> float:
    """Coerce a form value to a number the way browser scripts do.

    Surrounding whitespace is ignored and blank input is zero. Accepts
    decimal and exponent forms, unsigned ``0x``/``0o``/``0b`` literals,
    and ``Infinity``. Anything else is NaN, including Python-only
    spellings such as ``"inf"``, ``"nan"`` or ``"1_000"``.
    """
    if value is None:
        return 0.0
    text = value.strip()
    if not text:
        return 0.0
    if text in _INFINITIES:
        return _INFINITIES[text]
    if _DECIMAL_RE.fullmatch(text):
        return float(text)
    match = _RADIX_RE.fullmatch(text)
    if match:
        base = 16 if match.group(1) else 8 if match.group(2) else 2
        return float(int(text[2:], base))
    return math.nan


def positive(value: str | None) -> ValidationResult:
    """Value must coerce to a number that is zero or greater."""
    number = to_number(value)
    if math.isnan(number) or number < 0:
        return ValidationResult.fail(INVALID_MESSAGE)
    return ValidationResult.ok()


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

REGISTRY: Mapping[RuleKey, Validator] = MappingProxyType({
    RuleKey.EMAIL: email,
    RuleKey.REQUIRED: required,
    RuleKey.STRING: string,
    RuleKey.CREDIT_CARD: credit_card,
    RuleKey.CVV: cvv,
    RuleKey.POSITIVE: positive,
})


def lookup(name: str) -> Validator | None:
    """Return the validator registered under *name*, or ``None``.

    Matching is exact and case-sensitive. ``None`` means the key is not
    part of the rule set; the engine skips such keys rather than
    treating them as configuration errors.
    """
    try:
        key = RuleKey(name)
    except ValueError:
        return None
    return REGISTRY[key]
