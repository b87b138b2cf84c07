"""Check-digit algorithms for pre-extracted digit strings.

Every checker expects the check digit as the last character and returns
``False`` when it does not match. Malformed input (empty, or anything other
than ASCII ``0``-``9``) raises :class:`InvalidDigitStringError` instead.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

DIGITS_RE = re.compile(r"[0-9]+")

# Cayley table of the dihedral group D5.
VERHOEFF_D: tuple[tuple[int, ...], ...] = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    (1, 2, 3, 4, 0, 6, 7, 8, 9, 5),
    (2, 3, 4, 0, 1, 7, 8, 9, 5, 6),
    (3, 4, 0, 1, 2, 8, 9, 5, 6, 7),
    (4, 0, 1, 2, 3, 9, 5, 6, 7, 8),
    (5, 9, 8, 7, 6, 0, 4, 3, 2, 1),
    (6, 5, 9, 8, 7, 1, 0, 4, 3, 2),
    (7, 6, 5, 9, 8, 2, 1, 0, 4, 3),
    (8, 7, 6, 5, 9, 3, 2, 1, 0, 4),
    (9, 8, 7, 6, 5, 4, 3, 2, 1, 0),
)

# Position-dependent permutations, cycling every 8 digits.
VERHOEFF_P: tuple[tuple[int, ...], ...] = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    (1, 5, 7, 6, 2, 8, 3, 0, 9, 4),
    (5, 8, 0, 3, 7, 9, 6, 1, 4, 2),
    (8, 9, 1, 6, 0, 4, 3, 5, 2, 7),
    (9, 4, 5, 3, 1, 2, 6, 8, 7, 0),
    (4, 2, 8, 6, 5, 7, 3, 9, 0, 1),
    (2, 7, 9, 3, 8, 0, 6, 4, 1, 5),
    (7, 0, 4, 6, 9, 1, 3, 2, 5, 8),
)

VERHOEFF_INV: tuple[int, ...] = (0, 4, 3, 2, 1, 5, 6, 7, 8, 9)


class InvalidDigitStringError(ValueError):
    """Raised when a checker receives an empty or non-digit string."""


def parse_digits(value: str) -> list[int]:
    """Return the digits of value as ints, rejecting anything but ASCII 0-9.

    The raw value is never included in the error message.
    """
    if not value:
        raise InvalidDigitStringError("Expected a non-empty digit string")
    if DIGITS_RE.fullmatch(value) is None:
        raise InvalidDigitStringError(
            f"Expected only ASCII digits 0-9 in a string of length {len(value)}"
        )
    return [ord(ch) - 48 for ch in value]


def _iso7064_state(digits: Sequence[int]) -> int:
    check_value = 10
    for digit in digits:
        total = (digit + check_value) % 10
        if total == 0:
            check_value = (10 * 2) % 11
        else:
            check_value = (total * 2) % 11
    return 0 if check_value == 1 else 11 - check_value


def iso7064_check(value: str) -> bool:
    """Return True if value carries a valid ISO 7064 (MOD 11,10) check digit."""
    digits = parse_digits(value)
    return _iso7064_state(digits[:-1]) == digits[-1]


def iso7064_check_digit(payload: str) -> int:
    """Return the ISO 7064 (MOD 11,10) check digit to append to payload."""
    return _iso7064_state(parse_digits(payload))


def luhn_check(value: str) -> bool:
    """Return True if value passes the Luhn (mod 10) checksum."""
    total = 0
    double_digit = False
    for digit in reversed(parse_digits(value)):
        if double_digit:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
        double_digit = not double_digit

    return total % 10 == 0


def luhn_check_digit(payload: str) -> int:
    """Return the Luhn check digit to append to payload."""
    total = 0
    # The rightmost payload digit sits next to the check digit, so it is doubled.
    for index, digit in enumerate(reversed(parse_digits(payload))):
        if index % 2 == 0:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return (10 - total % 10) % 10


def reverse_multiply_and_sum(digits: Sequence[int], base: int) -> int:
    """Return sum(digits[i] * (base - i)).

    This is the weighted-sum primitive of positional mod-11 style schemes.
    Reducing the total and comparing it with a check digit is left to the
    caller. Nothing is validated, so negative weights and out-of-range digits
    go straight into the sum.
    """
    total = 0
    for index, digit in enumerate(digits):
        total += digit * (base - index)
    return total


def verhoeff_check(value: str) -> bool:
    """Return True if value carries a valid Verhoeff check digit."""
    checksum = 0
    for index, digit in enumerate(reversed(parse_digits(value))):
        checksum = VERHOEFF_D[checksum][VERHOEFF_P[index % 8][digit]]
    return checksum == 0


def verhoeff_check_digit(payload: str) -> int:
    """Return the Verhoeff check digit to append to payload."""
    checksum = 0
    for index, digit in enumerate(reversed(parse_digits(payload))):
        checksum = VERHOEFF_D[checksum][VERHOEFF_P[(index + 1) % 8][digit]]
    return VERHOEFF_INV[checksum]
