"""
Check Digit Functions

Implements the check digit algorithms used by the payload encoders:
- EAN-13 mod-10 over exactly 12 digits (weights 1,3 from the left)
- Core modulus for the fixed-length weight/Code128 families
  (weights 3,1 applied right-to-left over any number of digits)

The two algorithms agree on 12-digit input; the core variant also covers the
18-digit Code128 weight layouts.
"""

from __future__ import annotations

from typing import Any

from ..errors import InvalidInputError


NUMERIC = frozenset('0123456789')


def is_numeric(value: str) -> bool:
    return bool(value) and all(c in NUMERIC for c in value)


def ean13_check_digit(digits12: str) -> int:
    """
    Calculate the EAN-13 check digit.

    Algorithm:
    1. From left to right (1-indexed), odd positions weigh 1, even weigh 3
    2. Sum all products
    3. Check digit = (10 - (sum mod 10)) mod 10

    Args:
        digits12: Exactly 12 numeric characters

    Returns:
        Calculated check digit (0-9)

    Raises:
        InvalidInputError: input is not 12 ASCII digits
    """
    if not isinstance(digits12, str) or len(digits12) != 12 or not is_numeric(digits12):
        raise InvalidInputError("EAN-13 check digit needs exactly 12 digits")

    total = 0
    for i, digit in enumerate(digits12):
        multiplier = 1 if i % 2 == 0 else 3
        total += int(digit) * multiplier

    return (10 - (total % 10)) % 10


def core_check_digit(digits: str) -> int:
    """
    Calculate the core modulus check digit.

    From right to left, alternate multipliers 3 and 1 (the rightmost data
    digit weighs 3), then take (10 - (sum mod 10)) mod 10.

    Args:
        digits: Non-empty numeric string without check digit

    Returns:
        Calculated check digit (0-9)
    """
    if not isinstance(digits, str) or not is_numeric(digits):
        raise InvalidInputError("Input must be a non-empty numeric string")

    total = 0
    for i, digit in enumerate(reversed(digits)):
        multiplier = 3 if i % 2 == 0 else 1
        total += int(digit) * multiplier

    return (10 - (total % 10)) % 10


def digits_only(value: Any) -> str:
    """Strip everything but ASCII digits."""
    if value is None:
        return ""
    return "".join(c for c in str(value) if c in NUMERIC)
