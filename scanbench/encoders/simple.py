"""
Plain linear barcode values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..checksum import ean13_check_digit, NUMERIC
from ..errors import InvalidInputError
from ..models import BarcodeFormat


@dataclass(frozen=True)
class SimpleResult:
    payload: str
    format: BarcodeFormat


def encode_simple(value: str, barcode_type: Union[str, BarcodeFormat] = BarcodeFormat.CODE128) -> SimpleResult:
    """
    Trim a value and complete 12-digit EAN-13 input with its check digit.

    Any other value passes through unchanged, so a full 13-digit EAN-13 is
    never re-checksummed.
    """
    try:
        fmt = BarcodeFormat(barcode_type)
    except ValueError:
        raise InvalidInputError(f"Unknown barcode type: {barcode_type!r}") from None
    code = (value or '').strip()

    if fmt is BarcodeFormat.EAN13 and len(code) == 12 and all(c in NUMERIC for c in code):
        code += str(ean13_check_digit(code))

    return SimpleResult(payload=code, format=fmt)
