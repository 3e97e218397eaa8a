"""
Weight barcode encoder for scale-printed labels.

Layouts by prefix:
- 77: 77 + PLU(6) + weight(7) + "0"                     16 chars, CODE128
- 49: 49 + PLU(9) + discount(2) + weight(5) + check     19 chars, CODE128
- 22: 22 + PLU(5) + weight(5) + check                   13 chars, EAN13

The 77 family carries a literal "0" in the check position.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..checksum import core_check_digit, ean13_check_digit, NUMERIC
from ..errors import FieldOverflowError, InvalidInputError, InvalidPrefixError
from ..models import BarcodeFormat


CAS_FIXED_CHECK = '0'


@dataclass(frozen=True)
class WeightBarcodeResult:
    payload: str
    format: BarcodeFormat
    prefix: str
    plu: str
    weight: int
    discount: int


def pad_field(value: Any, width: int, name: str) -> str:
    """Zero-pad a numeric field, rejecting non-digits and overflow."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip() if value is not None else ''
    if not text or not all(c in NUMERIC for c in text):
        raise InvalidInputError(f"{name} must be a non-negative integer, got {value!r}")
    if len(text) > width:
        raise FieldOverflowError(f"{name} {text} exceeds {width} digits")
    return text.zfill(width)


def encode_weight_barcode(
    prefix: str,
    plu: str,
    weight_grams: int,
    discount: int = 0,
) -> WeightBarcodeResult:
    """
    Build a weight barcode.

    Args:
        prefix: '77', '49' or '22'
        plu: Product lookup code
        weight_grams: Weight in grams
        discount: Discount percent, only encoded by prefix 49

    Returns:
        WeightBarcodeResult with payload and render format

    Raises:
        InvalidPrefixError: prefix is not one of the three families
    """
    prefix = str(prefix).strip()
    discount = discount or 0

    if prefix == '77':
        code = '77' + pad_field(plu, 6, 'PLU') + pad_field(weight_grams, 7, 'Weight')
        payload = code + CAS_FIXED_CHECK
        fmt = BarcodeFormat.CODE128
    elif prefix == '49':
        code = (
            '49'
            + pad_field(plu, 9, 'PLU')
            + pad_field(discount, 2, 'Discount')
            + pad_field(weight_grams, 5, 'Weight')
        )
        payload = code + str(core_check_digit(code))
        fmt = BarcodeFormat.CODE128
    elif prefix == '22':
        code = '22' + pad_field(plu, 5, 'PLU') + pad_field(weight_grams, 5, 'Weight')
        payload = code + str(ean13_check_digit(code))
        fmt = BarcodeFormat.EAN13
    else:
        raise InvalidPrefixError(f"Invalid weight prefix: {prefix!r} (expected 77, 49 or 22)")

    return WeightBarcodeResult(
        payload=payload,
        format=fmt,
        prefix=prefix,
        plu=str(plu).strip(),
        weight=int(weight_grams),
        discount=int(discount),
    )
