"""
GS1 Pack Encoder

Builds the AI-tagged payload read by the register for packed goods:

    99MPUC<GS>240[GoodsId]<GS>37[Qty]<GS>98[Disc]<GS>21[UniqueID]<GS>97[DecPos]<GS>
    99MPUC<GS>240[GoodsId]<GS>3103[Weight]<GS>98[Disc]<GS>21[UniqueID]<GS>

Rules:
- GoodsId (AI 240) keeps digits only, at most 8
- Piece goods: AI 37 carries round(quantity * 10^decpos) over 8 digits and
  AI 97 carries the decimal position when it is non-zero
- Weight goods: AI 3103 carries grams over 6 digits, no AI 97
- A discount (AI 98) is always followed by a unique ID (AI 21)
"""

from __future__ import annotations

import random
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional, Union

from ..checksum import digits_only
from ..constants import (
    AI_DECIMAL_POSITION,
    AI_DISCOUNT,
    AI_GOODS_ID,
    AI_QUANTITY,
    AI_UNIQUE_ID,
    AI_WEIGHT,
    DISCOUNT_WIDTH,
    GOODS_ID_MAX_LENGTH,
    GS1_PREFIX,
    GS_CHAR,
    QUANTITY_WIDTH,
    UNIQUE_ID_ALPHABET,
    UNIQUE_ID_LENGTH,
    WEIGHT_WIDTH,
)
from ..errors import InvalidInputError, InvalidProductTypeError, MissingGoodsIdError
from ..models import ProductType
from .weight import pad_field


def generate_unique_id(rng: Optional[random.Random] = None) -> str:
    """8 characters drawn uniformly from [A-Z0-9]."""
    rng = rng or random.Random()
    return ''.join(rng.choice(UNIQUE_ID_ALPHABET) for _ in range(UNIQUE_ID_LENGTH))


def _to_decimal(quantity: Any) -> Decimal:
    try:
        value = Decimal(str(quantity))
    except InvalidOperation:
        raise InvalidInputError(f"Quantity is not a number: {quantity!r}") from None
    if not value.is_finite():
        raise InvalidInputError(f"Quantity is not finite: {quantity!r}")
    return value


def calculate_decimal_position(quantity: Any) -> int:
    """
    Count digits after the decimal point of a quantity.

    Example: 12.45 -> 2, 50 -> 0, 50.0 -> 0
    """
    exponent = _to_decimal(quantity).normalize().as_tuple().exponent
    return max(0, -exponent)


def normalize_goods_id(goods_id: Any) -> str:
    return digits_only(goods_id)[:GOODS_ID_MAX_LENGTH]


def coerce_product_type(product_type: Union[str, ProductType]) -> ProductType:
    try:
        return ProductType(product_type)
    except ValueError:
        raise InvalidProductTypeError(
            f'Invalid type: {product_type!r}, must be "piece" or "weight"'
        ) from None


def encode_gs1(
    goods_id: str,
    product_type: Union[str, ProductType],
    quantity: Optional[float] = None,
    weight: Optional[int] = None,
    discount: int = 0,
    unique_id: Optional[str] = None,
    decimal_position: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Generate a GS1 pack payload.

    Args:
        goods_id: Product ID, 1-8 digits after stripping non-digits
        product_type: 'piece' or 'weight'
        quantity: Quantity for piece goods (may be fractional)
        weight: Weight in grams for weight goods
        discount: Discount percentage (0-99)
        unique_id: AI 21 value; generated when a discount needs one
        decimal_position: Explicit AI 97 value, derived from quantity if None
        rng: Random source for the generated unique ID

    Returns:
        GS1 payload with <GS> after every segment

    Raises:
        MissingGoodsIdError: goods_id has no digits
        InvalidProductTypeError: product_type is neither piece nor weight
    """
    GS = GS_CHAR
    goods = normalize_goods_id(goods_id)
    if not goods:
        raise MissingGoodsIdError("GoodsId is required")

    kind = coerce_product_type(product_type)
    discount = int(discount or 0)

    code = GS1_PREFIX + GS + AI_GOODS_ID + goods + GS

    position = 0
    if kind is ProductType.PIECE:
        qty = _to_decimal(quantity if quantity is not None else 0)
        if decimal_position is None:
            position = calculate_decimal_position(qty)
        else:
            position = int(decimal_position)
            if not 0 <= position <= 9:
                raise InvalidInputError(f"Decimal position must be 0-9, got {decimal_position!r}")
        raw = int((qty * (10 ** position)).to_integral_value(rounding=ROUND_HALF_UP))
        code += AI_QUANTITY + pad_field(raw, QUANTITY_WIDTH, 'Quantity') + GS
    else:
        grams = weight if weight is not None else 0
        code += AI_WEIGHT + pad_field(grams, WEIGHT_WIDTH, 'Weight') + GS

    if discount > 0:
        code += AI_DISCOUNT + pad_field(discount, DISCOUNT_WIDTH, 'Discount') + GS
        code += AI_UNIQUE_ID + (unique_id or generate_unique_id(rng)) + GS

    if position > 0:
        code += AI_DECIMAL_POSITION + str(position) + GS

    return code
