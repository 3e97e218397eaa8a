"""
Item proposal: randomized sampling that feeds the pure encoders.

Discount, quantity and weight draws happen here, before an encoder is
called, so every stored Item can be re-encoded to the same payload.
One bad entry never aborts a batch; it is recorded as EncodingSkipped.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Union

from ..checksum import digits_only
from ..constants import GOODS_ID_MAX_LENGTH, WEIGHT_PREFIXES
from ..encoders import (
    calculate_decimal_position,
    encode_data_matrix,
    encode_gs1,
    encode_simple,
    encode_weight_barcode,
    generate_unique_id,
    get_template,
    normalize_gtin,
)
from ..encoders.gs1 import coerce_product_type
from ..errors import (
    EncodingSkipped,
    InvalidInputError,
    InvalidPrefixError,
    InvalidRangeError,
    MissingGoodsIdError,
    ValidationError,
)
from ..models import BarcodeFormat, Item, ItemKind, ProductType


logger = logging.getLogger(__name__)


class DrawMode(str, Enum):
    FIXED = "fixed"
    RANDOM = "random"


@dataclass(frozen=True)
class DiscountPolicy:
    """Fixed discount or an inclusive random range (bounds may be given reversed)."""
    mode: DrawMode = DrawMode.FIXED
    fixed: int = 0
    minimum: int = 0
    maximum: int = 30

    @classmethod
    def fixed_value(cls, value: int) -> "DiscountPolicy":
        return cls(mode=DrawMode.FIXED, fixed=int(value))

    @classmethod
    def random_range(cls, minimum: int, maximum: int) -> "DiscountPolicy":
        return cls(mode=DrawMode.RANDOM, minimum=int(minimum), maximum=int(maximum))

    def draw(self, rng: random.Random) -> int:
        if self.mode is DrawMode.FIXED:
            return self.fixed
        low, high = sorted((self.minimum, self.maximum))
        return rng.randint(low, high)


@dataclass(frozen=True)
class MagnitudePolicy:
    """
    Quantity or weight source.

    Random quantities are rounded to 2 decimals; random weights are whole
    grams drawn inclusively.
    """
    mode: DrawMode = DrawMode.RANDOM
    fixed: float = 0
    minimum: float = 0
    maximum: float = 0

    @classmethod
    def fixed_value(cls, value: float) -> "MagnitudePolicy":
        return cls(mode=DrawMode.FIXED, fixed=value)

    @classmethod
    def random_range(cls, minimum: float, maximum: float) -> "MagnitudePolicy":
        return cls(mode=DrawMode.RANDOM, minimum=minimum, maximum=maximum)

    def validate(self) -> None:
        if self.mode is DrawMode.RANDOM and self.minimum >= self.maximum:
            raise InvalidRangeError(
                f"Minimum {self.minimum} must be less than maximum {self.maximum}"
            )

    def draw_quantity(self, rng: random.Random) -> float:
        if self.mode is DrawMode.FIXED:
            return self.fixed
        return round(self.minimum + rng.random() * (self.maximum - self.minimum), 2)

    def draw_weight(self, rng: random.Random) -> int:
        if self.mode is DrawMode.FIXED:
            return int(self.fixed)
        return rng.randint(int(self.minimum), int(self.maximum))


DEFAULT_QUANTITY = MagnitudePolicy.random_range(1, 100)
DEFAULT_WEIGHT = MagnitudePolicy.random_range(100, 5000)


@dataclass
class BatchResult:
    """Items produced by a batch and the entries that were skipped."""
    items: List[Item] = field(default_factory=list)
    skipped: List[EncodingSkipped] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return bool(self.items)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def skip(self, source_value: str, exc: ValidationError, index: Optional[int] = None) -> None:
        record = EncodingSkipped(source_value, exc.message or str(exc), index)
        self.skipped.append(record)
        self.errors.append(record.message)
        logger.warning("Skipped %s", record.message)


def _lines(raw: Union[str, Iterable[str]]) -> List[str]:
    if isinstance(raw, str):
        return raw.splitlines()
    return [str(line) for line in raw]


def clean_goods_ids(raw: Union[str, Iterable[str]]) -> List[str]:
    """Digits-only goods IDs, keeping entries of 1-8 digits."""
    cleaned = (digits_only(line.strip()) for line in _lines(raw))
    return [g for g in cleaned if 0 < len(g) <= GOODS_ID_MAX_LENGTH]


def _check_variations(variations: int) -> int:
    variations = int(variations)
    if variations < 1:
        raise InvalidInputError(f"Variations must be at least 1, got {variations}")
    return variations


def propose_gs1_items(
    goods_ids: Union[str, Iterable[str]],
    product_type: Union[str, ProductType] = ProductType.PIECE,
    variations: int = 10,
    magnitude: Optional[MagnitudePolicy] = None,
    discount: Optional[DiscountPolicy] = None,
    rng: Optional[random.Random] = None,
) -> BatchResult:
    """
    Generate GS1 pack items, `variations` per goods ID.

    Raises:
        MissingGoodsIdError: no usable goods ID in the input
        InvalidProductTypeError: unknown product type
        InvalidRangeError: random range with min >= max
    """
    rng = rng or random.Random()
    kind = coerce_product_type(product_type)
    goods_list = clean_goods_ids(goods_ids)
    if not goods_list:
        raise MissingGoodsIdError("Enter at least one GoodsId (1-8 digits)")

    variations = _check_variations(variations)
    magnitude = magnitude or (DEFAULT_QUANTITY if kind is ProductType.PIECE else DEFAULT_WEIGHT)
    magnitude.validate()
    discount = discount or DiscountPolicy()

    result = BatchResult()
    for goods_id in goods_list:
        for i in range(variations):
            disc = discount.draw(rng)
            quantity = magnitude.draw_quantity(rng) if kind is ProductType.PIECE else None
            weight = magnitude.draw_weight(rng) if kind is ProductType.WEIGHT else None
            unique_id = generate_unique_id(rng) if disc > 0 else None

            try:
                position = calculate_decimal_position(quantity) if quantity is not None else 0
                payload = encode_gs1(
                    goods_id,
                    kind,
                    quantity=quantity,
                    weight=weight,
                    discount=disc,
                    unique_id=unique_id,
                    decimal_position=position if quantity is not None else None,
                )
            except ValidationError as exc:
                result.skip(goods_id, exc, i)
                continue

            result.items.append(Item(
                source_value=goods_id,
                kind=ItemKind.GS1,
                payload=payload,
                format=BarcodeFormat.QRCODE,
                product_type=kind,
                quantity=quantity,
                weight=weight,
                discount=disc,
                unique_id=unique_id,
                decimal_position=position,
            ))

    return result


def propose_weight_items(
    plus: Union[str, Iterable[str]],
    prefixes: Sequence[str] = ('77',),
    variations: int = 10,
    magnitude: Optional[MagnitudePolicy] = None,
    discount: Optional[DiscountPolicy] = None,
    rng: Optional[random.Random] = None,
) -> BatchResult:
    """
    Generate weight-carousel items for every PLU x prefix.

    Only prefix 49 encodes the discount; other prefixes get 0.
    """
    rng = rng or random.Random()
    plu_list = [p for p in (digits_only(line.strip()) for line in _lines(plus)) if p]
    if not plu_list:
        raise InvalidInputError("Enter at least one PLU")
    prefixes = [str(p) for p in prefixes]
    if not prefixes:
        raise InvalidPrefixError("Select at least one prefix")
    for prefix in prefixes:
        if prefix not in WEIGHT_PREFIXES:
            raise InvalidPrefixError(f"Invalid weight prefix: {prefix!r}")

    variations = _check_variations(variations)
    magnitude = magnitude or DEFAULT_WEIGHT
    magnitude.validate()
    discount = discount or DiscountPolicy()

    result = BatchResult()
    for plu in plu_list:
        for i in range(variations):
            weight = magnitude.draw_weight(rng)
            for prefix in prefixes:
                disc = discount.draw(rng) if prefix == '49' else 0
                try:
                    barcode = encode_weight_barcode(prefix, plu, weight, disc)
                except ValidationError as exc:
                    result.skip(f"{prefix}/{plu}", exc, i)
                    continue
                result.items.append(Item(
                    source_value=plu,
                    kind=ItemKind.WEIGHT,
                    payload=barcode.payload,
                    format=barcode.format,
                    prefix=prefix,
                    weight=weight,
                    discount=disc,
                ))

    return result


def propose_datamatrix_items(
    lines: Union[str, Iterable[str]],
    template_id: Optional[str] = None,
) -> BatchResult:
    """
    Library entries from GTIN lines, de-duplicated in input order.

    Payloads are left empty; they are encoded at display time.
    """
    template = get_template(template_id)
    result = BatchResult()
    seen = set()
    for index, line in enumerate(_lines(lines)):
        gtin = line.strip()
        if not gtin:
            continue
        try:
            normalize_gtin(gtin)
        except ValidationError as exc:
            result.skip(gtin, exc, index)
            continue
        if gtin in seen:
            continue
        seen.add(gtin)
        result.items.append(Item(
            source_value=gtin,
            kind=ItemKind.DATAMATRIX,
            format=BarcodeFormat.DATAMATRIX,
            template_id=template.id,
        ))
    return result


def propose_simple_item(value: str, barcode_type: Union[str, BarcodeFormat] = BarcodeFormat.CODE128) -> Item:
    barcode = encode_simple(value, barcode_type)
    if not barcode.payload:
        raise InvalidInputError("Barcode value is required")
    return Item(
        source_value=value.strip(),
        kind=ItemKind.SIMPLE,
        payload=barcode.payload,
        format=barcode.format,
    )


def recompute_payload(item: Item, rng: Optional[random.Random] = None) -> str:
    """
    Re-encode an item from its stored fields.

    GS1, weight and simple items reproduce their payload exactly; DataMatrix
    items draw fresh serial tails from rng.
    """
    if item.kind is ItemKind.GS1:
        return encode_gs1(
            item.source_value,
            item.product_type or ProductType.PIECE,
            quantity=item.quantity,
            weight=item.weight,
            discount=item.discount,
            unique_id=item.unique_id,
            decimal_position=item.decimal_position if item.product_type is ProductType.PIECE else None,
        )
    if item.kind is ItemKind.WEIGHT:
        return encode_weight_barcode(item.prefix, item.source_value, item.weight, item.discount).payload
    if item.kind is ItemKind.SIMPLE:
        return encode_simple(item.source_value, item.format).payload
    return encode_data_matrix(item.source_value, item.template_id, rng).payload
