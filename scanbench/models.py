"""
Catalog data model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4


class BarcodeFormat(str, Enum):
    """Render hint handed to the external renderer."""
    CODE128 = "CODE128"
    EAN13 = "EAN13"
    UPC = "UPC"
    ITF14 = "ITF14"
    DATAMATRIX = "DATAMATRIX"
    QRCODE = "QRCODE"


class ItemKind(str, Enum):
    DATAMATRIX = "DM"
    WEIGHT = "WEIGHT"
    GS1 = "GS1"
    SIMPLE = "SIMPLE"


class ProductType(str, Enum):
    PIECE = "piece"
    WEIGHT = "weight"


def new_item_id() -> str:
    return uuid4().hex


@dataclass
class Item:
    """
    One catalog barcode entry.

    Attributes:
        payload: Final encoded string. DataMatrix library entries keep None
            here and are encoded at display time (serial tails are random).
        source_value: GTIN, PLU or GoodsId the payload was built from
        kind: Encoder family
        format: Render hint for the payload
        prefix: Weight barcode prefix (77, 49, 22)
        template_id: DataMatrix template
        product_type: GS1 product type
        active: Selection flag used when building a rotation list
    """
    source_value: str
    kind: ItemKind
    payload: Optional[str] = None
    format: BarcodeFormat = BarcodeFormat.CODE128
    id: str = field(default_factory=new_item_id)
    prefix: Optional[str] = None
    template_id: Optional[str] = None
    product_type: Optional[ProductType] = None
    quantity: Optional[float] = None
    weight: Optional[int] = None
    discount: int = 0
    unique_id: Optional[str] = None
    decimal_position: int = 0
    active: bool = True

    def describe(self) -> str:
        """Short human-readable summary for info panels."""
        parts = [f"{self.kind.value} {self.source_value}"]
        if self.quantity is not None:
            parts.append(f"qty {self.quantity}")
        if self.weight is not None:
            parts.append(f"{self.weight} g")
        if self.discount > 0:
            parts.append(f"-{self.discount}%")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'id': self.id,
            'kind': self.kind.value,
            'payload': self.payload,
            'source_value': self.source_value,
            'format': self.format.value,
            'prefix': self.prefix,
            'template_id': self.template_id,
            'product_type': self.product_type.value if self.product_type else None,
            'quantity': self.quantity,
            'weight': self.weight,
            'discount': self.discount,
            'unique_id': self.unique_id,
            'decimal_position': self.decimal_position,
            'active': self.active,
        }


@dataclass
class Folder:
    """User-curated collection of items."""
    name: str
    items: List[Item] = field(default_factory=list)
    id: str = field(default_factory=new_item_id)

    @property
    def active_items(self) -> List[Item]:
        return [item for item in self.items if item.active]
