"""
Item sources for rotation: catalog folders, demo values and item proposal.
"""

from .catalog import Catalog, DemoSequence
from .proposals import (
    propose_gs1_items,
    propose_weight_items,
    propose_datamatrix_items,
    propose_simple_item,
    recompute_payload,
    clean_goods_ids,
    BatchResult,
    DiscountPolicy,
    MagnitudePolicy,
    DrawMode,
)

__all__ = [
    "Catalog",
    "DemoSequence",
    "propose_gs1_items",
    "propose_weight_items",
    "propose_datamatrix_items",
    "propose_simple_item",
    "recompute_payload",
    "clean_goods_ids",
    "BatchResult",
    "DiscountPolicy",
    "MagnitudePolicy",
    "DrawMode",
]
