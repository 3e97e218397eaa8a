"""
Scanner Test Payload Generator

Synthesizes DataMatrix, GS1 and linear-barcode payloads in real point-of-sale
formats and cycles them on a timer, so a scanner and cash register can be
exercised against controlled, repeatable inputs.
"""

from .checksum import ean13_check_digit, core_check_digit
from .encoders import (
    encode_data_matrix,
    encode_weight_barcode,
    encode_gs1,
    encode_simple,
    encode_from_field_config,
    calculate_decimal_position,
    extract_gtin_as_ean13,
    generate_unique_id,
    TEMPLATES,
    FIELD_CONFIGS,
)
from .mutator import corrupt, corrupt_with_report, CorruptionMethod, CorruptionResult
from .models import Item, Folder, ItemKind, BarcodeFormat, ProductType
from .activity import ActivityLog, ActivityEntry
from .sources import (
    Catalog,
    DemoSequence,
    propose_gs1_items,
    propose_weight_items,
    propose_datamatrix_items,
    recompute_payload,
    BatchResult,
    DiscountPolicy,
    MagnitudePolicy,
)
from .rotation import (
    RotationController,
    RotationState,
    RotationSession,
    DoubleScanMode,
    HistoryEntry,
)
from .errors import (
    ErrorCode,
    ScanBenchError,
    ValidationError,
    NothingSelectedError,
)

__version__ = "1.0.0"
__all__ = [
    "ean13_check_digit",
    "core_check_digit",
    "encode_data_matrix",
    "encode_weight_barcode",
    "encode_gs1",
    "encode_simple",
    "encode_from_field_config",
    "calculate_decimal_position",
    "extract_gtin_as_ean13",
    "generate_unique_id",
    "TEMPLATES",
    "FIELD_CONFIGS",
    "corrupt",
    "corrupt_with_report",
    "CorruptionMethod",
    "CorruptionResult",
    "Item",
    "Folder",
    "ItemKind",
    "BarcodeFormat",
    "ProductType",
    "ActivityLog",
    "ActivityEntry",
    "Catalog",
    "DemoSequence",
    "propose_gs1_items",
    "propose_weight_items",
    "propose_datamatrix_items",
    "recompute_payload",
    "BatchResult",
    "DiscountPolicy",
    "MagnitudePolicy",
    "RotationController",
    "RotationState",
    "RotationSession",
    "DoubleScanMode",
    "HistoryEntry",
    "ErrorCode",
    "ScanBenchError",
    "ValidationError",
    "NothingSelectedError",
]
