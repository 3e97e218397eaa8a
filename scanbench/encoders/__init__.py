"""
Payload encoders: DataMatrix, weight, GS1 pack, simple and config-driven.
"""

from .datamatrix import (
    encode_data_matrix,
    extract_gtin_as_ean13,
    get_template,
    normalize_gtin,
    DataMatrixResult,
    Template,
    TEMPLATES,
    DEFAULT_TEMPLATE_ID,
)
from .weight import encode_weight_barcode, WeightBarcodeResult
from .gs1 import (
    encode_gs1,
    calculate_decimal_position,
    generate_unique_id,
    normalize_goods_id,
)
from .simple import encode_simple, SimpleResult
from .field_config import (
    encode_from_field_config,
    FieldConfig,
    FieldSpec,
    CheckMethod,
    FIELD_CONFIGS,
)

__all__ = [
    "encode_data_matrix",
    "extract_gtin_as_ean13",
    "get_template",
    "normalize_gtin",
    "DataMatrixResult",
    "Template",
    "TEMPLATES",
    "DEFAULT_TEMPLATE_ID",
    "encode_weight_barcode",
    "WeightBarcodeResult",
    "encode_gs1",
    "calculate_decimal_position",
    "generate_unique_id",
    "normalize_goods_id",
    "encode_simple",
    "SimpleResult",
    "encode_from_field_config",
    "FieldConfig",
    "FieldSpec",
    "CheckMethod",
    "FIELD_CONFIGS",
]
