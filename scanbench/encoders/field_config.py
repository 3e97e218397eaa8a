"""
Config-driven fixed-width barcodes.

Each configuration declares a prefix, an ordered list of numeric sub-fields
with fixed widths, and how the trailing check digit is produced.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple

from ..checksum import core_check_digit, digits_only, ean13_check_digit
from ..models import BarcodeFormat


class CheckMethod(str, Enum):
    FIXED = "fixed"
    EAN13 = "ean13"
    CORE = "core"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    length: int
    label: str = ""


@dataclass(frozen=True)
class FieldConfig:
    id: str
    name: str
    prefix: str
    fields: Tuple[FieldSpec, ...]
    check: CheckMethod
    format: BarcodeFormat
    fixed_check: Optional[str] = None

    @property
    def length(self) -> int:
        return len(self.prefix) + sum(f.length for f in self.fields) + 1


FIELD_CONFIGS: Dict[str, FieldConfig] = {
    'cas_16_weight': FieldConfig(
        id='cas_16_weight',
        name='CAS scale, Code128 (16)',
        prefix='77',
        fields=(FieldSpec('plu', 6, 'PLU'), FieldSpec('weight', 7, 'Weight, g')),
        check=CheckMethod.FIXED,
        fixed_check='0',
        format=BarcodeFormat.CODE128,
    ),
    'code128_19_weight': FieldConfig(
        id='code128_19_weight',
        name='Weight with discount, Code128 (19)',
        prefix='49',
        fields=(
            FieldSpec('plu', 9, 'PLU'),
            FieldSpec('discount', 2, 'Discount, %'),
            FieldSpec('weight', 5, 'Weight, g'),
        ),
        check=CheckMethod.CORE,
        format=BarcodeFormat.CODE128,
    ),
    'code128_19_piece': FieldConfig(
        id='code128_19_piece',
        name='Piece with discount, Code128 (19)',
        prefix='48',
        fields=(
            FieldSpec('plu', 9, 'PLU'),
            FieldSpec('discount', 2, 'Discount, %'),
            FieldSpec('quantity', 5, 'Quantity'),
        ),
        check=CheckMethod.CORE,
        format=BarcodeFormat.CODE128,
    ),
    'ean13_weight': FieldConfig(
        id='ean13_weight',
        name='Weight, EAN-13',
        prefix='22',
        fields=(FieldSpec('plu', 5, 'PLU'), FieldSpec('weight', 5, 'Weight, g')),
        check=CheckMethod.EAN13,
        format=BarcodeFormat.EAN13,
    ),
}


def _check_digit(config: FieldConfig, code: str) -> str:
    if config.check is CheckMethod.FIXED:
        return config.fixed_check or '0'
    if config.check is CheckMethod.EAN13:
        return str(ean13_check_digit(code))
    return str(core_check_digit(code))


def encode_from_field_config(
    config_id: str,
    field_values: Mapping[str, object],
    simulate_error: bool = False,
    rng: Optional[random.Random] = None,
) -> Optional[str]:
    """
    Assemble a payload from a field configuration.

    Args:
        config_id: Key into FIELD_CONFIGS
        field_values: Raw value per field name (non-digits are stripped)
        simulate_error: Replace a computed check digit with a different digit

    Returns:
        The payload, or None when the config is unknown or a field has more
        digits than its width allows
    """
    config = FIELD_CONFIGS.get(config_id)
    if config is None:
        return None

    code = config.prefix
    for spec in config.fields:
        value = digits_only(field_values.get(spec.name, ''))
        if len(value) > spec.length:
            return None
        code += value.zfill(spec.length)

    ctrl = _check_digit(config, code)

    # Formats with a literal check character have nothing to falsify
    if simulate_error and config.check is not CheckMethod.FIXED:
        rng = rng or random.Random()
        ctrl = rng.choice([d for d in '0123456789' if d != ctrl])

    return code + ctrl
