"""
DataMatrix marking-code encoder.

Templates lay a GTIN out as an AI (01) payload followed by a serial and
verification tail:

    type1: 01 + GTIN-14 + 21 + serial(13) <GS> 91 + key(4) <GS> 92 + crypto(44)
    type2: 01 + GTIN-14 + 21 + serial(6) <GS> 93 + crypto(4)

Tails are drawn from the random source the caller passes in, so a seeded
random.Random gives repeatable payloads.
"""

from __future__ import annotations

import random
import re
import string
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..checksum import ean13_check_digit, is_numeric
from ..constants import AI_GTIN, GS_CHAR
from ..errors import InvalidInputError, UnknownTemplateError


SERIAL_ALPHABET = string.ascii_letters + string.digits
CRYPTO_ALPHABET = string.ascii_letters + string.digits + '+/='

DEFAULT_TEMPLATE_ID = 'type1'

# First 14-digit run following the AI (01) marker
AI01_REGEX = re.compile(r'01(\d{14})')


@dataclass(frozen=True)
class TailSegment:
    """One AI-tagged random segment after the GTIN."""
    ai: str
    length: int
    alphabet: str
    terminated: bool = True


@dataclass(frozen=True)
class Template:
    """Named, immutable DataMatrix layout."""
    id: str
    name: str
    segments: Tuple[TailSegment, ...]

    def generate(self, gtin14: str, rng: random.Random) -> str:
        parts = [AI_GTIN, gtin14]
        for segment in self.segments:
            parts.append(segment.ai)
            parts.append(''.join(rng.choice(segment.alphabet) for _ in range(segment.length)))
            if segment.terminated:
                parts.append(GS_CHAR)
        return ''.join(parts)


TEMPLATES: Dict[str, Template] = {
    'type1': Template(
        id='type1',
        name='Type 1 (full crypto tail)',
        segments=(
            TailSegment('21', 13, SERIAL_ALPHABET),
            TailSegment('91', 4, SERIAL_ALPHABET),
            TailSegment('92', 44, CRYPTO_ALPHABET, terminated=False),
        ),
    ),
    'type2': Template(
        id='type2',
        name='Type 2 (short crypto tail)',
        segments=(
            TailSegment('21', 6, SERIAL_ALPHABET),
            TailSegment('93', 4, CRYPTO_ALPHABET, terminated=False),
        ),
    ),
}


@dataclass(frozen=True)
class DataMatrixResult:
    payload: str
    template_id: str
    template_name: str
    gtin: str


def get_template(template_id: Optional[str] = None) -> Template:
    """Look up a template; None selects the default one."""
    key = template_id or DEFAULT_TEMPLATE_ID
    try:
        return TEMPLATES[key]
    except KeyError:
        raise UnknownTemplateError(f"Unknown DataMatrix template: {key}") from None


def normalize_gtin(gtin: str) -> str:
    """Validate an 8-14 digit GTIN and left-pad it to GTIN-14."""
    value = (gtin or '').strip()
    if not value:
        raise InvalidInputError(f"Invalid GTIN {gtin!r}: GTIN is required")
    if not is_numeric(value):
        raise InvalidInputError(f"Invalid GTIN {gtin!r}: contains non-numeric characters")
    if not 8 <= len(value) <= 14:
        raise InvalidInputError(f"Invalid GTIN {gtin!r}: length {len(value)} outside 8-14")
    return value.zfill(14)


def encode_data_matrix(
    gtin: str,
    template_id: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> DataMatrixResult:
    """
    Build a DataMatrix payload for a GTIN.

    The encoder keeps no state: callers without a GTIN take the next value
    from a DemoSequence before calling.

    Args:
        gtin: 8-14 digit GTIN
        template_id: Template key, default template when None
        rng: Random source for serial/crypto tails

    Returns:
        DataMatrixResult with the payload and template name
    """
    template = get_template(template_id)
    gtin14 = normalize_gtin(gtin)
    payload = template.generate(gtin14, rng or random.Random())
    return DataMatrixResult(
        payload=payload,
        template_id=template.id,
        template_name=template.name,
        gtin=gtin.strip(),
    )


def extract_gtin_as_ean13(dm_payload: str) -> Optional[str]:
    """
    Pull the GTIN out of a DataMatrix payload as an EAN-13.

    Locates the first 14-digit run after "01", drops the leading digit and
    recomputes the EAN-13 check digit.

    Returns:
        13-digit EAN-13, or None when no AI (01) run is present
    """
    if not dm_payload:
        return None
    match = AI01_REGEX.search(dm_payload)
    if not match:
        return None
    ean12 = match.group(1)[1:13]
    return ean12 + str(ean13_check_digit(ean12))
