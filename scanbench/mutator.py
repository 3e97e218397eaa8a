"""
Payload corruption for negative scanner testing.

Methods:
- removeChars: drop a contiguous run of 5-10 characters
- wrongChecksum: shift ~30% of the AI (01) GTIN digits, or ~20% of all
  digits when the payload does not start with a GTIN
- replaceGS: turn every group separator into "|||"
- addJunk: insert 10-15 junk characters at one offset
- random: one of the above, picked per call
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .checksum import NUMERIC
from .constants import AI_GTIN, GS_CHAR, JUNK_ALPHABET
from .errors import UnknownMutationMethod


logger = logging.getLogger(__name__)


class CorruptionMethod(str, Enum):
    REMOVE_CHARS = "removeChars"
    WRONG_CHECKSUM = "wrongChecksum"
    REPLACE_GS = "replaceGS"
    ADD_JUNK = "addJunk"
    RANDOM = "random"


CONCRETE_METHODS = (
    CorruptionMethod.REMOVE_CHARS,
    CorruptionMethod.WRONG_CHECKSUM,
    CorruptionMethod.REPLACE_GS,
    CorruptionMethod.ADD_JUNK,
)

GS_REPLACEMENT = '|||'
GTIN_DIGIT_RATE = 0.3
PAYLOAD_DIGIT_RATE = 0.2


@dataclass
class CorruptionResult:
    """Outcome of one corruption request."""
    original: str
    payload: str
    method: Optional[CorruptionMethod]
    errors: List[UnknownMutationMethod] = field(default_factory=list)

    @property
    def applied(self) -> bool:
        return self.method is not None and not self.errors


def _shift_digit(digit: str, rng: random.Random) -> str:
    return str((int(digit) + rng.randint(1, 9)) % 10)


def _perturb(text: str, rate: float, rng: random.Random) -> str:
    return ''.join(
        _shift_digit(c, rng) if c in NUMERIC and rng.random() < rate else c
        for c in text
    )


def _remove_chars(code: str, rng: random.Random) -> str:
    count = rng.randint(5, 10)
    position = rng.randint(0, max(0, len(code) - count))
    logger.debug("Removed %d chars at %d", count, position)
    return code[:position] + code[position + count:]


def _wrong_checksum(code: str, rng: random.Random) -> str:
    if code.startswith(AI_GTIN) and len(code) >= 16:
        gtin = _perturb(code[2:16], GTIN_DIGIT_RATE, rng)
        logger.debug("Corrupted GTIN digits: %s -> %s", code[2:16], gtin)
        return AI_GTIN + gtin + code[16:]
    logger.debug("Corrupted digits across the payload")
    return _perturb(code, PAYLOAD_DIGIT_RATE, rng)


def _replace_gs(code: str, rng: random.Random) -> str:
    logger.debug("Replaced %d group separators", code.count(GS_CHAR))
    return code.replace(GS_CHAR, GS_REPLACEMENT)


def _add_junk(code: str, rng: random.Random) -> str:
    count = rng.randint(10, 15)
    junk = ''.join(rng.choice(JUNK_ALPHABET) for _ in range(count))
    position = rng.randint(0, len(code))
    logger.debug("Inserted %r at %d", junk, position)
    return code[:position] + junk + code[position:]


_HANDLERS = {
    CorruptionMethod.REMOVE_CHARS: _remove_chars,
    CorruptionMethod.WRONG_CHECKSUM: _wrong_checksum,
    CorruptionMethod.REPLACE_GS: _replace_gs,
    CorruptionMethod.ADD_JUNK: _add_junk,
}


def corrupt_with_report(
    payload: str,
    method: str = CorruptionMethod.REMOVE_CHARS,
    rng: Optional[random.Random] = None,
) -> CorruptionResult:
    """
    Damage a payload and report what was done.

    An unknown method leaves the payload unchanged and records an
    UnknownMutationMethod condition.
    """
    rng = rng or random.Random()

    try:
        chosen = CorruptionMethod(method)
    except ValueError:
        condition = UnknownMutationMethod(str(method))
        logger.warning(condition.message)
        return CorruptionResult(original=payload, payload=payload, method=None, errors=[condition])

    if not payload:
        return CorruptionResult(original=payload, payload=payload, method=chosen)

    if chosen is CorruptionMethod.RANDOM:
        chosen = rng.choice(CONCRETE_METHODS)

    broken = _HANDLERS[chosen](payload, rng)
    logger.debug("Length %d -> %d via %s", len(payload), len(broken), chosen.value)
    return CorruptionResult(original=payload, payload=broken, method=chosen)


def corrupt(
    payload: str,
    method: str = CorruptionMethod.REMOVE_CHARS,
    rng: Optional[random.Random] = None,
) -> str:
    """Return a damaged copy of payload (unchanged for unknown methods)."""
    return corrupt_with_report(payload, method, rng).payload
