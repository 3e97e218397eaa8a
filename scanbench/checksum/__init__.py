"""
Check digit algorithms for generated payloads.
"""

from .checksum import (
    ean13_check_digit,
    core_check_digit,
    is_numeric,
    digits_only,
    NUMERIC,
)

__all__ = [
    "ean13_check_digit",
    "core_check_digit",
    "is_numeric",
    "digits_only",
    "NUMERIC",
]
