"""
Error taxonomy for payload generation and playback.

Validation problems are raised; batch, render and mutation problems are
reported as records so the operator can keep testing.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Error and condition codes."""
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_PREFIX = "INVALID_PREFIX"
    MISSING_GOODS_ID = "MISSING_GOODS_ID"
    INVALID_PRODUCT_TYPE = "INVALID_PRODUCT_TYPE"
    FIELD_OVERFLOW = "FIELD_OVERFLOW"
    UNKNOWN_TEMPLATE = "UNKNOWN_TEMPLATE"
    INVALID_RANGE = "INVALID_RANGE"
    NOTHING_SELECTED = "NOTHING_SELECTED"
    ENCODING_SKIPPED = "ENCODING_SKIPPED"
    RENDER_FAILURE = "RENDER_FAILURE"
    UNKNOWN_MUTATION_METHOD = "UNKNOWN_MUTATION_METHOD"


class ScanBenchError(Exception):
    """Base class for every condition reported by this package."""
    code: ErrorCode = ErrorCode.INVALID_INPUT

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(ScanBenchError, ValueError):
    """A required field is missing or malformed; the operation was rejected."""


class InvalidInputError(ValidationError):
    code = ErrorCode.INVALID_INPUT


class InvalidPrefixError(ValidationError):
    code = ErrorCode.INVALID_PREFIX


class MissingGoodsIdError(ValidationError):
    code = ErrorCode.MISSING_GOODS_ID


class InvalidProductTypeError(ValidationError):
    code = ErrorCode.INVALID_PRODUCT_TYPE


class FieldOverflowError(ValidationError):
    code = ErrorCode.FIELD_OVERFLOW


class UnknownTemplateError(ValidationError):
    code = ErrorCode.UNKNOWN_TEMPLATE


class InvalidRangeError(ValidationError):
    code = ErrorCode.INVALID_RANGE


class NothingSelectedError(ValidationError):
    code = ErrorCode.NOTHING_SELECTED


class EncodingSkipped(ScanBenchError):
    """One entry of a batch could not be encoded and was left out."""
    code = ErrorCode.ENCODING_SKIPPED

    def __init__(self, source_value: str, reason: str, index: Optional[int] = None):
        super().__init__(f"{source_value!r}: {reason}")
        self.source_value = source_value
        self.reason = reason
        self.index = index


class RenderFailure(ScanBenchError):
    """The external renderer rejected a payload."""
    code = ErrorCode.RENDER_FAILURE

    def __init__(self, surface: str, payload: str, cause: BaseException):
        super().__init__(f"render to {surface} failed: {cause}")
        self.surface = surface
        self.payload = payload
        self.cause = cause


class UnknownMutationMethod(ScanBenchError):
    code = ErrorCode.UNKNOWN_MUTATION_METHOD

    def __init__(self, method: str):
        super().__init__(f"Unknown corruption method: {method}")
        self.method = method
