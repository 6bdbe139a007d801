"""Error response models for consistent API error handling."""

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """Request validation failed (malformed JSON, missing fields, etc.)."""

    OPERATION_FAILED = "OPERATION_FAILED"
    """The ledger rejected the operation or could not be reached."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ErrorDetail(BaseModel):
    """Field-level error information for validation failures."""

    field: str | None = None
    """The field that caused the error, if applicable."""

    message: str
    """Human-readable error description."""


class ErrorResponse(BaseModel):
    """Standard error response format for all API errors.

    Example:
        {
            "error": "Failed to transfer receipt",
            "details": "Transaction failed precheck with status: TOKEN_NOT_ASSOCIATED_TO_ACCOUNT",
            "code": "OPERATION_FAILED"
        }
    """

    error: str
    """Human-readable summary of what failed."""

    details: str | list[ErrorDetail] | None = None
    """Upstream error message, or per-field validation errors."""

    code: ErrorCode
    """Machine-readable error code."""
