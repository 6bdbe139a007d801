"""API exception hierarchy for consistent error handling.

All API exceptions inherit from ReceiptsAPIError, which provides
status_code and error_code attributes used by the global exception
handler to generate consistent error responses.
"""

from receipts.api.models.errors import ErrorCode, ErrorDetail


class ReceiptsAPIError(Exception):
    """Base exception for all API errors.

    Subclasses set status_code and error_code to define the HTTP response.
    """

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        details: str | list[ErrorDetail] | None = None,
    ) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidRequestError(ReceiptsAPIError):
    """Raised when required request fields are missing or malformed.

    Always raised before the ledger is contacted.
    """

    status_code = 400
    error_code = ErrorCode.INVALID_REQUEST


class OperationError(ReceiptsAPIError):
    """Raised when a ledger call fails or is rejected.

    details carries the upstream error message verbatim.
    """

    status_code = 500
    error_code = ErrorCode.OPERATION_FAILED
