"""FastAPI application factory.

Creates and configures the FastAPI application with middleware,
exception handlers, and route registration.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from receipts import __version__
from receipts.api.exceptions import ReceiptsAPIError
from receipts.api.middleware.context import RequestContextMiddleware
from receipts.api.models.errors import ErrorCode, ErrorDetail, ErrorResponse
from receipts.api.routes import register_routes
from receipts.audit import AuditLog
from receipts.config import get_settings
from receipts.config.settings import Settings
from receipts.ledger import LedgerClient, create_ledger_client
from receipts.observability.logging import get_logger, setup_logging
from receipts.observability.metrics import AUDIT_LOG_RECORDS

logger = get_logger(__name__)

MISSING_ERROR_TYPES = frozenset({"missing", "string_too_short"})


def create_app(
    settings: Settings | None = None,
    ledger: LedgerClient | None = None,
    audit_log: AuditLog | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The ledger client and the audit log are created here, once per
    application, and shared by every request through ``app.state``.

    Args:
        settings: Settings to use (loaded from config files and env if omitted)
        ledger: Ledger client (built from ``settings.ledger`` if omitted)
        audit_log: Audit log (a fresh empty log if omitted)

    Returns:
        Configured FastAPI application

    Raises:
        ConfigurationError: If the ledger backend lacks operator credentials
    """
    settings = settings or get_settings()

    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        redact_secrets=log_config.redact_secrets,
    )

    if ledger is None:
        ledger = create_ledger_client(settings.ledger)
    if audit_log is None:
        audit_log = AuditLog()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("app_started", operator_id=app.state.ledger.operator_id)
        yield
        await app.state.ledger.close()
        logger.info("app_stopped", audit_records=len(app.state.audit_log))

    app = FastAPI(
        title="Receipts API",
        description="Receipt tokens on the Hedera ledger",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.ledger = ledger
    app.state.audit_log = audit_log
    # The gauge reads the log of the most recently built app
    AUDIT_LOG_RECORDS.set_function(audit_log.__len__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=settings.api.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    _register_exception_handlers(app)
    register_routes(app, settings)

    logger.info(
        "app_created",
        debug=settings.debug,
        network=ledger.network,
        operator_id=ledger.operator_id,
        cors_origins=settings.api.cors_origins,
    )

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(ReceiptsAPIError)
    async def receipts_api_error_handler(
        request: Request, exc: ReceiptsAPIError
    ) -> JSONResponse:
        """Handle ReceiptsAPIError and its subclasses."""
        logger.warning(
            "api_error",
            error_code=exc.error_code.value,
            message=exc.message,
            details=exc.details if isinstance(exc.details, str) else None,
            path=request.url.path,
        )

        response = ErrorResponse(
            error=exc.message,
            details=exc.details,
            code=exc.error_code,
        )
        return JSONResponse(status_code=exc.status_code, content=response.model_dump(mode="json"))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Turn FastAPI request validation errors into 400 responses."""
        errors = exc.errors()
        logger.warning("validation_error", errors=errors, path=request.url.path)

        details = []
        for error in errors:
            field = ".".join(str(loc) for loc in error["loc"][1:]) or str(error["loc"][0])
            details.append(ErrorDetail(field=field, message=error["msg"]))

        fields = ", ".join(dict.fromkeys(d.field for d in details if d.field))
        if all(error["type"] in MISSING_ERROR_TYPES for error in errors):
            message = f"Missing required fields: {fields}"
        else:
            message = f"Invalid request fields: {fields}"

        response = ErrorResponse(
            error=message,
            details=details,
            code=ErrorCode.INVALID_REQUEST,
        )
        return JSONResponse(status_code=400, content=response.model_dump(mode="json"))

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )

        response = ErrorResponse(
            error="An unexpected error occurred",
            details=str(exc),
            code=ErrorCode.INTERNAL_ERROR,
        )
        return JSONResponse(status_code=500, content=response.model_dump(mode="json"))
