"""Dependency injection for API routes.

The audit log and ledger client are created once by the application factory
and kept on ``app.state``; these dependencies hand them to the routes. Tests
can swap any of them with ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends, Request

from receipts.api.services.receipts import ReceiptService
from receipts.audit import AuditLog
from receipts.config import get_settings
from receipts.config.settings import Settings
from receipts.ledger import LedgerClient


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was built with."""
    settings: Settings | None = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()


def get_audit_log(request: Request) -> AuditLog:
    """Get the application's audit log."""
    return request.app.state.audit_log


def get_ledger_client(request: Request) -> LedgerClient:
    """Get the application's ledger client."""
    return request.app.state.ledger


def get_receipt_service(
    ledger: Annotated[LedgerClient, Depends(get_ledger_client)],
    audit_log: Annotated[AuditLog, Depends(get_audit_log)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ReceiptService:
    """Build a ReceiptService over the shared ledger client and audit log."""
    return ReceiptService(ledger=ledger, audit_log=audit_log, config=settings.ledger)


# Type aliases for dependency injection
LedgerClientDep = Annotated[LedgerClient, Depends(get_ledger_client)]
ReceiptServiceDep = Annotated[ReceiptService, Depends(get_receipt_service)]
