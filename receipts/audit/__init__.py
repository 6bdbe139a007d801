"""Append-only audit journal of successful receipt operations."""

from receipts.audit.log import AuditLog, AuditLogSnapshot
from receipts.audit.models import (
    AnyAuditRecord,
    AssociateTokenRecord,
    AuditRecord,
    MintReceiptRecord,
    OperationStatus,
    OperationType,
    TransferReceiptRecord,
)

__all__ = [
    "AnyAuditRecord",
    "AssociateTokenRecord",
    "AuditLog",
    "AuditLogSnapshot",
    "AuditRecord",
    "MintReceiptRecord",
    "OperationStatus",
    "OperationType",
    "TransferReceiptRecord",
]
