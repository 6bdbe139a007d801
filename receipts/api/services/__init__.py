"""Service layer behind the API routes."""

from receipts.api.services.receipts import ReceiptService

__all__ = ["ReceiptService"]
