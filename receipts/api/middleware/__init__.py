"""HTTP middleware."""

from receipts.api.middleware.context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
