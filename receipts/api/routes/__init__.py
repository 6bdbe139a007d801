"""API route registration."""

from fastapi import APIRouter, FastAPI

from receipts.config.settings import Settings
from receipts.observability.logging import get_logger

logger = get_logger(__name__)


def create_api_router() -> APIRouter:
    """Create the /api router with receipt and health routes."""
    router = APIRouter(prefix="/api")

    from receipts.api.routes.health import router as health_router
    from receipts.api.routes.receipts import router as receipts_router

    router.include_router(receipts_router, tags=["Receipts"])
    router.include_router(health_router, tags=["Health"])

    return router


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register all routes with the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Settings deciding whether metrics are exposed
    """
    app.include_router(create_api_router())

    metrics = settings.observability.metrics
    if metrics.enabled:
        from receipts.api.routes.health import get_metrics

        app.add_api_route(metrics.path, get_metrics, methods=["GET"], tags=["Health"])

    logger.info("routes_registered", metrics_enabled=metrics.enabled)
