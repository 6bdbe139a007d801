"""Health check and metrics endpoints."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from receipts.api.dependencies import LedgerClientDep
from receipts.api.models.receipts import HealthResponse
from receipts.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(ledger: LedgerClientDep) -> HealthResponse:
    """Report that the service is up and which operator account it uses."""
    logger.debug("health_check_request")
    return HealthResponse(operator_id=ledger.operator_id, network=ledger.network)


async def get_metrics() -> Response:
    """Get Prometheus metrics in text format for scraping."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
