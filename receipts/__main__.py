"""Run the Receipts API server.

Usage:
    python -m receipts
"""

import os
import sys

import uvicorn
from dotenv import load_dotenv

from receipts.api.app import create_app
from receipts.config import get_settings
from receipts.ledger import ConfigurationError
from receipts.observability.logging import get_logger

logger = get_logger(__name__)


def main() -> None:
    """Load .env, build the app and serve it; exit 1 on missing credentials."""
    load_dotenv()
    settings = get_settings()

    try:
        app = create_app(settings)
    except ConfigurationError as e:
        logger.error("startup_failed", error=str(e))
        sys.exit(1)

    port = int(os.environ.get("PORT", settings.api.port))
    logger.info("server_starting", host=settings.api.host, port=port, network=settings.ledger.network)
    uvicorn.run(app, host=settings.api.host, port=port, log_level="warning")


if __name__ == "__main__":
    main()
