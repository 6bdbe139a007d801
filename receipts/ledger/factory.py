"""Factory for creating ledger clients from configuration."""

from receipts.config.models.ledger import LedgerConfig
from receipts.ledger.base import LedgerClient
from receipts.observability.logging import get_logger

logger = get_logger(__name__)


def create_ledger_client(config: LedgerConfig) -> LedgerClient:
    """Create a ledger client for the configured backend.

    The Hedera SDK is imported only when the hedera backend is selected.

    Raises:
        ConfigurationError: If operator credentials are missing or invalid
        ValueError: If the backend is unknown
    """
    if config.backend == "hedera":
        from receipts.ledger.hedera import HederaLedgerClient

        client: LedgerClient = HederaLedgerClient(
            operator_id=config.operator_id,
            operator_key=(
                config.operator_key.get_secret_value() if config.operator_key else None
            ),
            network=config.network,
        )
    elif config.backend == "mock":
        from receipts.ledger.mock import MockLedgerClient

        client = MockLedgerClient(operator_id=config.operator_id or "0.0.2")
    else:
        raise ValueError(f"Unknown ledger backend: {config.backend}")

    logger.info(
        "ledger_client_created",
        backend=config.backend,
        network=client.network,
        operator_id=client.operator_id,
    )
    return client
