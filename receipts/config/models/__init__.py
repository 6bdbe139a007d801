"""Nested configuration sections."""

from receipts.config.models.api import APIConfig
from receipts.config.models.ledger import LedgerConfig
from receipts.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)

__all__ = [
    "APIConfig",
    "LedgerConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
]
