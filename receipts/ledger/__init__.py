"""Ledger clients for token creation, transfer, association and balances."""

from receipts.ledger.base import (
    AccountBalance,
    ConfigurationError,
    LedgerClient,
    LedgerError,
    TokenCreation,
)
from receipts.ledger.factory import create_ledger_client
from receipts.ledger.mock import MockLedgerClient

__all__ = [
    "AccountBalance",
    "ConfigurationError",
    "LedgerClient",
    "LedgerError",
    "MockLedgerClient",
    "TokenCreation",
    "create_ledger_client",
]
