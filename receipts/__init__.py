"""Receipts: receipt tokens on the Hedera ledger, served over HTTP.

Mints, transfers and associates receipt tokens, queries balances and keeps
an in-process audit journal of every successful operation.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
