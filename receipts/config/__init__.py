"""Configuration for the Receipts service.

Usage:
    from receipts.config import get_settings

    network = get_settings().ledger.network
"""

from functools import lru_cache

from receipts.config.settings import Settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for this process, read once; ``get_settings.cache_clear()`` rereads them."""
    return Settings()


__all__ = ["get_settings", "Settings"]
