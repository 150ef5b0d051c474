"""CoinGecko API integration."""

from tokenimage.services.coingecko.client import (
    CoinGeckoClient,
    close_coingecko_client,
    get_coingecko_client,
)

__all__ = [
    "CoinGeckoClient",
    "close_coingecko_client",
    "get_coingecko_client",
]
