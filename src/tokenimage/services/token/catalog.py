"""Token list resolution: cache first, CoinGecko on miss."""

import json

import structlog
from pydantic import TypeAdapter, ValidationError

from tokenimage.core.exceptions import (
    CacheUnavailableError,
    ExternalServiceError,
    UpstreamEmptyError,
    UpstreamUnavailableError,
)
from tokenimage.core.tasks import spawn_background
from tokenimage.data.cache.base import CacheStore, token_list_key
from tokenimage.models.token import Token
from tokenimage.services.coingecko.client import CoinGeckoClient

logger = structlog.get_logger(__name__)

_token_list_adapter = TypeAdapter(list[Token])


class TokenCatalogResolver:
    """Resolves the full CoinGecko token list.

    Priority: Cache -> CoinGecko (then written back to cache in background)
    """

    def __init__(self, coingecko_client: CoinGeckoClient, cache: CacheStore) -> None:
        """Initialize catalog resolver.

        Args:
            coingecko_client: CoinGecko API client
            cache: Cache store shared by all requests
        """
        self.coingecko = coingecko_client
        self.cache = cache

    async def resolve(self) -> list[Token]:
        """Get the token list.

        1. Read tokenList from cache; a read failure counts as a miss
        2. Fetch /coins/list from CoinGecko
        3. Schedule the cache write without waiting for it

        Returns:
            Every token in the catalog

        Raises:
            UpstreamUnavailableError: CoinGecko answered with an error status
            UpstreamEmptyError: CoinGecko returned no usable list
        """
        key = token_list_key()

        cached = await self._read_cache(key)
        if cached is not None:
            logger.debug("token_list_cache_hit", count=len(cached))
            return cached

        logger.debug("token_list_cache_miss")
        try:
            tokens = await self.coingecko.fetch_coin_list()
        except ExternalServiceError as e:
            raise UpstreamUnavailableError(
                f"Error fetching token list from CoinGecko: {e}"
            ) from e

        if not tokens:
            raise UpstreamEmptyError("Token list not found on CoinGecko")

        logger.info("token_list_fetched", count=len(tokens))
        spawn_background(self._write_cache(key, tokens), name="cache_write_token_list")
        return tokens

    async def _read_cache(self, key: str) -> list[Token] | None:
        try:
            raw = await self.cache.get(key)
        except CacheUnavailableError as e:
            logger.warning("token_list_cache_read_failed", error=str(e))
            return None

        if raw is None:
            return None

        try:
            return _token_list_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning("token_list_cache_corrupt", error=str(e))
            return None

    async def _write_cache(self, key: str, tokens: list[Token]) -> None:
        payload = json.dumps([token.model_dump(mode="json") for token in tokens])
        await self.cache.set(key, payload)
        logger.debug("token_list_cached", count=len(tokens))
