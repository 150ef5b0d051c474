"""Token image resolution with caching and candidate ranking."""

import asyncio
import base64
import binascii

import structlog

from tokenimage.core.exceptions import (
    CacheUnavailableError,
    DetailFetchError,
    ExternalServiceError,
    ImageFetchError,
    TokenNotFoundError,
)
from tokenimage.core.tasks import spawn_background
from tokenimage.data.cache.base import CacheStore, token_image_key
from tokenimage.models.token import ImageSize, Token, TokenDetails
from tokenimage.services.coingecko.client import CoinGeckoClient
from tokenimage.services.token.catalog import TokenCatalogResolver

logger = structlog.get_logger(__name__)


def filter_candidates(tokens: list[Token], symbol: str) -> list[Token]:
    """Keep the tokens whose ticker equals symbol, ignoring case."""
    return [token for token in tokens if token.matches_symbol(symbol)]


def rank_candidates(details: list[TokenDetails]) -> list[TokenDetails]:
    """Order candidates by market cap rank, lowest first.

    Unranked candidates go after every ranked one and keep their
    relative input order.
    """
    return sorted(
        details,
        key=lambda d: (d.market_cap_rank is None, d.market_cap_rank or 0),
    )


class TokenImageResolver:
    """Resolves icon bytes for a (symbol, size) pair.

    Priority: Image cache -> token list -> ranked candidates -> CoinGecko image
    """

    def __init__(
        self,
        coingecko_client: CoinGeckoClient,
        catalog: TokenCatalogResolver,
        cache: CacheStore,
    ) -> None:
        """Initialize image resolver.

        Args:
            coingecko_client: CoinGecko API client
            catalog: Token list resolver
            cache: Cache store shared by all requests
        """
        self.coingecko = coingecko_client
        self.catalog = catalog
        self.cache = cache

    async def resolve(self, symbol: str, size: ImageSize) -> bytes:
        """Get icon bytes for a ticker symbol.

        1. Check image cache (hit returns immediately)
        2. Resolve token list and filter candidates by symbol
        3. Fetch details of every candidate concurrently
        4. Pick the best market cap rank and download its image
        5. Schedule the cache write without waiting for it

        Args:
            symbol: Ticker symbol, any case
            size: Requested image size

        Returns:
            Raw image bytes

        Raises:
            CatalogError: Token list could not be resolved
            TokenNotFoundError: No token has this symbol
            DetailFetchError: Details of any candidate could not be fetched
            ImageFetchError: The selected image could not be downloaded
        """
        key = token_image_key(symbol, size)

        cached = await self._read_cache(key)
        if cached is not None:
            logger.debug("token_image_cache_hit", symbol=symbol, size=size.value)
            return cached

        logger.debug("token_image_cache_miss", symbol=symbol, size=size.value)

        tokens = await self.catalog.resolve()
        candidates = filter_candidates(tokens, symbol)
        logger.info("token_candidates_found", symbol=symbol, count=len(candidates))

        if not candidates:
            raise TokenNotFoundError(
                f"No token with symbol {symbol} on CoinGecko", symbol=symbol
            )

        details = await self._fetch_all_details(candidates, symbol)
        selected = rank_candidates(details)[0]
        logger.info(
            "token_candidate_selected",
            symbol=symbol,
            coin_id=selected.id,
            market_cap_rank=selected.market_cap_rank,
        )

        image = await self._fetch_image(selected, size, symbol)

        spawn_background(self._write_cache(key, image), name="cache_write_token_image")
        return image

    async def _read_cache(self, key: str) -> bytes | None:
        try:
            raw = await self.cache.get(key)
        except CacheUnavailableError as e:
            logger.warning("token_image_cache_read_failed", key=key, error=str(e))
            return None

        if not raw:
            return None

        try:
            return base64.b64decode(raw, validate=True)
        except binascii.Error as e:
            logger.warning("token_image_cache_corrupt", key=key, error=str(e))
            return None

    async def _write_cache(self, key: str, image: bytes) -> None:
        await self.cache.set(key, base64.b64encode(image).decode("ascii"))
        logger.debug("token_image_cached", key=key, bytes=len(image))

    async def _fetch_all_details(
        self, candidates: list[Token], symbol: str
    ) -> list[TokenDetails]:
        """Fetch details for all candidates; the first failure cancels the rest."""
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(self._fetch_details(token, symbol))
                    for token in candidates
                ]
        except ExceptionGroup as eg:
            detail_errors = [e for e in eg.exceptions if isinstance(e, DetailFetchError)]
            if detail_errors:
                raise detail_errors[0]
            raise

        return [task.result() for task in tasks]

    async def _fetch_details(self, token: Token, symbol: str) -> TokenDetails:
        try:
            return await self.coingecko.fetch_coin_details(token.id)
        except ExternalServiceError as e:
            logger.error("token_details_fetch_failed", coin_id=token.id, error=str(e))
            raise DetailFetchError(
                f"Error fetching details for token {token.id}: {e}", symbol=symbol
            ) from e

    async def _fetch_image(self, details: TokenDetails, size: ImageSize, symbol: str) -> bytes:
        url = details.image.url_for(size)
        try:
            image = await self.coingecko.fetch_image(url)
        except ExternalServiceError as e:
            raise ImageFetchError(
                f"Error fetching token image from CoinGecko: {e}", symbol=symbol
            ) from e

        if not image:
            raise ImageFetchError("Token image not found on CoinGecko", symbol=symbol)
        return image
