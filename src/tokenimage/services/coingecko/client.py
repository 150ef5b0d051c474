"""CoinGecko API client for token lists, coin details and icons.

API Documentation: https://docs.coingecko.com/reference/introduction
"""

import structlog
from pydantic import ValidationError

from tokenimage.config.settings import Settings, get_settings
from tokenimage.constants.token import (
    COINGECKO_API_KEY_HEADER,
    COINGECKO_COIN_DETAILS_PATH,
    COINGECKO_COIN_LIST_PATH,
    COINGECKO_SERVICE_NAME,
    COINGECKO_USER_AGENT,
)
from tokenimage.core.exceptions import ExternalServiceError
from tokenimage.models.token import Token, TokenDetails
from tokenimage.services.base import BaseAPIClient

log = structlog.get_logger(__name__)


class CoinGeckoClient(BaseAPIClient):
    """CoinGecko API client.

    Endpoints used:
        - GET /coins/list - Every token CoinGecko knows (id, symbol, name)
        - GET /coins/{id} - Coin details including image URLs and rank
        - GET <image url> - Icon bytes, fetched without API headers

    Example:
        client = CoinGeckoClient()
        try:
            tokens = await client.fetch_coin_list()
        finally:
            await client.close()
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize CoinGecko client from settings."""
        settings = settings or get_settings()
        headers = {
            "Accept": "application/json",
            "User-Agent": COINGECKO_USER_AGENT,
        }
        api_key = settings.coingecko_api_key.get_secret_value()
        if api_key:
            headers[COINGECKO_API_KEY_HEADER] = api_key

        super().__init__(
            base_url=settings.coingecko_base_url,
            timeout=settings.upstream_timeout_seconds,
            headers=headers,
            service_name=COINGECKO_SERVICE_NAME,
        )
        # Image hosts are separate origins; keep the API key off those requests
        self._image_client = BaseAPIClient(
            timeout=settings.upstream_timeout_seconds,
            headers={"User-Agent": COINGECKO_USER_AGENT},
            service_name=f"{COINGECKO_SERVICE_NAME}-images",
        )
        log.info("coingecko_client_initialized", base_url=self.base_url)

    async def close(self) -> None:
        """Close API and image clients."""
        await super().close()
        await self._image_client.close()

    async def fetch_coin_list(self) -> list[Token] | None:
        """Fetch the full token list.

        Returns:
            List of Token models, or None if the body is not a JSON list.
            Malformed entries are skipped.

        Raises:
            ExternalServiceError: If the API answers with a non-success status.
        """
        log.debug("fetching_coin_list")

        response = await self.get(COINGECKO_COIN_LIST_PATH)
        try:
            data = response.json()
        except ValueError as e:
            log.warning("coin_list_invalid_json", error=str(e))
            return None

        if not isinstance(data, list):
            log.warning("coin_list_unexpected_format", data_type=type(data).__name__)
            return None

        tokens = []
        for item in data:
            try:
                tokens.append(Token.model_validate(item))
            except ValidationError as e:
                log.debug("coin_list_entry_parse_error", error=str(e), item=item)

        log.info("coin_list_fetched", total=len(data), parsed=len(tokens))
        return tokens

    async def fetch_coin_details(self, coin_id: str) -> TokenDetails:
        """Fetch image URLs and market cap rank for one coin.

        Args:
            coin_id: CoinGecko coin id.

        Returns:
            TokenDetails for the coin.

        Raises:
            ExternalServiceError: On non-success status or unusable payload.
        """
        log.debug("fetching_coin_details", coin_id=coin_id)

        response = await self.get(
            COINGECKO_COIN_DETAILS_PATH.format(coin_id=coin_id),
            params={
                "localization": "false",
                "tickers": "false",
                "market_data": "false",
                "community_data": "false",
                "developer_data": "false",
            },
        )
        try:
            return TokenDetails.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ExternalServiceError(
                service=self.service_name,
                message=f"Invalid details payload for {coin_id}: {e}",
            ) from e

    async def fetch_image(self, url: str) -> bytes:
        """Download an icon.

        Args:
            url: Absolute image URL taken from TokenDetails.

        Returns:
            Raw image bytes.

        Raises:
            ExternalServiceError: On non-success status or transport error.
        """
        log.debug("fetching_image", url=url)
        response = await self._image_client.get(url)
        return response.content


# Singleton instance
_coingecko_client: CoinGeckoClient | None = None


async def get_coingecko_client() -> CoinGeckoClient:
    """Get or create CoinGecko client singleton."""
    global _coingecko_client
    if _coingecko_client is None:
        _coingecko_client = CoinGeckoClient()
    return _coingecko_client


async def close_coingecko_client() -> None:
    """Close CoinGecko client singleton."""
    global _coingecko_client
    if _coingecko_client is not None:
        await _coingecko_client.close()
        _coingecko_client = None
