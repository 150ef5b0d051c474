"""Shared pytest fixtures for TokenImage tests.

This module provides fixtures for:
- Environment configuration (in-memory cache backend)
- Cache stores and a mocked CoinGecko client
- Test data factories and sample image bytes

Usage:
    @pytest.mark.asyncio
    async def test_something(memory_cache, mock_coingecko):
        ...
"""

import os
from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.factories.token import TokenDetailsFactory, TokenFactory
from tokenimage.config.settings import get_settings
from tokenimage.data.cache.memory_store import MemoryCacheStore
from tokenimage.services.coingecko.client import CoinGeckoClient

# =============================================================================
# Environment Configuration
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """Set up test environment variables."""
    original_env = os.environ.copy()

    os.environ.setdefault("CACHE_BACKEND", "memory")
    os.environ.setdefault("COINGECKO_BASE_URL", "https://api.coingecko.test/api/v3")
    get_settings.cache_clear()

    yield

    os.environ.clear()
    os.environ.update(original_env)
    get_settings.cache_clear()


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def token_factory() -> type[TokenFactory]:
    """Provide token factory for creating catalog entries."""
    return TokenFactory


@pytest.fixture
def details_factory() -> type[TokenDetailsFactory]:
    """Provide details factory for creating coin details."""
    return TokenDetailsFactory


# =============================================================================
# Sample Images
# =============================================================================


@pytest.fixture
def png_bytes() -> bytes:
    """Minimal bytes carrying the PNG signature."""
    return b"\x89PNG\r\n\x1a\n" + b"FAKEPNGDATA"


@pytest.fixture
def jpeg_bytes() -> bytes:
    """Minimal bytes carrying the JPEG signature."""
    return b"\xff\xd8\xff\xe0" + b"FAKEJPEGDATA"


# =============================================================================
# Cache and External API Mocks
# =============================================================================


@pytest.fixture
def memory_cache() -> MemoryCacheStore:
    """Fresh in-process cache store."""
    return MemoryCacheStore()


@pytest.fixture
def failing_cache() -> MagicMock:
    """Cache store whose every operation raises CacheUnavailableError."""
    from tokenimage.core.exceptions import CacheUnavailableError

    mock = MagicMock()
    error = CacheUnavailableError("Redis: Connection refused")
    mock.get = AsyncMock(side_effect=error)
    mock.set = AsyncMock(side_effect=error)
    mock.flush_all = AsyncMock(side_effect=error)
    mock.health_check = AsyncMock(
        return_value={"backend": "redis", "status": "error", "healthy": False}
    )
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def mock_coingecko() -> MagicMock:
    """Mock CoinGecko API client.

    Returns a mock with an empty token list; tests configure
    fetch_coin_list, fetch_coin_details and fetch_image as needed.
    """
    mock = MagicMock(spec=CoinGeckoClient)
    mock.fetch_coin_list = AsyncMock(return_value=[])
    mock.fetch_coin_details = AsyncMock()
    mock.fetch_image = AsyncMock()
    mock.close = AsyncMock()
    return mock
