"""Redis-backed cache store with connection management."""

from typing import Any

import redis.asyncio as aioredis
import structlog
from redis.exceptions import RedisError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from tokenimage.config.settings import Settings, get_settings
from tokenimage.constants.token import REDIS_CONNECT_ATTEMPTS, REDIS_SOCKET_TIMEOUT_SECONDS
from tokenimage.core.exceptions import CacheUnavailableError

log = structlog.get_logger(__name__)


class RedisCacheStore:
    """Async Redis cache store.

    Values are stored as text (decode_responses=True): JSON for the token
    list and base64 for images. Entries never expire; FLUSHDB removes them.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize store with settings."""
        self._settings = settings or get_settings()
        self._client: aioredis.Redis | None = None

    @retry(
        stop=stop_after_attempt(REDIS_CONNECT_ATTEMPTS),
        wait=wait_exponential(multiplier=1, min=1, max=4),
        retry=retry_if_exception_type(CacheUnavailableError),
        reraise=True,
    )
    async def connect(self) -> None:
        """Create the Redis client and verify it answers PING.

        The client is kept even if PING fails so later operations can
        reconnect once Redis is back.

        Raises:
            CacheUnavailableError: If Redis does not answer after retries.
        """
        if self._client is None:
            self._client = aioredis.from_url(
                self._settings.redis_url,
                decode_responses=True,
                socket_timeout=REDIS_SOCKET_TIMEOUT_SECONDS,
                socket_connect_timeout=REDIS_SOCKET_TIMEOUT_SECONDS,
            )

        try:
            await self._client.ping()
            log.info(
                "redis_connected",
                host=self._settings.redis_host,
                port=self._settings.redis_port,
            )
        except (RedisError, OSError) as e:
            log.error("redis_connection_failed", error=str(e))
            raise CacheUnavailableError(f"Redis: {e}") from e

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.info("redis_disconnected")

    def _require_client(self) -> aioredis.Redis:
        if self._client is None:
            raise CacheUnavailableError("Redis: client not connected")
        return self._client

    async def get(self, key: str) -> str | None:
        """Read a value.

        Raises:
            CacheUnavailableError: If Redis cannot be reached.
        """
        client = self._require_client()
        try:
            value: str | None = await client.get(key)
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"Redis GET {key}: {e}") from e
        return value

    async def set(self, key: str, value: str) -> None:
        """Write a value unconditionally, without expiry.

        Raises:
            CacheUnavailableError: If Redis cannot be reached.
        """
        client = self._require_client()
        try:
            await client.set(key, value)
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"Redis SET {key}: {e}") from e

    async def flush_all(self) -> None:
        """Remove every key of the configured database.

        Raises:
            CacheUnavailableError: If Redis cannot be reached.
        """
        client = self._require_client()
        try:
            await client.flushdb()
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"Redis FLUSHDB: {e}") from e
        log.info("redis_flushed", db=self._settings.redis_db)

    async def health_check(self) -> dict[str, Any]:
        """Check Redis connection health.

        Returns:
            Dict with backend, status, healthy flag, and optional error.
        """
        if self._client is None:
            return {"backend": "redis", "status": "disconnected", "healthy": False}

        try:
            await self._client.ping()
            return {"backend": "redis", "status": "connected", "healthy": True}
        except (RedisError, OSError) as e:
            log.error("redis_health_check_failed", error=str(e))
            return {"backend": "redis", "status": "error", "healthy": False, "error": str(e)}
