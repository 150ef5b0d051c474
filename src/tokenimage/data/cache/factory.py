"""Process-wide cache store lifecycle."""

import structlog

from tokenimage.config.settings import get_settings
from tokenimage.core.exceptions import CacheUnavailableError
from tokenimage.data.cache.base import CacheStore
from tokenimage.data.cache.memory_store import MemoryCacheStore
from tokenimage.data.cache.redis_store import RedisCacheStore

log = structlog.get_logger(__name__)

# Singleton instance
_cache_store: CacheStore | None = None


async def get_cache_store() -> CacheStore:
    """Get or create the cache store singleton.

    A Redis connection failure is logged, not raised: the store is still
    returned and its operations raise CacheUnavailableError, which callers
    treat as a miss.

    Returns:
        CacheStore for the configured backend.
    """
    global _cache_store
    if _cache_store is None:
        settings = get_settings()
        if settings.cache_backend == "memory":
            _cache_store = MemoryCacheStore()
        else:
            redis_store = RedisCacheStore(settings)
            try:
                await redis_store.connect()
            except CacheUnavailableError as e:
                log.warning("cache_store_connect_failed", error=str(e))
            _cache_store = redis_store
        log.info("cache_store_initialized", backend=settings.cache_backend)
    return _cache_store


async def close_cache_store() -> None:
    """Close the cache store singleton."""
    global _cache_store
    if _cache_store is not None:
        await _cache_store.close()
        _cache_store = None
