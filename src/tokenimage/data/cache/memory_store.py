"""In-process cache store for local runs and tests."""

import asyncio
from typing import Any

import structlog

log = structlog.get_logger(__name__)


class MemoryCacheStore:
    """Dictionary-backed cache store.

    Same contract as the Redis store but scoped to one process: values
    live until flush_all() or process exit.
    """

    def __init__(self) -> None:
        self._cache: dict[str, str] = {}
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    async def get(self, key: str) -> str | None:
        """Read a value, None if absent."""
        async with self._lock:
            value = self._cache.get(key)
            if value is None:
                self._misses += 1
            else:
                self._hits += 1
            return value

    async def set(self, key: str, value: str) -> None:
        """Write a value unconditionally."""
        async with self._lock:
            self._cache[key] = value

    async def flush_all(self) -> None:
        """Clear entire cache."""
        async with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0
        log.info("memory_cache_flushed")

    async def health_check(self) -> dict[str, Any]:
        """Report cache statistics.

        Returns:
            dict with backend, status, healthy flag and hit/miss counters
        """
        total = self._hits + self._misses
        hit_rate = self._hits / total if total > 0 else 0.0

        return {
            "backend": "memory",
            "status": "connected",
            "healthy": True,
            "size": len(self._cache),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(hit_rate, 4),
        }

    async def close(self) -> None:
        """Nothing to release."""
