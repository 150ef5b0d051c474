"""Cache stores for token lists and token images."""

from tokenimage.data.cache.base import CacheStore, token_image_key, token_list_key
from tokenimage.data.cache.factory import close_cache_store, get_cache_store
from tokenimage.data.cache.memory_store import MemoryCacheStore
from tokenimage.data.cache.redis_store import RedisCacheStore

__all__ = [
    "CacheStore",
    "MemoryCacheStore",
    "RedisCacheStore",
    "close_cache_store",
    "get_cache_store",
    "token_image_key",
    "token_list_key",
]
