"""Cache implementations."""

from talenthub.cache.base import CacheProvider
from talenthub.cache.sqlite_cache import SQLiteCache
from talenthub.cache.redis_cache import RedisCache

__all__ = ["CacheProvider", "SQLiteCache", "RedisCache"]
