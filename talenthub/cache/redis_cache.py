"""Redis cache implementation."""

import time

import redis.asyncio as redis
from redis.exceptions import RedisError
from pydantic import ValidationError

from talenthub.cache.base import CacheProvider
from talenthub.exceptions import CacheError
from talenthub.models.result import SearchResult


class RedisCache(CacheProvider):
    """
    Redis-based cache provider.

    Example:
        cache = RedisCache("redis://localhost:6379/0")
        async with cache:
            await cache.set("github-stars", result)
            cached = await cache.get("github-stars")
    """

    def __init__(self, redis_url: str = "redis://localhost:6379/0", default_ttl: int = 300):
        """
        Initialize Redis cache.

        Args:
            redis_url: Redis connection URL
            default_ttl: Default TTL in seconds
        """
        self.redis_url = redis_url
        self.default_ttl = default_ttl
        self._client: redis.Redis | None = None
        self._key_prefix = "talenthub:search:"

    async def _ensure_client(self) -> redis.Redis:
        """Get or create Redis client."""
        if self._client is None:
            self._client = redis.from_url(self.redis_url)
        return self._client

    def _make_key(self, key: str) -> str:
        return f"{self._key_prefix}{key.lower()}"

    async def get(self, key: str) -> SearchResult | None:
        """Retrieve cached result for a credential key."""
        client = await self._ensure_client()
        redis_key = self._make_key(key)

        try:
            pipe = client.pipeline()
            pipe.get(redis_key)
            pipe.get(f"{redis_key}:ts")
            data, timestamp = await pipe.execute()
        except RedisError as e:
            raise CacheError(f"Redis read failed: {e}") from e

        if data is None:
            return None

        try:
            result = SearchResult.model_validate_json(data)
        except ValidationError:
            # Stale schema, drop it
            await self.invalidate(key)
            return None

        update: dict = {"cached": True}
        if timestamp:
            update["cache_age_seconds"] = time.time() - float(timestamp)
        return result.model_copy(update=update)

    async def set(
        self,
        key: str,
        result: SearchResult,
        ttl_seconds: int | None = None,
    ) -> None:
        """Cache result for a credential key."""
        client = await self._ensure_client()
        redis_key = self._make_key(key)
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl

        try:
            pipe = client.pipeline()
            pipe.setex(redis_key, ttl, result.model_dump_json())
            pipe.setex(f"{redis_key}:ts", ttl, str(time.time()))
            await pipe.execute()
        except RedisError as e:
            raise CacheError(f"Redis write failed: {e}") from e

    async def invalidate(self, key: str) -> None:
        client = await self._ensure_client()
        redis_key = self._make_key(key)
        try:
            await client.delete(redis_key, f"{redis_key}:ts")
        except RedisError as e:
            raise CacheError(f"Redis delete failed: {e}") from e

    async def clear(self) -> None:
        """Clear all talenthub search entries."""
        client = await self._ensure_client()

        cursor = 0
        try:
            while True:
                cursor, keys = await client.scan(cursor, match=f"{self._key_prefix}*")
                if keys:
                    await client.delete(*keys)
                if cursor == 0:
                    break
        except RedisError as e:
            raise CacheError(f"Redis clear failed: {e}") from e

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def ping(self) -> bool:
        """Check if Redis is available."""
        try:
            client = await self._ensure_client()
            return await client.ping()
        except RedisError:
            return False
