"""Abstract cache interface."""

from abc import ABC, abstractmethod

from talenthub.models.result import SearchResult


class CacheProvider(ABC):
    """Abstract base class for search result caches."""

    @abstractmethod
    async def get(self, key: str) -> SearchResult | None:
        """
        Retrieve a cached search result.

        Args:
            key: Credential cache key (slug, or issuer:name)

        Returns:
            Cached SearchResult or None if miss/expired
        """
        ...

    @abstractmethod
    async def set(self, key: str, result: SearchResult, ttl_seconds: int | None = None) -> None:
        """
        Store a search result.

        Args:
            key: Credential cache key
            result: SearchResult to cache
            ttl_seconds: Optional TTL override
        """
        ...

    @abstractmethod
    async def invalidate(self, key: str) -> None:
        """Remove a specific entry from the cache."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Clear all cached entries."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Cleanup connections and resources."""
        ...

    async def __aenter__(self) -> "CacheProvider":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
