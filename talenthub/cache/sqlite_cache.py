"""SQLite-based cache implementation."""

import time
from pathlib import Path

import aiosqlite
from pydantic import ValidationError

from talenthub.cache.base import CacheProvider
from talenthub.exceptions import CacheError
from talenthub.models.result import SearchResult


class SQLiteCache(CacheProvider):
    """SQLite-based local cache using aiosqlite."""

    def __init__(self, db_path: str = ".talenthub_cache.db", default_ttl: int = 300):
        """
        Initialize SQLite cache.

        Args:
            db_path: Path to SQLite database file
            default_ttl: Default TTL in seconds (5 minutes)
        """
        self.db_path = Path(db_path)
        self.default_ttl = default_ttl
        self._db: aiosqlite.Connection | None = None

    async def _ensure_db(self) -> aiosqlite.Connection:
        """Ensure database connection and schema exist."""
        if self._db is not None:
            return self._db

        try:
            db = await aiosqlite.connect(self.db_path)
        except aiosqlite.Error as e:
            raise CacheError(f"Cannot open cache database {self.db_path}: {e}") from e

        try:
            await db.execute("""
                CREATE TABLE IF NOT EXISTS search_cache (
                    cache_key TEXT PRIMARY KEY,
                    result_json TEXT NOT NULL,
                    created_at REAL NOT NULL,
                    expires_at REAL NOT NULL
                )
            """)
            await db.execute(
                "CREATE INDEX IF NOT EXISTS idx_search_expires ON search_cache(expires_at)"
            )
            await db.commit()
        except aiosqlite.Error as e:
            await db.close()
            raise CacheError(f"Cannot prepare cache database {self.db_path}: {e}") from e

        self._db = db
        return self._db

    async def get(self, key: str) -> SearchResult | None:
        """Retrieve cached result, None if miss, expired or unreadable."""
        db = await self._ensure_db()
        now = time.time()

        try:
            async with db.execute(
                "SELECT result_json, created_at FROM search_cache WHERE cache_key = ? AND expires_at > ?",
                (key.lower(), now),
            ) as cursor:
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise CacheError(f"SQLite read failed: {e}") from e

        if row is None:
            return None

        result_json, created_at = row
        try:
            result = SearchResult.model_validate_json(result_json)
        except ValidationError:
            # Stale schema, drop it
            await self.invalidate(key)
            return None

        result.cached = True
        result.cache_age_seconds = now - created_at

        return result

    async def set(
        self, key: str, result: SearchResult, ttl_seconds: int | None = None
    ) -> None:
        """Store result in cache."""
        db = await self._ensure_db()
        now = time.time()
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl

        try:
            await db.execute(
                """
                INSERT OR REPLACE INTO search_cache (cache_key, result_json, created_at, expires_at)
                VALUES (?, ?, ?, ?)
                """,
                (key.lower(), result.model_dump_json(), now, now + ttl),
            )
            await db.commit()
        except aiosqlite.Error as e:
            raise CacheError(f"SQLite write failed: {e}") from e

    async def invalidate(self, key: str) -> None:
        db = await self._ensure_db()
        try:
            await db.execute("DELETE FROM search_cache WHERE cache_key = ?", (key.lower(),))
            await db.commit()
        except aiosqlite.Error as e:
            raise CacheError(f"SQLite delete failed: {e}") from e

    async def clear(self) -> None:
        db = await self._ensure_db()
        try:
            await db.execute("DELETE FROM search_cache")
            await db.commit()
        except aiosqlite.Error as e:
            raise CacheError(f"SQLite clear failed: {e}") from e

    async def cleanup_expired(self) -> int:
        """
        Remove expired entries from cache.

        Returns:
            Number of entries removed
        """
        db = await self._ensure_db()
        try:
            cursor = await db.execute(
                "DELETE FROM search_cache WHERE expires_at <= ?", (time.time(),)
            )
            await db.commit()
        except aiosqlite.Error as e:
            raise CacheError(f"SQLite cleanup failed: {e}") from e
        return cursor.rowcount

    async def close(self) -> None:
        """Close database connection."""
        if self._db is not None:
            await self._db.close()
            self._db = None
