"""Redis store for caching derived aggregates.

Only the admin stats payload (questions joined with rating averages) is
cached. Every mutation deletes the key, so a stale payload lives at most until
the next write or the TTL, whichever comes first.
"""

import json
import logging
from typing import Any

import redis.asyncio as redis

from icebreaker.settings import Settings

# TTL constants (in seconds)
TTL_STATS_DEFAULT = 30

# Key prefixes
PREFIX_STATS = "icebreaker:stats:"

KEY_QUESTION_STATS = f"{PREFIX_STATS}questions"

logger = logging.getLogger("uvicorn.error")


class RedisCache:
    """Thin JSON cache over an async Redis client."""

    def __init__(self, client: redis.Redis, ttl: int = TTL_STATS_DEFAULT) -> None:
        self._redis = client
        self.ttl = ttl

    @classmethod
    async def connect(cls, settings: Settings) -> "RedisCache":
        """Create a client from REDIS_URL and validate connectivity."""
        client = redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        await client.ping()
        logger.info("Redis connected")
        return cls(client, ttl=settings.stats_cache_ttl)

    async def close(self) -> None:
        """Close Redis connection."""
        await self._redis.aclose()

    # ============================================================
    # Generic cache operations
    # ============================================================

    async def get_json(self, key: str) -> Any | None:
        """Get JSON value from cache.

        Args:
            key: Cache key.

        Returns:
            Parsed JSON or None if not found.
        """
        value = await self._redis.get(key)
        if value:
            return json.loads(value)
        return None

    async def set_json(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Set JSON value in cache with TTL.

        Args:
            key: Cache key.
            value: JSON-serializable value.
            ttl: Time-to-live in seconds (defaults to the configured TTL).
        """
        await self._redis.setex(key, ttl or self.ttl, json.dumps(value))

    async def delete(self, key: str) -> None:
        """Delete value from cache."""
        await self._redis.delete(key)

    # ============================================================
    # Question stats
    # ============================================================

    async def get_question_stats(self) -> list[dict[str, Any]] | None:
        return await self.get_json(KEY_QUESTION_STATS)

    async def set_question_stats(self, payload: list[dict[str, Any]]) -> None:
        await self.set_json(KEY_QUESTION_STATS, payload)

    async def invalidate_question_stats(self) -> None:
        await self.delete(KEY_QUESTION_STATS)
