"""Redis-backed hit/miss counters."""

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from prompt_cache.config import get_redis_client, settings
from prompt_cache.errors import StoreUnavailableError


class RedisStatsCounter:
    """Persist hit/miss totals with atomic INCR.

    This class satisfies the StatsCounter protocol through structural typing.
    """

    def __init__(
        self,
        redis_client: aioredis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the counter.

        Args:
            redis_client: Async Redis client. If None, creates default.
            key_prefix: Prefix of the counter keys. Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        prefix = key_prefix or settings.cache_stats_prefix
        self._hits_key = f"{prefix}hits"
        self._misses_key = f"{prefix}misses"

    async def _incr(self, key: str) -> None:
        try:
            await self._client.incr(key)
        except RedisError as e:
            raise StoreUnavailableError(f"Failed to increment {key}: {e}") from e

    async def record_hit(self) -> None:
        await self._incr(self._hits_key)

    async def record_miss(self) -> None:
        await self._incr(self._misses_key)

    async def counts(self) -> tuple[int, int]:
        """Return ``(hits, misses)``; missing keys count as zero."""
        try:
            hits, misses = await self._client.mget([self._hits_key, self._misses_key])
        except RedisError as e:
            raise StoreUnavailableError(f"Failed to read counters: {e}") from e
        return int(hits or 0), int(misses or 0)


class InMemoryStatsCounter:
    """Process-local hit/miss counters."""

    def __init__(self) -> None:
        self._hits = 0
        self._misses = 0

    async def record_hit(self) -> None:
        self._hits += 1

    async def record_miss(self) -> None:
        self._misses += 1

    async def counts(self) -> tuple[int, int]:
        return self._hits, self._misses
