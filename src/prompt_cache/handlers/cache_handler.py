"""HTTP handlers for direct cache operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

import time

from fastapi import HTTPException, status

from prompt_cache.dto import (
    CacheLookupResponse,
    CacheStatsResponse,
    CacheStoreResponse,
    HealthCheckResponse,
    LookupCacheRequest,
    StoreCacheRequest,
)
from prompt_cache.entities import CacheHit
from prompt_cache.errors import CacheLookupError, StoreError, StoreInvalidRecordError
from prompt_cache.protocols import StatsCounter
from prompt_cache.services import CacheService


class CacheHandler:
    """HTTP handlers for cache operations.

    This handler delegates business logic to CacheService
    and handles HTTP-specific concerns like:
    - Converting entities to DTOs
    - Setting appropriate status codes
    - Error handling and responses
    """

    def __init__(self, cache_service: CacheService, stats_counter: StatsCounter) -> None:
        """Initialize the cache handler.

        Args:
            cache_service: The cache service for business logic (required).
            stats_counter: Hit/miss counters reported by ``/stats`` (required).
        """
        self._cache = cache_service
        self._counter = stats_counter

    async def lookup(self, request: LookupCacheRequest) -> CacheLookupResponse:
        """Handle POST /cache/lookup requests.

        Direct lookups do not touch the hit/miss counters.

        Raises:
            HTTPException: If the lookup fails
        """
        start_time = time.time()
        try:
            result = await self._cache.lookup(request.prompt)
        except (CacheLookupError, StoreError) as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to look up cache: {e}",
            ) from e
        lookup_time_ms = (time.time() - start_time) * 1000

        if isinstance(result, CacheHit):
            return CacheLookupResponse(
                prompt=request.prompt,
                is_hit=True,
                response=result.response,
                similarity=result.similarity,
                lookup_time_ms=lookup_time_ms,
            )

        return CacheLookupResponse(
            prompt=request.prompt,
            is_hit=False,
            lookup_time_ms=lookup_time_ms,
        )

    async def store(self, request: StoreCacheRequest) -> CacheStoreResponse:
        """Handle POST /cache/store requests.

        Raises:
            HTTPException: 400 for a rejected record, 500 for other failures
        """
        try:
            record = await self._cache.store(
                prompt=request.prompt,
                response=request.response,
                model_tag=request.model,
            )
        except StoreInvalidRecordError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid record: {e}",
            ) from e
        except (CacheLookupError, StoreError) as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to store entry: {e}",
            ) from e

        return CacheStoreResponse(
            success=True,
            id=record.id,
            message="Entry stored successfully",
        )

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /stats requests.

        Raises:
            HTTPException: If the store or the counters cannot be read
        """
        try:
            stats = await self._cache.stats()
            hits, misses = await self._counter.counts()
        except StoreError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to fetch stats: {e}",
            ) from e

        total = hits + misses
        return CacheStatsResponse(
            cache_size=stats.size,
            hits=hits,
            misses=misses,
            hit_rate=round(hits / total, 2) if total > 0 else 0.0,
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        store_healthy = await self._cache.vector_store.health_check()
        embedding_healthy = await self._cache.embedding_provider.is_available()

        return HealthCheckResponse(
            status="ok" if store_healthy and embedding_healthy else "degraded",
            store_healthy=store_healthy,
            embedding_healthy=embedding_healthy,
        )
