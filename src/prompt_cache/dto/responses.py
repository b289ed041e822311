"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class ChatResponse(BaseModel):
    """Response DTO for a chat completion."""

    response: str = Field(..., description="The completion text")
    cached: bool = Field(..., description="Whether the response came from the cache")
    similarity: float | None = Field(
        None,
        description="Cosine similarity of the cached prompt (only on cache hits)",
    )
    timestamp: int = Field(..., description="Response time (Unix epoch milliseconds)")


class CacheLookupResponse(BaseModel):
    """Response DTO for a direct cache lookup."""

    prompt: str = Field(..., description="The original query prompt")
    is_hit: bool = Field(..., description="Whether a cached prompt reached the threshold")
    response: str | None = Field(None, description="The cached response on a hit")
    similarity: float | None = Field(None, description="Cosine similarity on a hit")
    lookup_time_ms: float = Field(..., description="Time taken for the cache lookup in milliseconds")


class CacheStoreResponse(BaseModel):
    """Response DTO for cache store operation."""

    success: bool = Field(..., description="Whether the operation succeeded")
    id: str = Field(..., description="The id of the stored record")
    message: str = Field(..., description="Human-readable status message")


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    cache_size: int = Field(..., description="Total number of cached records", ge=0)
    hits: int = Field(..., description="Total cache hits", ge=0)
    misses: int = Field(..., description="Total cache misses", ge=0)
    hit_rate: float = Field(..., description="hits / (hits + misses), rounded to 2 decimals", ge=0.0, le=1.0)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'ok' or 'degraded'")
    store_healthy: bool = Field(..., description="Whether the vector store is reachable")
    embedding_healthy: bool = Field(..., description="Whether the embedding service is reachable")
