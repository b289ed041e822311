"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import ChatRequest, LookupCacheRequest, StoreCacheRequest
from .responses import (
    CacheLookupResponse,
    CacheStatsResponse,
    CacheStoreResponse,
    ChatResponse,
    HealthCheckResponse,
)

__all__ = [
    "ChatRequest",
    "LookupCacheRequest",
    "StoreCacheRequest",
    "ChatResponse",
    "CacheLookupResponse",
    "CacheStoreResponse",
    "CacheStatsResponse",
    "HealthCheckResponse",
]
