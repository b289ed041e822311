"""Service layer for business logic.

This layer contains the hit/miss decision and record construction.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from prompt_cache.services import CacheConfig, CacheService

    cache = CacheService.create(
        vector_store=store,
        embedding_provider=provider,
        similarity_threshold=0.9,
    )
    ```
"""

from .cache_service import DEFAULT_SIMILARITY_THRESHOLD, CacheConfig, CacheService

__all__ = [
    "DEFAULT_SIMILARITY_THRESHOLD",
    "CacheConfig",
    "CacheService",
]
