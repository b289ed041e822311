"""Prompt Cache - semantic caching in front of LLM inference.

Prompts are matched by meaning rather than exact text: each prompt is
embedded, compared by cosine similarity against previously cached prompts,
and a stored response is returned when the similarity reaches a threshold.

Layers:
    - protocols: Interface contracts (VectorStore, EmbeddingProvider, ...)
    - repositories: Data access implementations
    - services: Hit/miss decision and record construction
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from prompt_cache import CacheService, InMemoryVectorStore, OllamaEmbeddingProvider

    cache = CacheService.create(
        vector_store=InMemoryVectorStore(),
        embedding_provider=OllamaEmbeddingProvider.create(),
    )
    result = await cache.lookup("What is the capital of France?")
    ```

For HTTP API:
    ```python
    from prompt_cache.api.app import app
    ```
"""

from prompt_cache.config import get_redis_client, settings
from prompt_cache.entities import (
    CacheHit,
    CacheMiss,
    CacheRecordEntity,
    CacheStats,
    LookupResult,
    SimilarityMatchEntity,
)
from prompt_cache.errors import (
    CacheLookupError,
    CompletionError,
    EmbeddingFailedError,
    PromptCacheError,
    StoreError,
    StoreInvalidRecordError,
    StoreUnavailableError,
)
from prompt_cache.protocols import CompletionProvider, EmbeddingProvider, StatsCounter, VectorStore
from prompt_cache.repositories import (
    GatewayCompletionProvider,
    InMemoryStatsCounter,
    InMemoryVectorStore,
    OllamaEmbeddingProvider,
    RedisStatsCounter,
    RedisVectorStore,
)
from prompt_cache.services import CacheConfig, CacheService

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "CompletionProvider",
    "EmbeddingProvider",
    "StatsCounter",
    "VectorStore",
    # Services (business logic)
    "CacheConfig",
    "CacheService",
    # Repositories (data access)
    "GatewayCompletionProvider",
    "InMemoryStatsCounter",
    "InMemoryVectorStore",
    "OllamaEmbeddingProvider",
    "RedisStatsCounter",
    "RedisVectorStore",
    # Entities (domain models)
    "CacheRecordEntity",
    "SimilarityMatchEntity",
    "CacheHit",
    "CacheMiss",
    "CacheStats",
    "LookupResult",
    # Errors
    "PromptCacheError",
    "CacheLookupError",
    "EmbeddingFailedError",
    "StoreError",
    "StoreUnavailableError",
    "StoreInvalidRecordError",
    "CompletionError",
]
