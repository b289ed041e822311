"""Repository layer for data access.

This layer abstracts external dependencies (Redis, embedding APIs,
inference gateways) behind protocol-based interfaces. The repositories
are protocol-based (structural typing), not inheritance-based.

``LocalEmbeddingProvider`` is not re-exported here because importing it
loads sentence-transformers; import it from
``prompt_cache.repositories.local_embedding_provider`` when needed.
"""

from prompt_cache.protocols import CompletionProvider, EmbeddingProvider, StatsCounter, VectorStore

from .gateway_completion_provider import GatewayCompletionProvider, ModelRoute, resolve_model
from .memory_vector_store import InMemoryVectorStore
from .ollama_embedding_provider import OllamaEmbeddingProvider
from .redis_stats_counter import InMemoryStatsCounter, RedisStatsCounter
from .redis_vector_store import RedisVectorStore

__all__ = [
    "CompletionProvider",
    "EmbeddingProvider",
    "StatsCounter",
    "VectorStore",
    "GatewayCompletionProvider",
    "ModelRoute",
    "resolve_model",
    "InMemoryVectorStore",
    "OllamaEmbeddingProvider",
    "InMemoryStatsCounter",
    "RedisStatsCounter",
    "RedisVectorStore",
]
