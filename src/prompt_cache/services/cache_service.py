"""Cache service for core business logic.

This service orchestrates cache operations by coordinating the vector
store (data access) and the embedding provider (vector generation).

Per request the flow is::

    lookup(prompt) -> embed -> search(limit=1) -> CacheHit | CacheMiss
    [miss only] store(prompt, response, model_tag, miss.embedding) -> put

The service keeps no state between calls and can be shared by concurrent
requests. Two racing misses for the same prompt may both store a record.
"""

import time
from dataclasses import dataclass

from loguru import logger

from prompt_cache.config import settings
from prompt_cache.entities import CacheHit, CacheMiss, CacheRecordEntity, CacheStats, LookupResult
from prompt_cache.errors import EmbeddingFailedError, StoreInvalidRecordError
from prompt_cache.protocols import EmbeddingProvider, VectorStore
from prompt_cache.utils import generate_record_id, is_valid_embedding

DEFAULT_SIMILARITY_THRESHOLD = 0.85


@dataclass(frozen=True)
class CacheConfig:
    """Immutable per-instance cache configuration.

    Attributes:
        similarity_threshold: Minimum cosine similarity for a hit (0-1)
    """

    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD

    def __post_init__(self) -> None:
        if not 0 <= self.similarity_threshold <= 1:
            raise ValueError(
                f"similarity_threshold must be between 0 and 1, got {self.similarity_threshold}"
            )


class CacheService:
    """Core cache orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - VectorStore: can be Redis, in-memory, or an indexed vector database
    - EmbeddingProvider: can be Ollama, sentence-transformers, a hosted API

    Example:
        ```python
        result = await cache.lookup("What is the capital of France?")
        if isinstance(result, CacheHit):
            return result.response

        response = await llm(prompt)
        await cache.store(prompt, response, model_tag="gpt-4o-mini", embedding=result.embedding)
        ```
    """

    def __init__(
        self,
        vector_store: VectorStore,
        embedding_provider: EmbeddingProvider,
        config: CacheConfig | None = None,
    ) -> None:
        """Initialize the cache service.

        Args:
            vector_store: Record storage and similarity search (required).
            embedding_provider: Embedding generation service (required).
            config: Cache configuration. Defaults to the settings threshold.
        """
        self._store = vector_store
        self._embeddings = embedding_provider
        self._config = config or CacheConfig(similarity_threshold=settings.similarity_threshold)

    @classmethod
    def create(
        cls,
        vector_store: VectorStore,
        embedding_provider: EmbeddingProvider,
        similarity_threshold: float | None = None,
    ) -> "CacheService":
        """Factory method to create CacheService with sensible defaults.

        Args:
            vector_store: Record storage backend (required).
            embedding_provider: Embedding generation service (required).
            similarity_threshold: Min similarity for hits. If None, uses settings.

        Returns:
            Configured CacheService instance
        """
        if similarity_threshold is None:
            similarity_threshold = settings.similarity_threshold
        return cls(
            vector_store=vector_store,
            embedding_provider=embedding_provider,
            config=CacheConfig(similarity_threshold=similarity_threshold),
        )

    def _expected_dimension(self) -> int | None:
        try:
            return self._embeddings.dimension
        except EmbeddingFailedError:
            return None

    async def _embed(self, prompt: str) -> list[float]:
        try:
            vector = await self._embeddings.encode(prompt)
        except EmbeddingFailedError:
            raise
        except Exception as e:
            raise EmbeddingFailedError(f"Embedding provider failed: {e}") from e

        if not is_valid_embedding(vector, self._expected_dimension()):
            raise EmbeddingFailedError(
                f"Embedding provider returned a malformed vector ({type(vector).__name__})"
            )
        return list(vector)

    async def lookup(self, prompt: str) -> LookupResult:
        """Look up a semantically similar cached prompt.

        Business logic:
        1. Generate embedding for the query prompt
        2. Ask the vector store for the single best match above the threshold
        3. Return a hit with its similarity, or a miss carrying the embedding

        Args:
            prompt: The prompt to search for

        Returns:
            CacheHit if a record reached the threshold, CacheMiss otherwise

        Raises:
            EmbeddingFailedError: If the prompt could not be embedded
            StoreUnavailableError: If the vector store could not be searched
        """
        embedding = await self._embed(prompt)

        matches = await self._store.search(
            embedding,
            self._config.similarity_threshold,
            limit=1,
        )

        if matches:
            best = matches[0]
            logger.debug(f"Cache hit {best.record.id} (similarity {best.score:.4f})")
            return CacheHit(response=best.record.response, similarity=best.score, record=best.record)

        return CacheMiss(embedding=embedding)

    async def store(
        self,
        prompt: str,
        response: str,
        model_tag: str,
        embedding: list[float] | None = None,
    ) -> CacheRecordEntity:
        """Store a prompt-response pair in cache.

        Business logic:
        1. Reuse the embedding from a prior miss, or embed the prompt
        2. Create a record with a fresh id and timestamp
        3. Delegate to the vector store

        Args:
            prompt: The original prompt text
            response: The LLM response to cache
            model_tag: Label of the backend that produced the response
            embedding: Embedding from ``CacheMiss.embedding``, if available

        Returns:
            The stored record

        Raises:
            EmbeddingFailedError: If no embedding was given and embedding failed
            StoreInvalidRecordError: If the given embedding is malformed
            StoreUnavailableError: If the vector store could not be reached
        """
        if embedding is None:
            embedding = await self._embed(prompt)
        elif not is_valid_embedding(embedding, self._expected_dimension()):
            raise StoreInvalidRecordError(
                f"Precomputed embedding is malformed ({type(embedding).__name__})"
            )

        record = CacheRecordEntity(
            id=generate_record_id(prompt),
            prompt=prompt,
            embedding=list(embedding),
            response=response,
            created_at=time.time(),
            model_tag=model_tag,
        )

        await self._store.put(record)
        logger.info(f"Cached response for prompt {prompt[:50]!r} as {record.id}")
        return record

    async def stats(self) -> CacheStats:
        """Get cache statistics.

        Returns:
            CacheStats with the number of stored records
        """
        return CacheStats(size=await self._store.count())

    async def is_healthy(self) -> bool:
        """Check if cache is healthy.

        Returns:
            True if both the vector store and embeddings are healthy
        """
        store_healthy = await self._store.health_check()
        embeddings_healthy = await self._embeddings.is_available()
        return store_healthy and embeddings_healthy

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def threshold(self) -> float:
        """Get the similarity threshold."""
        return self._config.similarity_threshold

    @property
    def vector_store(self) -> VectorStore:
        """Get the underlying vector store (for testing)."""
        return self._store

    @property
    def embedding_provider(self) -> EmbeddingProvider:
        """Get the underlying embedding provider (for testing)."""
        return self._embeddings
