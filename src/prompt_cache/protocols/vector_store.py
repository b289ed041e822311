"""Vector store protocol.

Defines the interface for any backend that persists cache records and
performs similarity search over their embeddings.

Implementations can include:
- Redis with brute-force cosine search (default)
- In-memory dictionary (development, tests)
- Any document, key-value or vector database
"""

from typing import Protocol, runtime_checkable

from prompt_cache.entities import CacheRecordEntity, SimilarityMatchEntity


@runtime_checkable
class VectorStore(Protocol):
    """Protocol for cache record storage backends.

    Similar to Go's interface pattern - any type that implements these
    methods satisfies the protocol, no explicit inheritance needed.

    The ``search`` contract is the same for every implementation, whether it
    scans all records or asks an index: scores are cosine similarities,
    only ``score >= threshold`` is returned, results are ordered by score
    descending then record id ascending, and at most ``limit`` come back.
    """

    async def put(self, record: CacheRecordEntity) -> None:
        """Write a record, overwriting any record with the same id.

        Args:
            record: The record to store

        Raises:
            StoreUnavailableError: If the backing store cannot be reached
            StoreInvalidRecordError: If the record's embedding is empty or mis-sized
        """
        ...

    async def all_records(self) -> list[CacheRecordEntity]:
        """Return every stored record, in no particular order.

        Records that cannot be decoded are skipped.

        Raises:
            StoreUnavailableError: If the backing store cannot be reached
        """
        ...

    async def count(self) -> int:
        """Count stored records.

        Raises:
            StoreUnavailableError: If the backing store cannot be reached
        """
        ...

    async def search(
        self,
        query_embedding: list[float],
        threshold: float,
        limit: int = 1,
    ) -> list[SimilarityMatchEntity]:
        """Find records similar to a query embedding.

        Args:
            query_embedding: The query embedding vector
            threshold: Minimum cosine similarity for a match
            limit: Maximum number of results to return

        Returns:
            Matches sorted by score (descending), ties by record id (ascending)

        Raises:
            StoreUnavailableError: If the backing store cannot be reached
        """
        ...

    async def health_check(self) -> bool:
        """Check if the store is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...
