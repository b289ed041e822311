"""In-memory implementation of VectorStore.

Suitable for development, single-process deployments and tests. Data is
lost when the process exits.
"""

from prompt_cache.entities import CacheRecordEntity, SimilarityMatchEntity
from prompt_cache.errors import StoreInvalidRecordError
from prompt_cache.utils import rank_matches


class InMemoryVectorStore:
    """Dictionary-backed vector store with brute-force search.

    Writes are a single dict assignment, so concurrent coroutines on one
    event loop cannot interleave inside ``put``.
    """

    def __init__(self, dimension: int | None = None) -> None:
        """Initialize the in-memory store.

        Args:
            dimension: Required embedding length. None accepts any non-empty embedding.
        """
        self._records: dict[str, CacheRecordEntity] = {}
        self._dimension = dimension

    async def put(self, record: CacheRecordEntity) -> None:
        if not record.embedding:
            raise StoreInvalidRecordError(f"Record {record.id} has an empty embedding")
        if self._dimension is not None and len(record.embedding) != self._dimension:
            raise StoreInvalidRecordError(
                f"Record {record.id} has embedding dimension {len(record.embedding)}, "
                f"expected {self._dimension}"
            )
        self._records[record.id] = record

    async def all_records(self) -> list[CacheRecordEntity]:
        return list(self._records.values())

    async def count(self) -> int:
        return len(self._records)

    async def search(
        self,
        query_embedding: list[float],
        threshold: float,
        limit: int = 1,
    ) -> list[SimilarityMatchEntity]:
        return rank_matches(query_embedding, await self.all_records(), threshold, limit)

    async def health_check(self) -> bool:
        return True
