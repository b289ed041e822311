"""Redis implementation of VectorStore.

Each record is a JSON document stored under ``{key_prefix}{id}``. Search
enumerates every key with the prefix and scores the records in process
(brute-force cosine similarity), so it only needs plain GET/SET/SCAN and
works against any Redis, including REST-fronted hosted ones. No vector
index is built.
"""

import json

from loguru import logger
from redis import asyncio as aioredis
from redis.exceptions import RedisError

from prompt_cache.config import get_redis_client, settings
from prompt_cache.entities import CacheRecordEntity, SimilarityMatchEntity
from prompt_cache.errors import EmbeddingFailedError, StoreInvalidRecordError, StoreUnavailableError
from prompt_cache.protocols import EmbeddingProvider
from prompt_cache.utils import rank_matches


class RedisVectorStore:
    """Redis implementation using brute-force cosine search.

    This class satisfies the VectorStore protocol through structural
    typing - no explicit inheritance needed.
    """

    # Keys fetched per MGET round trip while enumerating
    BATCH_SIZE = 200

    def __init__(
        self,
        redis_client: aioredis.Redis | None = None,
        embedding_provider: EmbeddingProvider | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the Redis vector store.

        Args:
            redis_client: Async Redis client. If None, creates one that returns
                raw bytes so each record is decoded on its own.
            embedding_provider: Provider whose dimension every stored
                embedding must match. If None, only empty embeddings are rejected.
            key_prefix: Prefix of record keys. Defaults to settings.
        """
        self._client = redis_client or get_redis_client(decode_responses=False)
        self._embedding_provider = embedding_provider
        self._key_prefix = key_prefix or settings.cache_key_prefix

    @classmethod
    def create(
        cls,
        embedding_provider: EmbeddingProvider | None = None,
        key_prefix: str | None = None,
    ) -> "RedisVectorStore":
        """Factory method to create RedisVectorStore with defaults.

        Args:
            embedding_provider: Provider for the expected vector dimension.
            key_prefix: Record key prefix. If None, uses settings.

        Returns:
            Configured RedisVectorStore
        """
        return cls(embedding_provider=embedding_provider, key_prefix=key_prefix)

    def _key(self, record_id: str) -> str:
        return f"{self._key_prefix}{record_id}"

    def _validate(self, record: CacheRecordEntity) -> None:
        if not record.embedding:
            raise StoreInvalidRecordError(f"Record {record.id} has an empty embedding")

        if self._embedding_provider is not None:
            try:
                expected = self._embedding_provider.dimension
            except EmbeddingFailedError:
                # Provider has not learned its dimension yet
                return
            if len(record.embedding) != expected:
                raise StoreInvalidRecordError(
                    f"Record {record.id} has embedding dimension {len(record.embedding)}, "
                    f"expected {expected}"
                )

    async def put(self, record: CacheRecordEntity) -> None:
        """Store a record as a JSON document.

        Args:
            record: The record to store

        Raises:
            StoreInvalidRecordError: If the embedding is empty or mis-sized
            StoreUnavailableError: If Redis cannot be reached
        """
        self._validate(record)

        try:
            await self._client.set(self._key(record.id), json.dumps(record.to_dict()))
        except RedisError as e:
            raise StoreUnavailableError(f"Failed to store record {record.id}: {e}") from e

        logger.debug(f"Stored record {record.id} ({record.model_tag})")

    async def _keys(self) -> list[str | bytes]:
        return [key async for key in self._client.scan_iter(match=f"{self._key_prefix}*")]

    def _decode(self, key: str | bytes, raw: str | bytes | None) -> CacheRecordEntity | None:
        if raw is None:
            # Key vanished between SCAN and MGET
            return None
        try:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            return CacheRecordEntity.from_dict(json.loads(raw))
        except (UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.debug(f"Skipping malformed record {key}: {e}")
            return None

    async def all_records(self) -> list[CacheRecordEntity]:
        """Load every record with the configured prefix.

        Returns:
            All decodable records, in no particular order

        Raises:
            StoreUnavailableError: If Redis cannot be reached
        """
        try:
            keys = await self._keys()
            records = []
            for start in range(0, len(keys), self.BATCH_SIZE):
                batch = keys[start : start + self.BATCH_SIZE]
                values = await self._client.mget(batch)
                for key, raw in zip(batch, values):
                    record = self._decode(key, raw)
                    if record is not None:
                        records.append(record)
        except RedisError as e:
            raise StoreUnavailableError(f"Failed to enumerate records: {e}") from e

        return records

    async def count(self) -> int:
        """Count record keys with the configured prefix.

        Raises:
            StoreUnavailableError: If Redis cannot be reached
        """
        try:
            return len(await self._keys())
        except RedisError as e:
            raise StoreUnavailableError(f"Failed to count records: {e}") from e

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
            StoreUnavailableError: If Redis cannot be reached
        """
        records = await self.all_records()
        return rank_matches(query_embedding, records, threshold, limit)

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()

    @property
    def client(self) -> aioredis.Redis:
        """Get the Redis client."""
        return self._client
