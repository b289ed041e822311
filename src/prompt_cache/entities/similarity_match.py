"""Similarity match domain entity."""

from dataclasses import dataclass

from .cache_record import CacheRecordEntity


@dataclass(frozen=True)
class SimilarityMatchEntity:
    """A single result of a vector similarity search.

    Attributes:
        record: The matched cache record
        score: Cosine similarity between the query and the record (1 = identical)
    """

    record: CacheRecordEntity
    score: float
