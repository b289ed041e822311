"""Outcomes of a cache lookup."""

from dataclasses import dataclass, field

from .cache_record import CacheRecordEntity


@dataclass(frozen=True)
class CacheHit:
    """A stored record was similar enough to the prompt.

    Attributes:
        response: The cached response to return
        similarity: Cosine similarity of the best match
        record: The matched record
    """

    response: str
    similarity: float
    record: CacheRecordEntity

    @property
    def is_hit(self) -> bool:
        return True


@dataclass(frozen=True)
class CacheMiss:
    """No stored record reached the threshold.

    Attributes:
        embedding: The prompt embedding computed during the lookup. Pass it
            back to ``CacheService.store`` so the prompt is not embedded twice.
    """

    embedding: list[float] = field(repr=False)

    @property
    def is_hit(self) -> bool:
        return False


LookupResult = CacheHit | CacheMiss


@dataclass(frozen=True)
class CacheStats:
    """Cache size report."""

    size: int
