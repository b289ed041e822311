"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_record import CacheRecordEntity
from .lookup_result import CacheHit, CacheMiss, CacheStats, LookupResult
from .similarity_match import SimilarityMatchEntity

__all__ = [
    "CacheRecordEntity",
    "SimilarityMatchEntity",
    "CacheHit",
    "CacheMiss",
    "CacheStats",
    "LookupResult",
]
