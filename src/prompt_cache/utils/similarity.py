"""Brute-force cosine similarity search.

Every vector store ranks candidates through ``rank_matches`` so the
threshold, ordering and limit rules are identical across backends.
Search is O(n * d) for n records of dimension d, which is fine for
hundreds to low thousands of records and nothing more.
"""

from collections.abc import Iterable, Sequence

import numpy as np

from prompt_cache.entities import CacheRecordEntity, SimilarityMatchEntity


def _score(a: Sequence[float], b: Sequence[float]) -> float | None:
    """Cosine similarity, or None when the pair cannot be compared.

    A pair cannot be compared when the lengths differ, either vector is
    empty, or either has zero or non-finite magnitude.
    """
    if len(a) != len(b) or len(a) == 0:
        return None

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)

    denominator = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if denominator == 0.0 or not np.isfinite(denominator):
        return None

    # Exact self-match is 1.0, not 0.9999999999999998
    if np.array_equal(va, vb):
        return 1.0

    return float(np.clip(np.dot(va, vb) / denominator, -1.0, 1.0))


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute the cosine similarity of two vectors.

    Returns 0.0 when the vectors differ in length or either has zero
    magnitude (or a non-finite one), rather than raising.

    Args:
        a: First vector
        b: Second vector

    Returns:
        dot(a, b) / (|a| * |b|)
    """
    score = _score(a, b)
    return 0.0 if score is None else score


def is_valid_embedding(vector: Sequence[float], dimension: int | None = None) -> bool:
    """Check that a vector is a non-empty, finite sequence of (optionally) a given length."""
    if not isinstance(vector, (Sequence, np.ndarray)) or isinstance(vector, (str, bytes)):
        return False
    if len(vector) == 0:
        return False
    if dimension is not None and len(vector) != dimension:
        return False
    try:
        array = np.asarray(vector, dtype=np.float64)
    except (TypeError, ValueError):
        return False
    return array.ndim == 1 and bool(np.all(np.isfinite(array)))


def rank_matches(
    query_embedding: Sequence[float],
    records: Iterable[CacheRecordEntity],
    threshold: float,
    limit: int,
) -> list[SimilarityMatchEntity]:
    """Score records against a query and return the best matches.

    Records whose embedding cannot be compared with the query (another
    dimension, zero or non-finite magnitude) are never matches.

    Args:
        query_embedding: The query embedding vector
        records: Candidate records
        threshold: Minimum similarity to keep a record
        limit: Maximum number of matches to return

    Returns:
        Matches with ``score >= threshold``, sorted by score descending and
        then record id ascending, truncated to ``limit``
    """
    if limit <= 0:
        return []

    matches = []
    for record in records:
        score = _score(query_embedding, record.embedding)
        if score is not None and score >= threshold:
            matches.append(SimilarityMatchEntity(record=record, score=score))

    matches.sort(key=lambda m: (-m.score, m.record.id))
    return matches[:limit]
