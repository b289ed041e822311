"""Utility modules for prompt cache."""

from .ids import generate_record_id
from .similarity import cosine_similarity, is_valid_embedding, rank_matches

__all__ = [
    "cosine_similarity",
    "generate_record_id",
    "is_valid_embedding",
    "rank_matches",
]
