"""
Tests for cosine similarity, ranking and record ids.
"""

import math

import pytest
from conftest import make_record

from prompt_cache.utils import cosine_similarity, generate_record_id, is_valid_embedding, rank_matches
from prompt_cache.utils.ids import prompt_fingerprint


@pytest.mark.parametrize(
    "vector",
    [
        [1.0, 0.0, 0.0],
        [0.2, 0.5, 0.3],
        [-3.0, 4.0, 12.5, 0.001],
        [1e-6, 2e-6],
    ],
)
def test_self_similarity_is_one(vector):
    """A non-zero vector is identical to itself."""
    assert cosine_similarity(vector, vector) == pytest.approx(1.0)


def test_similarity_is_symmetric():
    a = [0.3, -0.7, 0.2]
    b = [0.9, 0.1, -0.4]
    assert cosine_similarity(a, b) == cosine_similarity(b, a)


def test_orthogonal_and_opposite_vectors():
    assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)
    assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(-1.0)


def test_scaled_vectors_match():
    assert cosine_similarity([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "a, b",
    [
        ([0.0, 0.0, 0.0], [1.0, 0.0, 0.0]),
        ([1.0, 0.0, 0.0], [0.0, 0.0, 0.0]),
        ([1.0, 0.0], [1.0, 0.0, 0.0]),
        ([], []),
        ([1.0, math.inf], [1.0, 0.0]),
    ],
)
def test_degenerate_vectors_score_zero(a, b):
    """Zero magnitude, length mismatch and non-finite vectors never raise."""
    assert cosine_similarity(a, b) == 0.0


def test_is_valid_embedding():
    assert is_valid_embedding([0.1, 0.2, 0.3])
    assert is_valid_embedding([0.1, 0.2, 0.3], dimension=3)
    assert not is_valid_embedding([])
    assert not is_valid_embedding([0.1, math.nan, 0.3])
    assert not is_valid_embedding([0.1, math.inf])
    assert not is_valid_embedding([0.1, 0.2], dimension=3)
    assert not is_valid_embedding(None)
    assert not is_valid_embedding(0.5)
    assert not is_valid_embedding("0.1")
    assert not is_valid_embedding([[0.1, 0.2]])
    assert not is_valid_embedding([0.1, "x"])


def test_rank_matches_filters_sorts_and_limits():
    records = [
        make_record("low", [0.5, math.sqrt(1 - 0.25)]),
        make_record("high", [0.95, math.sqrt(1 - 0.95**2)]),
        make_record("mid", [0.9, math.sqrt(1 - 0.81)]),
        make_record("exact", [1.0, 0.0]),
    ]

    matches = rank_matches([1.0, 0.0], records, threshold=0.85, limit=10)

    assert [m.record.id for m in matches] == ["exact", "high", "mid"]
    assert all(m.score >= 0.85 for m in matches)
    assert matches[1].score == pytest.approx(0.95)

    top = rank_matches([1.0, 0.0], records, threshold=0.85, limit=2)
    assert [m.record.id for m in top] == ["exact", "high"]


def test_rank_matches_breaks_ties_by_id():
    records = [
        make_record("c", [1.0, 1.0]),
        make_record("a", [1.0, 1.0]),
        make_record("b", [1.0, 1.0]),
    ]

    matches = rank_matches([0.6, 0.8], records, threshold=0.5, limit=3)

    assert [m.record.id for m in matches] == ["a", "b", "c"]


def test_rank_matches_skips_mismatched_dimensions():
    records = [
        make_record("short", [1.0, 0.0]),
        make_record("ok", [1.0, 0.0, 0.0]),
    ]

    matches = rank_matches([1.0, 0.0, 0.0], records, threshold=0.0, limit=5)

    assert [m.record.id for m in matches] == ["ok"]


def test_rank_matches_skips_degenerate_records_at_zero_threshold():
    records = [
        make_record("zero", [0.0, 0.0, 0.0]),
        make_record("inf", [math.inf, 0.0, 0.0]),
        make_record("empty", []),
        make_record("orthogonal", [0.0, 1.0, 0.0]),
    ]

    matches = rank_matches([1.0, 0.0, 0.0], records, threshold=0.0, limit=5)

    assert [(m.record.id, m.score) for m in matches] == [("orthogonal", 0.0)]


@pytest.mark.parametrize("threshold", [-1.0, 0.0, 0.85, 1.0])
def test_rank_matches_empty_corpus(threshold):
    assert rank_matches([1.0, 0.0], [], threshold=threshold, limit=5) == []


def test_rank_matches_zero_limit():
    assert rank_matches([1.0], [make_record("a", [1.0])], threshold=0.0, limit=0) == []


def test_record_ids_are_unique_per_store():
    prompt = "What is the capital of France?"
    ids = {generate_record_id(prompt) for _ in range(100)}

    assert len(ids) == 100
    assert all(record_id.startswith(prompt_fingerprint(prompt) + "_") for record_id in ids)


def test_fingerprint_depends_on_content():
    assert prompt_fingerprint("a") == prompt_fingerprint("a")
    assert prompt_fingerprint("a") != prompt_fingerprint("b")
