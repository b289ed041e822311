"""
Tests for the prompt cache API.
"""

import pytest
from conftest import FakeCompletionProvider
from fastapi.testclient import TestClient

from prompt_cache.api.app import app
from prompt_cache.config import settings
from prompt_cache.handlers import CacheHandler, ChatHandler
from prompt_cache.repositories import InMemoryStatsCounter, InMemoryVectorStore
from prompt_cache.services import CacheConfig, CacheService


@pytest.fixture
def completions():
    return FakeCompletionProvider()


@pytest.fixture
def client(embeddings, completions):
    """Create a test client wired to in-memory collaborators.

    The client is not used as a context manager, so the lifespan (which
    connects to Redis and Ollama) never runs.
    """
    cache_service = CacheService(InMemoryVectorStore(), embeddings, CacheConfig(similarity_threshold=0.85))
    counter = InMemoryStatsCounter()
    app.state.cache_handler = CacheHandler(cache_service=cache_service, stats_counter=counter)
    app.state.chat_handler = ChatHandler(
        cache_service=cache_service,
        completion_provider=completions,
        stats_counter=counter,
    )
    yield TestClient(app)
    del app.state.cache_handler
    del app.state.chat_handler


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Prompt Cache API"


def test_health(client, embeddings):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"

    embeddings.fail = True
    data = client.get("/health").json()
    assert data["status"] == "degraded"
    assert data["store_healthy"] is True
    assert data["embedding_healthy"] is False


def test_chat_miss_then_hit(client, completions):
    """A rephrased prompt is served from the cache."""
    first = client.post("/chat", json={"prompt": "What is the capital of France?", "model": "gpt-4o-mini"})
    assert first.status_code == 200
    first_data = first.json()
    assert first_data["cached"] is False
    assert first_data["response"] == "answer to: What is the capital of France?"
    assert first_data["similarity"] is None

    second = client.post("/chat", json={"prompt": "What's France's capital city?"})
    assert second.status_code == 200
    second_data = second.json()
    assert second_data["cached"] is True
    assert second_data["response"] == "answer to: What is the capital of France?"
    assert second_data["similarity"] >= 0.85

    assert len(completions.calls) == 1
    assert completions.calls[0][1] == "gpt-4o-mini"


def test_chat_uses_default_model_settings(client, completions):
    client.post("/chat", json={"prompt": "How do I bake bread?"})

    prompt, model, max_tokens, temperature = completions.calls[0]
    assert model == settings.default_model
    assert max_tokens == settings.default_max_tokens
    assert temperature == settings.default_temperature


def test_chat_embeds_prompt_once_per_miss(client, embeddings):
    client.post("/chat", json={"prompt": "Explain quantum physics"})
    assert embeddings.calls == ["Explain quantum physics"]


def test_chat_requires_prompt(client):
    response = client.post("/chat", json={"model": "gpt-4o"})
    assert response.status_code == 422


def test_chat_completion_failure(client, completions):
    completions.fail = True
    response = client.post("/chat", json={"prompt": "How do I bake bread?"})
    assert response.status_code == 502


def test_chat_degrades_when_embeddings_fail(client, embeddings, completions):
    """A failed lookup is treated as a miss, not a failed request."""
    embeddings.fail = True
    response = client.post("/chat", json={"prompt": "How do I bake bread?"})

    assert response.status_code == 200
    assert response.json()["cached"] is False
    assert len(completions.calls) == 1


def test_chat_degrades_when_embedding_is_malformed(client, embeddings, completions, monkeypatch):
    async def encode_nothing(text):
        return None

    monkeypatch.setattr(embeddings, "encode", encode_nothing)
    response = client.post("/chat", json={"prompt": "How do I bake bread?"})

    assert response.status_code == 200
    assert response.json()["cached"] is False
    assert len(completions.calls) == 1


def test_stats(client):
    """Test stats endpoint."""
    assert client.get("/stats").json() == {"cache_size": 0, "hits": 0, "misses": 0, "hit_rate": 0.0}

    client.post("/chat", json={"prompt": "What is the capital of France?"})
    client.post("/chat", json={"prompt": "What's France's capital city?"})
    client.post("/chat", json={"prompt": "How do I bake bread?"})

    data = client.get("/stats").json()
    assert data["cache_size"] == 2
    assert data["hits"] == 1
    assert data["misses"] == 2
    assert data["hit_rate"] == 0.33


def test_cache_lookup_and_store(client):
    """Direct lookup/store endpoints do not touch the counters."""
    miss = client.post("/cache/lookup", json={"prompt": "How do I bake bread?"})
    assert miss.status_code == 200
    assert miss.json()["is_hit"] is False

    stored = client.post(
        "/cache/store",
        json={"prompt": "How do I bake bread?", "response": "Knead it.", "model": "manual"},
    )
    assert stored.status_code == 200
    assert stored.json()["success"] is True
    assert stored.json()["id"]

    hit = client.post("/cache/lookup", json={"prompt": "How do I bake bread?"}).json()
    assert hit["is_hit"] is True
    assert hit["response"] == "Knead it."
    assert hit["similarity"] == pytest.approx(1.0)

    stats = client.get("/stats").json()
    assert (stats["hits"], stats["misses"]) == (0, 0)


def test_cache_lookup_embedding_failure(client, embeddings):
    embeddings.fail = True
    response = client.post("/cache/lookup", json={"prompt": "How do I bake bread?"})
    assert response.status_code == 500
