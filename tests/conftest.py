"""Shared fakes for prompt cache tests.

Nothing here talks to a real Redis, Ollama or model gateway.
"""

import fnmatch
import time

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from prompt_cache.entities import CacheRecordEntity
from prompt_cache.errors import CompletionError, EmbeddingFailedError
from prompt_cache.repositories import InMemoryVectorStore, RedisVectorStore


def make_record(
    record_id: str,
    embedding: list[float],
    response: str = "response",
    prompt: str = "prompt",
    model_tag: str = "test-model",
) -> CacheRecordEntity:
    return CacheRecordEntity(
        id=record_id,
        prompt=prompt,
        embedding=embedding,
        response=response,
        created_at=time.time(),
        model_tag=model_tag,
    )


class FakeRedis:
    """Minimal async stand-in for redis.asyncio.Redis.

    Values come back exactly as stored, so tests can plant str or raw bytes.
    """

    def __init__(self) -> None:
        self.data: dict[str, str | bytes] = {}
        self.down = False

    def _check(self) -> None:
        if self.down:
            raise RedisConnectionError("Connection refused")

    async def set(self, key, value):
        self._check()
        self.data[key] = value
        return True

    async def mget(self, keys):
        self._check()
        return [self.data.get(key) for key in keys]

    async def scan_iter(self, match=None):
        self._check()
        for key in list(self.data):
            if match is None or fnmatch.fnmatchcase(key, match):
                yield key

    async def incr(self, key):
        self._check()
        value = int(self.data.get(key, "0")) + 1
        self.data[key] = str(value)
        return value

    async def ping(self):
        self._check()
        return True

    async def aclose(self):
        pass


class FakeEmbeddingProvider:
    """Embedding provider returning fixed vectors per prompt."""

    def __init__(self, vectors: dict[str, list[float]] | None = None, dimension: int = 3) -> None:
        self.vectors = dict(vectors or {})
        self._dimension = dimension
        self.fail = False
        self.calls: list[str] = []

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_name(self) -> str:
        return "fake-embedding"

    async def encode(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.fail:
            raise EmbeddingFailedError("embedding provider is down")
        return list(self.vectors[text])

    async def is_available(self) -> bool:
        return not self.fail


class FakeCompletionProvider:
    """Completion provider that echoes prompts."""

    def __init__(self) -> None:
        self.fail = False
        self.calls: list[tuple[str, str, int, float]] = []

    async def complete(self, prompt: str, model: str, max_tokens: int, temperature: float) -> str:
        self.calls.append((prompt, model, max_tokens, temperature))
        if self.fail:
            raise CompletionError("gateway unavailable")
        return f"answer to: {prompt}"


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def embeddings():
    return FakeEmbeddingProvider(
        vectors={
            "What is the capital of France?": [1.0, 0.0, 0.0],
            "What's France's capital city?": [0.98, 0.2, 0.0],
            "How do I bake bread?": [0.0, 1.0, 0.0],
            "Explain quantum physics": [0.0, 0.0, 1.0],
        }
    )


@pytest.fixture(params=["memory", "redis"])
def vector_store(request, fake_redis):
    """Every VectorStore implementation, for contract tests."""
    if request.param == "memory":
        return InMemoryVectorStore()
    return RedisVectorStore(redis_client=fake_redis, key_prefix="cache:")
