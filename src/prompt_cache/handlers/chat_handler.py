"""HTTP handler for cached chat completions.

A failed lookup degrades to a miss and a failed store still returns the
fresh response: the cache is an optimisation, so only a failed completion
fails the request.
"""

import time

from fastapi import HTTPException, status
from loguru import logger

from prompt_cache.config import settings
from prompt_cache.dto import ChatRequest, ChatResponse
from prompt_cache.entities import CacheHit
from prompt_cache.errors import CacheLookupError, CompletionError, StoreError
from prompt_cache.protocols import CompletionProvider, StatsCounter
from prompt_cache.services import CacheService


def _now_ms() -> int:
    return int(time.time() * 1000)


class ChatHandler:
    """Serve chat requests from the cache, falling back to the model.

    Example:
        ```python
        handler = ChatHandler(cache_service, completion_provider, stats_counter)
        response = await handler.chat(ChatRequest(prompt="What is the capital of France?"))
        ```
    """

    def __init__(
        self,
        cache_service: CacheService,
        completion_provider: CompletionProvider,
        stats_counter: StatsCounter,
    ) -> None:
        self._cache = cache_service
        self._completions = completion_provider
        self._counter = stats_counter

    async def _record(self, hit: bool) -> None:
        try:
            if hit:
                await self._counter.record_hit()
            else:
                await self._counter.record_miss()
        except StoreError as e:
            logger.warning(f"Failed to update cache counters: {e}")

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """Handle POST /chat requests.

        Raises:
            HTTPException: 502 if the model call fails
        """
        model = request.model or settings.default_model
        max_tokens = request.max_tokens or settings.default_max_tokens
        temperature = request.temperature if request.temperature is not None else settings.default_temperature

        embedding: list[float] | None = None
        try:
            result = await self._cache.lookup(request.prompt)
        except (CacheLookupError, StoreError) as e:
            logger.warning(f"Cache lookup failed, treating as miss: {e}")
        else:
            if isinstance(result, CacheHit):
                logger.info(f"Cache hit! Similarity: {result.similarity:.4f}")
                await self._record(hit=True)
                return ChatResponse(
                    response=result.response,
                    cached=True,
                    similarity=result.similarity,
                    timestamp=_now_ms(),
                )
            embedding = result.embedding

        logger.info(f"Cache miss - calling model {model}")
        await self._record(hit=False)

        try:
            response_text = await self._completions.complete(
                request.prompt,
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except CompletionError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Model call failed: {e}",
            ) from e

        try:
            await self._cache.store(request.prompt, response_text, model_tag=model, embedding=embedding)
        except (CacheLookupError, StoreError) as e:
            logger.warning(f"Failed to cache response: {e}")

        return ChatResponse(response=response_text, cached=False, timestamp=_now_ms())
