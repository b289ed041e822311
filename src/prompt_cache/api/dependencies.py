"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request
from loguru import logger

from prompt_cache.config import get_redis_client, settings
from prompt_cache.handlers import CacheHandler, ChatHandler
from prompt_cache.protocols import EmbeddingProvider
from prompt_cache.repositories import (
    GatewayCompletionProvider,
    OllamaEmbeddingProvider,
    RedisStatsCounter,
    RedisVectorStore,
)
from prompt_cache.services import CacheService


def get_cache_handler(request: Request) -> CacheHandler:
    """Dependency injection for CacheHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "cache_handler", None)
    if handler is None:
        raise RuntimeError("CacheHandler not initialized. Check lifespan setup.")
    return handler


def get_chat_handler(request: Request) -> ChatHandler:
    """Dependency injection for ChatHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "chat_handler", None)
    if handler is None:
        raise RuntimeError("ChatHandler not initialized. Check lifespan setup.")
    return handler


def build_embedding_provider() -> EmbeddingProvider:
    """Create the embedding provider selected by EMBEDDING_BACKEND.

    ⚠️ Switching provider or model changes the vector dimension; records
    stored with the old dimension never match again.
    """
    if settings.is_local_embedding:
        # Imported lazily: loads sentence-transformers
        from prompt_cache.repositories.local_embedding_provider import LocalEmbeddingProvider

        return LocalEmbeddingProvider.create(model_name=settings.embedding_model)

    return OllamaEmbeddingProvider.create(
        model_name=settings.embedding_model,
        base_url=settings.ollama_base_url,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Repositories (Redis vector store, counters, embeddings, gateway)
    2. Service (business logic) - app.state.cache_service
    3. Handlers (HTTP endpoints) - app.state.cache_handler, app.state.chat_handler

    Cleanup:
        Closes clients and removes all services from app.state on shutdown
    """
    logger.info("Starting Prompt Cache API...")
    logger.info(f"Embedding: {settings.embedding_backend} / {settings.embedding_model}")
    logger.info(f"Redis URL: {settings.redis_url}")

    # Raw bytes: the vector store decodes each record itself
    redis_client = get_redis_client(decode_responses=False)
    embedding_provider = build_embedding_provider()
    vector_store = RedisVectorStore(redis_client=redis_client, embedding_provider=embedding_provider)
    stats_counter = RedisStatsCounter(redis_client=redis_client)
    completion_provider = GatewayCompletionProvider.create()

    cache_service = CacheService.create(
        vector_store=vector_store,
        embedding_provider=embedding_provider,
    )

    app.state.cache_service = cache_service
    app.state.cache_handler = CacheHandler(cache_service=cache_service, stats_counter=stats_counter)
    app.state.chat_handler = ChatHandler(
        cache_service=cache_service,
        completion_provider=completion_provider,
        stats_counter=stats_counter,
    )

    logger.info(f"✓ Cache service initialized (threshold {cache_service.threshold})")
    if not await vector_store.health_check():
        logger.warning("Redis connection failed - lookups will degrade to misses")

    yield

    del app.state.chat_handler
    del app.state.cache_handler
    del app.state.cache_service
    await completion_provider.close()
    if isinstance(embedding_provider, OllamaEmbeddingProvider):
        await embedding_provider.close()
    await vector_store.close()
    logger.info("✓ Cache service shut down")


# Type aliases for cleaner dependency injection
CacheHandlerDep = Annotated[CacheHandler, Depends(get_cache_handler)]
ChatHandlerDep = Annotated[ChatHandler, Depends(get_chat_handler)]
