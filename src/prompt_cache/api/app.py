from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prompt_cache.api.dependencies import CacheHandlerDep, ChatHandlerDep, lifespan
from prompt_cache.config import settings
from prompt_cache.dto import (
    CacheLookupResponse,
    CacheStatsResponse,
    CacheStoreResponse,
    ChatRequest,
    ChatResponse,
    HealthCheckResponse,
    LookupCacheRequest,
    StoreCacheRequest,
)

app = FastAPI(
    title="Prompt Cache API",
    description="Semantic prompt caching in front of LLM inference",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Prompt Cache API",
        "version": "0.1.0",
        "description": "Semantic prompt caching in front of LLM inference",
        "endpoints": {
            "chat": "/chat",
            "cache": "/cache",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: CacheHandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.get("/stats", response_model=CacheStatsResponse)
async def get_stats(handler: CacheHandlerDep) -> CacheStatsResponse:
    """Cache size and hit/miss statistics."""
    return await handler.get_stats()


@app.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, handler: ChatHandlerDep) -> ChatResponse:
    """Answer a prompt from the cache, or from the model on a miss."""
    return await handler.chat(request)


@app.post("/cache/lookup", response_model=CacheLookupResponse)
async def lookup_cache(request: LookupCacheRequest, handler: CacheHandlerDep) -> CacheLookupResponse:
    """Look up a semantically similar cached prompt."""
    return await handler.lookup(request)


@app.post("/cache/store", response_model=CacheStoreResponse)
async def store_cache(request: StoreCacheRequest, handler: CacheHandlerDep) -> CacheStoreResponse:
    """Store a prompt/response pair in the cache."""
    return await handler.store(request)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "prompt_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
