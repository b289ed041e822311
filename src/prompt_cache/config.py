import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv
from redis import asyncio as aioredis

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Cache
    similarity_threshold: float = float(os.getenv("SIMILARITY_THRESHOLD", "0.85"))
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "cache:")
    cache_stats_prefix: str = os.getenv("CACHE_STATS_PREFIX", "cache_stats:")

    # Embedding
    embedding_backend: str = os.getenv("EMBEDDING_BACKEND", "ollama")  # or "local"
    embedding_model: str = os.getenv("EMBEDDING_MODEL", "embeddinggemma")

    # Ollama
    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")

    # AI Gateway
    gateway_account_id: str | None = os.getenv("GATEWAY_ACCOUNT_ID")
    gateway_name: str | None = os.getenv("GATEWAY_NAME")
    gateway_token: str | None = os.getenv("CF_GATEWAY_TOKEN")

    # Provider keys
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    anthropic_api_key: str | None = os.getenv("ANTHROPIC_API_KEY")
    google_ai_studio_token: str | None = os.getenv("GOOGLE_AI_STUDIO_TOKEN")
    workers_ai_token: str | None = os.getenv("WORKERS_AI_TOKEN")

    # Chat defaults
    default_model: str = os.getenv("DEFAULT_MODEL", "@cf/meta/llama-2-7b-chat-int8")
    default_max_tokens: int = int(os.getenv("DEFAULT_MAX_TOKENS", "256"))
    default_temperature: float = float(os.getenv("DEFAULT_TEMPERATURE", "0.7"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    @property
    def is_local_embedding(self) -> bool:
        """Check if embeddings are computed in-process with sentence-transformers."""
        return self.embedding_backend.lower() == "local"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not 0 <= self.similarity_threshold <= 1:
            raise ValueError("SIMILARITY_THRESHOLD must be between 0 and 1 for cosine similarity")

        if self.embedding_backend.lower() not in ["ollama", "local"]:
            raise ValueError(
                f"EMBEDDING_BACKEND must be one of ['ollama', 'local'], "
                f"got {self.embedding_backend}"
            )

        if self.default_max_tokens <= 0:
            raise ValueError("DEFAULT_MAX_TOKENS must be positive")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client(decode_responses: bool = True) -> aioredis.Redis:
    """Create an asyncio Redis client instance.

    Args:
        decode_responses: Decode replies to str. Pass False to receive raw
            bytes and decode them per value.
    """
    return aioredis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=decode_responses,
    )
