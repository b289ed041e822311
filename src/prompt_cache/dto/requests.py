"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Request DTO for a cached chat completion.

    Unset generation parameters fall back to the settings defaults.
    """

    prompt: str = Field(..., description="The user prompt", min_length=1)
    model: str | None = Field(
        None,
        description="Model identifier, e.g. 'gpt-4o-mini', 'anthropic/claude-3-5-haiku', '@cf/meta/llama-2-7b-chat-int8'",
    )
    max_tokens: int | None = Field(None, description="Maximum tokens to generate", gt=0)
    temperature: float | None = Field(None, description="Sampling temperature", ge=0.0, le=2.0)


class LookupCacheRequest(BaseModel):
    """Request DTO for a direct cache lookup."""

    prompt: str = Field(..., description="The prompt to search for", min_length=1)


class StoreCacheRequest(BaseModel):
    """Request DTO for storing in cache."""

    prompt: str = Field(..., description="The original user prompt", min_length=1)
    response: str = Field(..., description="The LLM response to cache")
    model: str = Field("unknown", description="Label of the model that produced the response")
