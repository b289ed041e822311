"""Cloudflare AI Gateway completion provider.

Every model is reached through the gateway's OpenAI-compatible endpoint:

    https://gateway.ai.cloudflare.com/v1/{account_id}/{gateway}/compat/chat/completions

The gateway routes on a ``{provider}/{model}`` model name, so the only
per-provider logic here is picking that prefix and the matching API key.
"""

from dataclasses import dataclass

import httpx
from loguru import logger

from prompt_cache.config import Settings, settings
from prompt_cache.errors import CompletionError

GATEWAY_HOST = "https://gateway.ai.cloudflare.com"


@dataclass(frozen=True)
class ModelRoute:
    """Where a model request goes.

    Attributes:
        provider: Gateway provider segment (e.g. "openai", "workers-ai")
        model: Model name as sent to the gateway, provider-prefixed
        api_key: Provider API key, if configured
    """

    provider: str
    model: str
    api_key: str | None


def _strip(model: str, prefix: str) -> str:
    return model[len(prefix) :] if model.startswith(prefix) else model


def resolve_model(model: str, config: Settings | None = None) -> ModelRoute:
    """Map a model identifier to its gateway provider and API key.

    Args:
        model: Model identifier, e.g. "gpt-4o-mini", "anthropic/claude-3-5-haiku",
            "@cf/meta/llama-2-7b-chat-int8"
        config: Settings holding the provider keys. Defaults to global settings.

    Returns:
        The resolved route. Unrecognised models go to Workers AI.
    """
    config = config or settings

    if model.startswith("anthropic/") or model.startswith("claude-"):
        name = _strip(model, "anthropic/")
        return ModelRoute("anthropic", f"anthropic/{name}", config.anthropic_api_key)

    if model.startswith("openai/") or model.startswith("gpt-"):
        name = _strip(model, "openai/")
        return ModelRoute("openai", f"openai/{name}", config.openai_api_key)

    if model.startswith("google/") or model.startswith("gemini-"):
        name = _strip(model, "google/")
        return ModelRoute("google-ai-studio", f"google-ai-studio/{name}", config.google_ai_studio_token)

    name = _strip(model, "workers-ai/")
    return ModelRoute("workers-ai", f"workers-ai/{name}", config.workers_ai_token)


class GatewayCompletionProvider:
    """AI Gateway implementation of the CompletionProvider protocol.

    Example:
        ```python
        provider = GatewayCompletionProvider.create()
        text = await provider.complete("Hi", "gpt-4o-mini", max_tokens=64, temperature=0.2)
        ```
    """

    def __init__(
        self,
        config: Settings | None = None,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the gateway provider.

        Args:
            config: Settings with gateway ids and provider keys. Defaults to global settings.
            timeout: Request timeout in seconds.
            client: Pre-configured HTTP client. If None, one is created lazily.
        """
        self._config = config or settings
        self._timeout = timeout
        self._client = client

    @classmethod
    def create(cls, config: Settings | None = None) -> "GatewayCompletionProvider":
        """Factory method to create GatewayCompletionProvider with defaults."""
        return cls(config=config)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    @property
    def endpoint(self) -> str:
        """Chat completions URL of the configured gateway.

        Raises:
            CompletionError: If the gateway account or name is not configured
        """
        account_id = self._config.gateway_account_id
        gateway_name = self._config.gateway_name
        if not account_id or not gateway_name:
            raise CompletionError(
                "Gateway configuration missing. Set GATEWAY_ACCOUNT_ID and GATEWAY_NAME."
            )
        return f"{GATEWAY_HOST}/v1/{account_id}/{gateway_name}/compat/chat/completions"

    def _headers(self, route: ModelRoute) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {route.api_key}"}
        if self._config.gateway_token:
            headers["cf-aig-authorization"] = f"Bearer {self._config.gateway_token}"
        return headers

    async def complete(
        self,
        prompt: str,
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Generate a completion through the gateway.

        Args:
            prompt: The user prompt
            model: Model identifier, optionally provider-prefixed
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature

        Returns:
            The completion text (empty if the provider returned no content)

        Raises:
            CompletionError: On missing configuration, HTTP failure or malformed response
        """
        route = resolve_model(model, self._config)
        if not route.api_key:
            raise CompletionError(f"API key not configured for provider: {route.provider}")

        payload = {
            "model": route.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        logger.debug(f"Calling {route.model} through gateway")
        try:
            response = await self.client.post(self.endpoint, json=payload, headers=self._headers(route))
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise CompletionError(f"Gateway request for {route.model} failed: {e}") from e
        except ValueError as e:
            raise CompletionError(f"Gateway returned invalid JSON: {e}") from e

        try:
            choices = data["choices"]
        except (KeyError, TypeError) as e:
            raise CompletionError(f"Unexpected response format: {data}") from e

        if not choices:
            return ""
        message = choices[0].get("message") or {}
        return message.get("content") or ""

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
