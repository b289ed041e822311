"""Embedding provider protocol.

Defines the interface for any embedding generation service that can
convert text to vector embeddings.

Implementations can include:
- Ollama (local HTTP API, default)
- sentence-transformers (in-process)
- Any hosted embeddings API
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Protocol for embedding generation services.

    Example:
        ```python
        from prompt_cache.protocols import EmbeddingProvider

        provider: EmbeddingProvider = OllamaEmbeddingProvider.create()
        provider: EmbeddingProvider = LocalEmbeddingProvider.create()
        ```
    """

    @property
    def dimension(self) -> int:
        """Return the dimension of the embedding vectors.

        Every vector returned by ``encode`` has exactly this length.
        """
        ...

    @property
    def model_name(self) -> str:
        """Return the name/identifier of the model."""
        ...

    async def encode(self, text: str) -> list[float]:
        """Generate embedding vector for a single text.

        Args:
            text: The text to encode

        Returns:
            The embedding vector as a list of floats

        Raises:
            EmbeddingFailedError: If the provider cannot produce an embedding
        """
        ...

    async def is_available(self) -> bool:
        """Check if the embedding provider is available.

        Returns:
            True if available, False otherwise
        """
        ...
