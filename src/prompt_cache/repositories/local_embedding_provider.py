"""Local sentence-transformers embedding provider.

Runs a sentence-transformers model in-process. No API calls required.
Encoding is CPU/GPU bound, so it runs in a worker thread to keep the
event loop free.
"""

import asyncio
import time

import numpy as np
from loguru import logger
from sentence_transformers import SentenceTransformer

from prompt_cache.config import settings
from prompt_cache.errors import EmbeddingFailedError


class LocalEmbeddingProvider:
    """Local sentence-transformers implementation of EmbeddingProvider.

    This class satisfies the EmbeddingProvider protocol through structural
    typing - no explicit inheritance needed.

    Supports Matryoshka models (e.g. google/embeddinggemma-300m) through
    ``truncate_dim``.
    """

    def __init__(self, model_name: str | None = None, truncate_dim: int | None = None) -> None:
        """Initialize the local embedding provider.

        Args:
            model_name: Name of the sentence-transformers model.
                       Defaults to settings.embedding_model.
            truncate_dim: Optional output dimension for Matryoshka models.
        """
        self._model_name = model_name or settings.embedding_model
        self._truncate_dim = truncate_dim
        self._model: SentenceTransformer | None = None
        self._dimension: int | None = None

    @classmethod
    def create(
        cls, model_name: str | None = None, truncate_dim: int | None = None
    ) -> "LocalEmbeddingProvider":
        """Factory method to create LocalEmbeddingProvider with defaults.

        Args:
            model_name: Model name. If None, uses settings.
            truncate_dim: Matryoshka output dimension. If None, the model's full dimension.

        Returns:
            Configured LocalEmbeddingProvider
        """
        return cls(model_name=model_name, truncate_dim=truncate_dim)

    @property
    def model(self) -> SentenceTransformer:
        """Lazy-load the embedding model."""
        if self._model is None:
            logger.info(f"Loading embedding model: {self._model_name}")
            start_time = time.time()
            self._model = SentenceTransformer(self._model_name, truncate_dim=self._truncate_dim)
            logger.info(f"Model loaded in {time.time() - start_time:.2f}s")
        return self._model

    @property
    def dimension(self) -> int:
        """Get the embedding vector dimension.

        The dimension is read when the model loads in a worker thread
        (``is_available`` or the first ``encode``), never on the caller's thread.

        Raises:
            EmbeddingFailedError: If the model has not been loaded yet
        """
        if self._dimension is None:
            raise EmbeddingFailedError(
                f"Dimension of model '{self._model_name}' is unknown until it is loaded"
            )
        return self._dimension

    @property
    def model_name(self) -> str:
        """Get the model name/identifier."""
        return self._model_name

    def _load_sync(self) -> SentenceTransformer:
        model = self.model
        if self._dimension is None:
            self._dimension = model.get_sentence_embedding_dimension()
        return model

    def _encode_sync(self, text: str) -> list[float]:
        embedding = self._load_sync().encode(
            text,
            show_progress_bar=False,
            normalize_embeddings=True,
        )
        if isinstance(embedding, np.ndarray):
            vector = embedding.tolist() if embedding.ndim == 1 else embedding[0].tolist()
        else:
            vector = list(embedding)
        if self._dimension is None:
            self._dimension = len(vector)
        return vector

    async def encode(self, text: str) -> list[float]:
        """Generate embedding vector for a single text.

        Args:
            text: The text to encode

        Returns:
            The embedding vector as a list of floats

        Raises:
            EmbeddingFailedError: If the model cannot be loaded or fails to encode
        """
        try:
            return await asyncio.to_thread(self._encode_sync, text)
        except (OSError, RuntimeError, ValueError) as e:
            raise EmbeddingFailedError(f"Local embedding failed: {e}") from e

    async def is_available(self) -> bool:
        """Check if the model can be loaded.

        Returns:
            True if the model can be loaded, False otherwise
        """
        try:
            await asyncio.to_thread(self._load_sync)
            return True
        except (OSError, RuntimeError, ValueError):
            return False
