"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis -> in-memory, Ollama -> local, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from prompt_cache.protocols import EmbeddingProvider, VectorStore

    store: VectorStore = RedisVectorStore.create()     # works
    store: VectorStore = InMemoryVectorStore()          # also works
    ```
"""

from .completion_provider import CompletionProvider
from .embedding_provider import EmbeddingProvider
from .stats_counter import StatsCounter
from .vector_store import VectorStore

__all__ = [
    "CompletionProvider",
    "EmbeddingProvider",
    "StatsCounter",
    "VectorStore",
]
