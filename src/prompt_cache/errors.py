"""Typed errors raised by the prompt cache.

The cache never retries on its own. Every failure reaches the caller as one
of these types so the front door can decide whether to degrade (treat a
failed lookup as a miss) or fail the request.
"""


class PromptCacheError(Exception):
    """Base class for all prompt cache errors."""


class CacheLookupError(PromptCacheError):
    """A lookup could not produce a hit or miss decision."""


class EmbeddingFailedError(CacheLookupError):
    """The embedding provider errored or returned a malformed vector."""


class StoreError(PromptCacheError):
    """The vector store rejected or could not complete an operation."""


class StoreUnavailableError(StoreError):
    """The backing store could not be reached."""


class StoreInvalidRecordError(StoreError):
    """A record was rejected at write time (empty or mis-sized embedding)."""


class CompletionError(PromptCacheError):
    """The inference backend failed to produce a completion."""
