"""Completion provider protocol.

The cache only needs "given a prompt, get a completion string" from an
inference backend. Which provider serves a model is the implementation's
concern.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CompletionProvider(Protocol):
    """Protocol for LLM inference backends."""

    async def complete(
        self,
        prompt: str,
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Generate a completion for a single user prompt.

        Args:
            prompt: The user prompt
            model: Model identifier, optionally provider-prefixed
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature

        Returns:
            The completion text

        Raises:
            CompletionError: If the backend fails or is not configured
        """
        ...
