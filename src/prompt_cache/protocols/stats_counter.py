"""Hit/miss counter protocol.

Counters live outside the cache service: the front door reports each
lookup outcome here, and the service itself stays stateless.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class StatsCounter(Protocol):
    """Protocol for persisting aggregate cache hit/miss counts."""

    async def record_hit(self) -> None:
        """Increment the hit counter."""
        ...

    async def record_miss(self) -> None:
        """Increment the miss counter."""
        ...

    async def counts(self) -> tuple[int, int]:
        """Return the current ``(hits, misses)`` totals."""
        ...
