"""Cache record domain entity."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class CacheRecordEntity:
    """Domain entity for a cached prompt-response pair.

    Records are created once, after a cache miss, and never mutated.

    Attributes:
        id: Unique key of the record, stable for its lifetime
        prompt: The original user prompt (kept for debugging, not matched on)
        embedding: The embedding vector for the prompt
        response: The cached LLM response
        created_at: When this record was created (Unix timestamp)
        model_tag: Label of the backend that produced the response
    """

    id: str
    prompt: str
    embedding: list[float] = field(repr=False)
    response: str
    created_at: float
    model_tag: str

    @property
    def created_at_datetime(self) -> datetime:
        """Convert timestamp to datetime."""
        return datetime.fromtimestamp(self.created_at)

    def to_dict(self) -> dict[str, Any]:
        """Convert the record to a JSON-compatible dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CacheRecordEntity":
        """Build a record from its dictionary form.

        Raises:
            KeyError: If a field is missing
            TypeError: If a field has the wrong type
            ValueError: If a numeric field cannot be parsed
        """
        embedding = data["embedding"]
        if not isinstance(embedding, list):
            raise TypeError(f"embedding must be a list, got {type(embedding).__name__}")

        return cls(
            id=str(data["id"]),
            prompt=str(data["prompt"]),
            embedding=[float(x) for x in embedding],
            response=str(data["response"]),
            created_at=float(data["created_at"]),
            model_tag=str(data.get("model_tag", "")),
        )
