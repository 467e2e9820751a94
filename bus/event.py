"""Event envelope: a fire-and-forget notification."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, kw_only=True)
class Event(Generic[T]):
    """Immutable notification. No correlation id, no reply, no ttl."""

    payload: T
    type: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if not self.type:
            raise ValueError("Event type must be a non-empty string")

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "payload": self.payload,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Event":
        created_at = data.get("createdAt")
        if created_at:
            return cls(
                payload=data.get("payload"),
                type=data["type"],
                created_at=datetime.fromisoformat(created_at),
            )
        return cls(payload=data.get("payload"), type=data["type"])
