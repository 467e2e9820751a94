"""Command envelope: an outbound unit of work expecting a correlated reply."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Awaitable, Generic, TypeVar

if TYPE_CHECKING:
    from .dispatcher import CommandDispatcher

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_TTL = 10 * 1000  # ms


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_correlation_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True, kw_only=True)
class Command(Generic[T, R]):
    """
    Immutable request envelope.

    The routing `type` is an explicit tag chosen by the command author; the
    receiving side routes on it, so it must stay stable for a payload shape.
    Every other field is filled in at construction and may be overridden when
    rebuilding a command from the wire or retrying it.
    """

    payload: T
    type: str
    expect_reply: bool = True
    ttl: int = DEFAULT_TTL
    correlation_id: str = field(default_factory=_new_correlation_id)
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        if not self.type:
            raise ValueError("Command type must be a non-empty string")
        if self.ttl <= 0:
            raise ValueError(f"Command ttl must be a positive number of ms, got {self.ttl}")

    def execute(self, dispatcher: "CommandDispatcher") -> Awaitable[R | None]:
        return dispatcher.execute(self)

    def to_dict(self) -> dict[str, Any]:
        """Wire representation."""
        return {
            "type": self.type,
            "payload": self.payload,
            "correlationId": self.correlation_id,
            "createdAt": self.created_at.isoformat(),
            "ttl": self.ttl,
            "expectReply": self.expect_reply,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Command":
        """
        Rebuild a plain Command from its wire representation.

        Typed subclasses fix their fields in __init__, so the result is always
        the base class; receivers route on `type`, not on the Python class.
        """
        return Command(
            payload=data.get("payload"),
            type=data["type"],
            expect_reply=data.get("expectReply", True),
            ttl=data.get("ttl", DEFAULT_TTL),
            correlation_id=data.get("correlationId") or _new_correlation_id(),
            created_at=(
                datetime.fromisoformat(data["createdAt"])
                if data.get("createdAt")
                else _utcnow()
            ),
        )
