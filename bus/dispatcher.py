"""Dispatch contracts implemented by transports."""

from abc import ABC, abstractmethod
from typing import Any, TypeVar

from .command import Command
from .event import Event

R = TypeVar("R")


class CommandDispatcher(ABC):
    """Sends a command and awaits its correlated reply."""

    @abstractmethod
    async def execute(self, command: Command[Any, R]) -> R | None:
        """
        Execute command and return the reply payload.

        Returns None when the remote side has nothing to return. Must raise
        CommandTimeoutError once command.ttl elapses without a reply.
        """
        pass


class EventDispatcher(ABC):
    """Publishes fire-and-forget notifications."""

    @abstractmethod
    async def publish(self, event: Event) -> None:
        """Hand event to the bus. No reply is awaited."""
        pass


class EventHandler(ABC):
    """Consumer of inbound messages of one type."""

    @abstractmethod
    async def handle(self, payload: Any) -> Any:
        """Process payload; a non-None result is sent back when a reply is expected."""
        pass


class EventBus(CommandDispatcher, EventDispatcher):
    """Bidirectional bus: both dispatch contracts plus handler subscriptions."""

    @abstractmethod
    async def init(self) -> None:
        """Connect to the underlying broker."""
        pass

    @abstractmethod
    async def register(self, event_type: str, handler: EventHandler) -> None:
        """Start delivering messages of event_type to handler."""
        pass

    @abstractmethod
    async def destroy(self) -> None:
        """Stop consumers and release broker connections."""
        pass
