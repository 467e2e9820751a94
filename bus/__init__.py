"""Message envelopes, dispatch contracts and transports."""

from .command import DEFAULT_TTL, Command
from .dispatcher import CommandDispatcher, EventBus, EventDispatcher, EventHandler
from .event import Event
from .exceptions import BusError, CommandTimeoutError, HttpCommandError
from .http import HttpCommandDispatcher, HttpRequest
from .redis_bus import RedisEventBus

__all__ = [
    "DEFAULT_TTL",
    "Command",
    "Event",
    "CommandDispatcher",
    "EventDispatcher",
    "EventHandler",
    "EventBus",
    "BusError",
    "CommandTimeoutError",
    "HttpCommandError",
    "HttpRequest",
    "HttpCommandDispatcher",
    "RedisEventBus",
]
