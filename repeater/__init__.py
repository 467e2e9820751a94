"""Repeater agents: registration, heartbeats and host-driven shutdown."""

from .commands import (
    CreateRepeaterRequest,
    DeleteRepeaterRequest,
    ListRepeatersRequest,
    RegisterRepeaterCommand,
    RepeaterStatusEvent,
)
from .exceptions import RepeaterError
from .factory import RepeaterFactory
from .lifecycle import ShutdownHook
from .manager import RepeatersManager
from .models import RepeaterStatus, RunningStatus
from .repeater import Repeater

__all__ = [
    "CreateRepeaterRequest",
    "DeleteRepeaterRequest",
    "ListRepeatersRequest",
    "RegisterRepeaterCommand",
    "Repeater",
    "RepeaterError",
    "RepeaterFactory",
    "RepeaterStatus",
    "RepeaterStatusEvent",
    "RepeatersManager",
    "RunningStatus",
    "ShutdownHook",
]
