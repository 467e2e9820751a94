"""Host-registered shutdown hook.

Repeaters never install process-wide signal handlers themselves. The host
creates a ShutdownHook, passes its event to each Repeater, and decides which
signals (if any) should trigger it.
"""

import asyncio
import signal
from types import FrameType
from typing import Iterable, Optional

from core.logging_config import get_logger

logger = get_logger(__name__)

# SIGHUP is not available on Windows
DEFAULT_SIGNALS = tuple(
    getattr(signal, name)
    for name in ("SIGTERM", "SIGINT", "SIGHUP")
    if hasattr(signal, name)
)


class ShutdownHook:
    """Wraps an asyncio.Event that repeaters watch to stop themselves."""

    def __init__(self) -> None:
        self.event = asyncio.Event()
        self._installed: list[int] = []
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def triggered(self) -> bool:
        return self.event.is_set()

    def trigger(self) -> None:
        """Request shutdown of everything watching this hook."""
        if not self.event.is_set():
            logger.info("shutdown_requested")
            self.event.set()

    def install(
        self,
        loop: asyncio.AbstractEventLoop,
        signals: Iterable[int] = DEFAULT_SIGNALS,
    ) -> None:
        """Trigger this hook when the process receives one of `signals`."""
        self._loop = loop
        for signum in signals:
            try:
                loop.add_signal_handler(signum, self.trigger)
            except NotImplementedError:
                # Event loops without signal support (Windows)
                signal.signal(signum, self._handle_signal)
            self._installed.append(signum)

    def uninstall(self) -> None:
        """Restore default handling for every installed signal."""
        for signum in self._installed:
            try:
                if self._loop:
                    self._loop.remove_signal_handler(signum)
            except NotImplementedError:
                signal.signal(signum, signal.SIG_DFL)
        self._installed.clear()

    def _handle_signal(self, signum: int, frame: FrameType | None) -> None:
        logger.info("shutdown_signal_received", signal=signum)
        if self._loop:
            self._loop.call_soon_threadsafe(self.trigger)
        else:
            self.trigger()
