"""Repeater agent: registers with the platform over the bus and reports heartbeats."""

import asyncio
import contextlib
from typing import Optional

from bus import EventBus, EventHandler
from core.config import Configuration
from core.logging_config import get_logger
from .commands import RegisterRepeaterCommand, RepeaterStatusEvent
from .exceptions import RepeaterError
from .models import VALID_TRANSITIONS, RepeaterStatus, RunningStatus

logger = get_logger(__name__)

HEARTBEAT_INTERVAL = 10  # seconds


class Repeater:
    """
    Lifecycle of one registered repeater.

    Lifecycle:
    - start(): OFF -> STARTING -> RUNNING (rolls back to OFF on failure)
    - stop(): RUNNING -> OFF, publishes `disconnected` and destroys the bus
    - shutdown: when the host sets the shutdown event, a running repeater stops itself
    """

    def __init__(
        self,
        repeater_id: str,
        bus: EventBus,
        configuration: Configuration,
        handlers: Optional[dict[str, EventHandler]] = None,
        shutdown: Optional[asyncio.Event] = None,
        heartbeat_interval: float = HEARTBEAT_INTERVAL,
    ):
        """
        Initialize repeater.

        Args:
            repeater_id: Id of the repeater record on the platform
            bus: Connected event bus
            configuration: Client configuration (version is sent on registration)
            handlers: Inbound message handlers keyed by message type
            shutdown: Event set by the host to request shutdown
            heartbeat_interval: Seconds between `connected` status events
        """
        self.repeater_id = repeater_id
        self.bus = bus
        self.configuration = configuration
        self.handlers = handlers or {}
        self.shutdown = shutdown
        self.heartbeat_interval = heartbeat_interval
        self.running_status = RunningStatus.OFF

        self._heartbeat: Optional[asyncio.Task] = None
        self._shutdown_watcher: Optional[asyncio.Task] = None

    def _transition(self, new_status: RunningStatus) -> None:
        if new_status not in VALID_TRANSITIONS[self.running_status]:
            raise RepeaterError(
                f"Invalid transition: {self.running_status.value} → {new_status.value}"
            )
        self.running_status = new_status

    async def start(self) -> None:
        """
        Register with the platform and begin heartbeats.

        Raises:
            RepeaterError: If already active or registration is rejected
        """
        if self.running_status != RunningStatus.OFF:
            raise RepeaterError("Repeater is already active.")

        self._transition(RunningStatus.STARTING)

        try:
            await self._register()
            await self._subscribe_to_events()
            await self._schedule_ping()
            self._transition(RunningStatus.RUNNING)
        except Exception:
            await self._cancel_heartbeat()
            self._transition(RunningStatus.OFF)
            raise

        if self.shutdown is not None:
            self._shutdown_watcher = asyncio.create_task(self._watch_shutdown())

        logger.info("repeater_started", repeater_id=self.repeater_id)

    async def stop(self) -> None:
        """
        Publish `disconnected` and release the bus.

        Raises:
            RepeaterError: If the repeater is not running
        """
        if self.running_status != RunningStatus.RUNNING:
            raise RepeaterError("Cannot stop non-running repeater.")

        self._transition(RunningStatus.OFF)

        await self._cancel_heartbeat()

        watcher = self._shutdown_watcher
        self._shutdown_watcher = None
        if watcher and watcher is not asyncio.current_task():
            watcher.cancel()

        await self._send_status(RepeaterStatus.DISCONNECTED)
        await self.bus.destroy()

        logger.info("repeater_stopped", repeater_id=self.repeater_id)

    async def _register(self) -> None:
        reply = await self.bus.execute(
            RegisterRepeaterCommand(self.repeater_id, self.configuration.version)
        )
        if not reply:
            raise RepeaterError("Error registering repeater.")
        if reply.get("error"):
            raise RepeaterError(f"Error registering repeater: {reply['error']}")

    async def _subscribe_to_events(self) -> None:
        await asyncio.gather(
            *(
                self.bus.register(event_type, handler)
                for event_type, handler in self.handlers.items()
            )
        )

    async def _schedule_ping(self) -> None:
        await self._send_status(RepeaterStatus.CONNECTED)
        self._heartbeat = asyncio.create_task(self._heartbeat_loop())

    async def _heartbeat_loop(self) -> None:
        while True:
            await asyncio.sleep(self.heartbeat_interval)
            try:
                await self._send_status(RepeaterStatus.CONNECTED)
            except Exception as e:
                logger.warning(
                    "repeater_heartbeat_failed", repeater_id=self.repeater_id, error=str(e)
                )

    async def _cancel_heartbeat(self) -> None:
        if self._heartbeat:
            self._heartbeat.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._heartbeat
            self._heartbeat = None

    async def _send_status(self, status: RepeaterStatus) -> None:
        await self.bus.publish(RepeaterStatusEvent(self.repeater_id, status))

    async def _watch_shutdown(self) -> None:
        await self.shutdown.wait()

        if self.running_status == RunningStatus.RUNNING:
            try:
                await self.stop()
            except Exception as e:
                logger.error(
                    "repeater_stop_failed",
                    repeater_id=self.repeater_id,
                    error=str(e),
                    exc_info=True,
                )
