"""Creates repeater records and wires them to a bus."""

import asyncio
import uuid
from typing import Callable, Optional

from bus import EventBus, EventHandler, RedisEventBus
from core.config import Configuration
from core.logging_config import get_logger
from .manager import RepeatersManager
from .repeater import Repeater

logger = get_logger(__name__)

MAX_NAME_LENGTH = 80
DEFAULT_NAME_PREFIX = "sectester"

BusFactory = Callable[[str], EventBus]


class RepeaterFactory:
    """Creates a repeater on the platform and returns a Repeater with an initialized bus."""

    def __init__(
        self,
        configuration: Configuration,
        manager: RepeatersManager,
        bus_factory: Optional[BusFactory] = None,
    ):
        """
        Initialize factory.

        Args:
            configuration: Client configuration
            manager: REST manager for repeater records
            bus_factory: Builds the bus for a repeater id (defaults to RedisEventBus)
        """
        self.configuration = configuration
        self.manager = manager
        self.bus_factory = bus_factory or self._default_bus_factory

    def _default_bus_factory(self, repeater_id: str) -> EventBus:
        return RedisEventBus(
            redis_url=self.configuration.bus_url,
            exchange=self.configuration.exchange,
        )

    @staticmethod
    def generate_name(name_prefix: str = DEFAULT_NAME_PREFIX) -> str:
        return f"{name_prefix}-{uuid.uuid4().hex[:12]}"[:MAX_NAME_LENGTH]

    async def create_repeater(
        self,
        name_prefix: str = DEFAULT_NAME_PREFIX,
        description: Optional[str] = None,
        handlers: Optional[dict[str, EventHandler]] = None,
        shutdown: Optional[asyncio.Event] = None,
    ) -> Repeater:
        """
        Create a repeater record and a Repeater bound to a fresh bus.

        Args:
            name_prefix: Prefix of the generated repeater name
            description: Optional description stored on the platform
            handlers: Inbound message handlers keyed by message type
            shutdown: asyncio.Event set by the host to request shutdown

        Returns:
            Repeater in OFF state; call start() to register it
        """
        name = self.generate_name(name_prefix)
        repeater_id = await self.manager.create_repeater(name, description)

        try:
            bus = self.bus_factory(repeater_id)
            await bus.init()
        except Exception:
            await self._discard_repeater(repeater_id)
            raise

        logger.info("repeater_ready", repeater_id=repeater_id, name=name)
        return Repeater(
            repeater_id=repeater_id,
            bus=bus,
            configuration=self.configuration,
            handlers=handlers,
            shutdown=shutdown,
        )

    async def _discard_repeater(self, repeater_id: str) -> None:
        """Best-effort removal of a record whose bus never came up."""
        try:
            await self.manager.delete_repeater(repeater_id)
        except Exception as e:
            logger.warning(
                "repeater_cleanup_failed", repeater_id=repeater_id, error=str(e), exc_info=True
            )
