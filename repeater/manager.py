"""Repeater records on the platform REST API."""

from typing import Optional

from bus import CommandDispatcher
from core.logging_config import get_logger
from .commands import CreateRepeaterRequest, DeleteRepeaterRequest, ListRepeatersRequest
from .exceptions import RepeaterError

logger = get_logger(__name__)


class RepeatersManager:
    """Creates and deletes repeater records."""

    def __init__(self, dispatcher: CommandDispatcher):
        self.dispatcher = dispatcher

    async def create_repeater(self, name: str, description: Optional[str] = None) -> str:
        """
        Create a repeater and return its id.

        Some API versions answer the POST with an empty body; the id is then
        looked up by name.

        Raises:
            RepeaterError: If the created repeater cannot be found
        """
        reply = await self.dispatcher.execute(CreateRepeaterRequest(name, description))
        if reply and reply.get("id"):
            repeater_id = reply["id"]
        else:
            repeater_id = await self._find_by_name(name)

        if not repeater_id:
            raise RepeaterError(f"Cannot find created repeater id by name: {name}")

        logger.info("repeater_created", repeater_id=repeater_id, name=name)
        return repeater_id

    async def delete_repeater(self, repeater_id: str) -> None:
        await self.dispatcher.execute(DeleteRepeaterRequest(repeater_id))
        logger.info("repeater_deleted", repeater_id=repeater_id)

    async def _find_by_name(self, name: str) -> Optional[str]:
        repeaters = await self.dispatcher.execute(ListRepeatersRequest()) or []
        for repeater in repeaters:
            if repeater.get("name") == name:
                return repeater.get("id")
        return None
