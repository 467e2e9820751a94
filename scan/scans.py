"""Remote scan API abstraction."""

from abc import ABC, abstractmethod

from bus import CommandDispatcher
from core.logging_config import get_logger
from .commands import CreateScan, DeleteScan, GetScan, ListIssues, StopScan
from .models import Issue, ScanConfig, ScanState

logger = get_logger(__name__)


class Scans(ABC):
    """Operations on the platform's scan resource."""

    @abstractmethod
    async def create_scan(self, config: ScanConfig) -> str:
        """Create and start a scan, return its id."""
        pass

    @abstractmethod
    async def get_scan(self, scan_id: str) -> ScanState:
        """Get current scan status and issue counts."""
        pass

    @abstractmethod
    async def list_issues(self, scan_id: str) -> list[Issue]:
        """List issues found so far."""
        pass

    @abstractmethod
    async def stop_scan(self, scan_id: str) -> None:
        pass

    @abstractmethod
    async def delete_scan(self, scan_id: str) -> None:
        pass


class DefaultScans(Scans):
    """Scans implemented as commands sent through a dispatcher."""

    def __init__(self, dispatcher: CommandDispatcher):
        self.dispatcher = dispatcher

    async def create_scan(self, config: ScanConfig) -> str:
        reply = await self.dispatcher.execute(CreateScan(config.to_dict()))
        if not reply or not reply.get("id"):
            raise ValueError(f"Scan creation returned no id for '{config.name}'")

        logger.info("scan_created", scan_id=reply["id"], name=config.name)
        return reply["id"]

    async def get_scan(self, scan_id: str) -> ScanState:
        reply = await self.dispatcher.execute(GetScan(scan_id))
        if not reply:
            raise ValueError(f"Scan {scan_id} not found")

        return ScanState.from_dict(reply)

    async def list_issues(self, scan_id: str) -> list[Issue]:
        reply = await self.dispatcher.execute(ListIssues(scan_id))
        return [Issue.from_dict(item) for item in reply or []]

    async def stop_scan(self, scan_id: str) -> None:
        await self.dispatcher.execute(StopScan(scan_id))
        logger.info("scan_stopped", scan_id=scan_id)

    async def delete_scan(self, scan_id: str) -> None:
        await self.dispatcher.execute(DeleteScan(scan_id))
        logger.info("scan_deleted", scan_id=scan_id)
