"""Creates scans remotely and hands back bound controllers."""

from typing import Optional

from core.config import Configuration
from .models import ScanConfig
from .scan import Scan
from .scans import Scans


class ScanFactory:
    """Creates Scan controllers using configuration defaults."""

    def __init__(self, configuration: Configuration, scans: Scans):
        self.configuration = configuration
        self.scans = scans

    async def create_scan(
        self,
        config: ScanConfig,
        polling_interval: Optional[int] = None,
        timeout: Optional[int] = None,
    ) -> Scan:
        """
        Create the scan on the platform and return its controller.

        Args:
            config: Scan creation parameters
            polling_interval: Override of the configured polling interval (ms)
            timeout: Override of the configured expectation timeout (ms)

        Returns:
            Scan controller bound to the new scan id
        """
        scan_id = await self.scans.create_scan(config)

        return Scan(
            id=scan_id,
            scans=self.scans,
            polling_interval=(
                self.configuration.polling_interval
                if polling_interval is None
                else polling_interval
            ),
            timeout=self.configuration.timeout if timeout is None else timeout,
        )

    def attach(self, scan_id: str) -> Scan:
        """Bind a controller to a scan that already exists server-side."""
        return Scan(
            id=scan_id,
            scans=self.scans,
            polling_interval=self.configuration.polling_interval,
            timeout=self.configuration.timeout,
        )
