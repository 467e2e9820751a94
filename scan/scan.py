"""Scan controller: polls one remote scan until it finishes or an expectation holds.

State machine:
- PENDING -> QUEUED | RUNNING -> DONE | FAILED | STOPPED | DISRUPTED
- Transitions only happen on a remote status fetch
- Once done, the state is frozen and no further fetches are issued
"""

import asyncio
import contextlib
from typing import AsyncIterator, Optional

from core.logging_config import get_logger
from core.metrics import record_scan_outcome, record_scan_refresh
from .exceptions import ScanAborted, TimedOut, TooManyScans
from .expectation import Expectation, ExpectationLike
from .models import ACTIVE_STATUSES, DONE_STATUSES, Issue, ScanState, ScanStatus
from .scans import Scans

logger = get_logger(__name__)

DEFAULT_POLLING_INTERVAL = 5 * 1000  # ms


class Scan:
    """
    Controller bound to one remote scan.

    A single task is expected to drive a controller at a time; refreshes are
    strictly sequential and there is no internal lock.
    """

    def __init__(
        self,
        id: str,
        scans: Scans,
        polling_interval: int = DEFAULT_POLLING_INTERVAL,
        timeout: Optional[int] = None,
    ):
        """
        Initialize scan controller.

        Args:
            id: Remote scan id
            scans: Remote scan API
            polling_interval: Delay between status fetches in ms
            timeout: Default budget for expect() in ms (None = wait indefinitely)

        Raises:
            ValueError: If polling_interval is not positive
        """
        if polling_interval <= 0:
            raise ValueError(f"Invalid polling interval: {polling_interval}")

        self.id = id
        self.scans = scans
        self.polling_interval = polling_interval
        self.timeout = timeout
        self.state = ScanState(status=ScanStatus.PENDING)

    @property
    def active(self) -> bool:
        return self.state.status in ACTIVE_STATUSES

    @property
    def done(self) -> bool:
        return self.state.status in DONE_STATUSES

    async def issues(self) -> list[Issue]:
        """Refresh status, then list issues found so far."""
        await self._refresh_state()

        return await self.scans.list_issues(self.id)

    async def status(self) -> AsyncIterator[ScanState]:
        """
        Yield a fresh state every polling interval while the scan is active.

        The sleep precedes each fetch, so the first state arrives one polling
        interval after iteration starts. Yields nothing if already done.
        """
        while self.active:
            await asyncio.sleep(self.polling_interval / 1000)

            yield await self._refresh_state()

    async def expect(
        self, expectation: ExpectationLike, timeout: Optional[int] = None
    ) -> None:
        """
        Poll until the expectation holds, the scan finishes, or the timeout fires.

        Args:
            expectation: Severity threshold or predicate taking this scan
            timeout: Budget in ms, overriding the controller's default

        Raises:
            TooManyScans: Scan still queued when the wait concluded
            ScanAborted: Scan finished with FAILED, STOPPED or DISRUPTED
            TimedOut: Timeout elapsed before either of the above
        """
        timeout = self.timeout if timeout is None else timeout
        check = Expectation(expectation)
        timed_out = False

        def _on_timeout() -> None:
            nonlocal timed_out
            timed_out = True

        timer = (
            asyncio.get_running_loop().call_later(timeout / 1000, _on_timeout)
            if timeout
            else None
        )

        try:
            async with contextlib.aclosing(self.status()) as states:
                async for _ in states:
                    result = await check.evaluate(self)
                    if result.satisfied or self.done or timed_out:
                        break
        finally:
            if timer:
                timer.cancel()

        self._assert(timed_out, timeout)

    async def stop(self) -> None:
        """Stop the scan if still active. Never raises."""
        try:
            await self._refresh_state()

            if self.active:
                await self.scans.stop_scan(self.id)
        except Exception as e:
            logger.warning("scan_stop_failed", scan_id=self.id, error=str(e), exc_info=True)

    async def dispose(self) -> None:
        """Delete the scan if it is no longer active. Never raises."""
        try:
            await self._refresh_state()

            if not self.active:
                await self.scans.delete_scan(self.id)
        except Exception as e:
            logger.warning("scan_dispose_failed", scan_id=self.id, error=str(e), exc_info=True)

    def _assert(self, timed_out: bool, timeout: Optional[int]) -> None:
        """Classify the final state. QUEUED wins over abort, abort over timeout."""
        status = self.state.status

        if status == ScanStatus.QUEUED:
            record_scan_outcome("too_many_scans")
            raise TooManyScans()

        if self.done and status != ScanStatus.DONE:
            record_scan_outcome("aborted")
            raise ScanAborted(status)

        if timed_out:
            record_scan_outcome("timed_out")
            raise TimedOut(timeout or 0)

        record_scan_outcome("success")

    async def _refresh_state(self) -> ScanState:
        if not self.done:
            self.state = await self.scans.get_scan(self.id)
            record_scan_refresh()
            logger.debug("scan_refreshed", scan_id=self.id, status=self.state.status.value)

        return self.state
