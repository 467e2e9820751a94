"""Failures raised when an expectation wait concludes unsuccessfully."""

from .models import ScanStatus


class ScanError(Exception):
    """Base class for scan wait failures."""

    pass


class TooManyScans(ScanError):
    """Raised when the scan is still queued: the backend never admitted it."""

    def __init__(self) -> None:
        super().__init__(
            "Too many scans are running, the scan was not admitted from the queue"
        )


class ScanAborted(ScanError):
    """Raised when the scan finished in a state other than DONE."""

    def __init__(self, status: ScanStatus) -> None:
        super().__init__(f"Scan aborted with status: {status.value}")
        self.status = status


class TimedOut(ScanError):
    """Raised when the wait's own timeout elapsed first."""

    def __init__(self, timeout: int) -> None:
        super().__init__(f"The expectation was not satisfied within {timeout} ms")
        self.timeout = timeout
