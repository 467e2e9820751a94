"""Scan lifecycle: remote API, expectation evaluation and the polling controller."""

from .exceptions import ScanAborted, ScanError, TimedOut, TooManyScans
from .expectation import Expectation, ExpectationResult
from .factory import ScanFactory
from .models import (
    ACTIVE_STATUSES,
    DONE_STATUSES,
    Issue,
    IssueGroup,
    ScanConfig,
    ScanState,
    ScanStatus,
    Severity,
    Target,
    TestType,
)
from .scan import Scan
from .scans import DefaultScans, Scans

__all__ = [
    "ACTIVE_STATUSES",
    "DONE_STATUSES",
    "DefaultScans",
    "Expectation",
    "ExpectationResult",
    "Issue",
    "IssueGroup",
    "Scan",
    "ScanAborted",
    "ScanConfig",
    "ScanError",
    "ScanFactory",
    "ScanState",
    "ScanStatus",
    "Scans",
    "Severity",
    "Target",
    "TestType",
    "TimedOut",
    "TooManyScans",
]
