"""Uniform evaluation of severity thresholds and caller predicates."""

import inspect
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Union

from core.logging_config import get_logger
from .models import SEVERITY_RANGES, Severity

if TYPE_CHECKING:
    from .scan import Scan

logger = get_logger(__name__)

Predicate = Callable[["Scan"], Any]
ExpectationLike = Union[Severity, Predicate]


class ExpectationResult(Enum):
    """Outcome of one evaluation."""

    SATISFIED = "satisfied"
    NOT_YET = "not_yet"
    FAILED = "failed"  # Evaluation raised, treated as not yet

    @property
    def satisfied(self) -> bool:
        return self is ExpectationResult.SATISFIED


class Expectation:
    """
    Compiled expectation.

    A severity threshold is satisfied once the scan reports at least one issue
    at that severity or higher. A predicate is satisfied when it returns a
    truthy value (awaitables are awaited). A predicate that raises yields
    FAILED and the wait keeps polling, so a broken predicate degrades to
    "never satisfied".
    """

    def __init__(self, expectation: ExpectationLike):
        if not isinstance(expectation, Severity) and not callable(expectation):
            raise TypeError(
                f"Expectation must be a Severity or a callable, got {type(expectation).__name__}"
            )
        self.expectation = expectation

    async def evaluate(self, scan: "Scan") -> ExpectationResult:
        try:
            if isinstance(self.expectation, Severity):
                satisfied = self._satisfies_severity(scan, self.expectation)
            else:
                satisfied = self.expectation(scan)
                if inspect.isawaitable(satisfied):
                    satisfied = await satisfied
            return ExpectationResult.SATISFIED if satisfied else ExpectationResult.NOT_YET
        except Exception as e:
            logger.debug("expectation_failed", scan_id=scan.id, error=repr(e))
            return ExpectationResult.FAILED

    @staticmethod
    def _satisfies_severity(scan: "Scan", severity: Severity) -> bool:
        accepted = SEVERITY_RANGES[severity]
        return any(
            group.severity in accepted and group.count > 0
            for group in scan.state.issues_by_severity
        )
