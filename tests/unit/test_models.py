"""Unit tests for scan and repeater type definitions."""

import pytest

from repeater.models import VALID_TRANSITIONS, RunningStatus
from scan.models import (
    ACTIVE_STATUSES,
    DONE_STATUSES,
    SEVERITY_RANGES,
    Issue,
    IssueGroup,
    ScanConfig,
    ScanState,
    ScanStatus,
    Severity,
    Target,
    TestType,
)


class TestScanStatus:
    """Test status partitions."""

    def test_every_status_is_active_or_done(self):
        assert ACTIVE_STATUSES | DONE_STATUSES == set(ScanStatus)
        assert not ACTIVE_STATUSES & DONE_STATUSES

    def test_queued_is_active(self):
        assert ScanStatus.QUEUED in ACTIVE_STATUSES

    def test_values_are_lowercase(self):
        assert ScanStatus("disrupted") == ScanStatus.DISRUPTED


class TestSeverityRanges:
    def test_threshold_or_higher(self):
        assert SEVERITY_RANGES[Severity.LOW] == set(Severity)
        assert SEVERITY_RANGES[Severity.MEDIUM] == {Severity.MEDIUM, Severity.HIGH}
        assert SEVERITY_RANGES[Severity.HIGH] == {Severity.HIGH}


class TestScanState:
    """Test parsing of scan status replies."""

    def test_from_dict(self):
        state = ScanState.from_dict(
            {
                "status": "running",
                "issuesBySeverity": [
                    {"type": "High", "number": 2},
                    {"type": "Low", "number": 5},
                ],
            }
        )

        assert state.status == ScanStatus.RUNNING
        assert state.issues_by_severity == (
            IssueGroup(severity=Severity.HIGH, count=2),
            IssueGroup(severity=Severity.LOW, count=5),
        )

    def test_missing_groups(self):
        state = ScanState.from_dict({"status": "pending", "issuesBySeverity": None})
        assert state.issues_by_severity == ()

    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError):
            ScanState.from_dict({"status": "exploded"})


class TestIssue:
    def test_from_dict_keeps_extra_fields(self):
        issue = Issue.from_dict(
            {
                "id": "i-1",
                "name": "Reflected XSS",
                "severity": "High",
                "remedy": "Encode output",
                "originalRequest": {"url": "https://example.com"},
            }
        )

        assert issue.severity == Severity.HIGH
        assert issue.remedy == "Encode output"
        assert issue.details is None
        assert issue.extra == {"originalRequest": {"url": "https://example.com"}}


class TestScanConfig:
    """Test scan creation payloads."""

    def test_to_dict(self):
        config = ScanConfig(
            name="nightly",
            tests=[TestType.XSS, TestType.SQLI],
            target=Target(url="https://example.com", headers={"X-Test": "1"}),
            repeater_id="rep-1",
        )

        assert config.to_dict() == {
            "name": "nightly",
            "module": "dast",
            "tests": ["xss", "sqli"],
            "discoveryTypes": ["crawler"],
            "smart": True,
            "skipStaticParams": True,
            "target": {
                "url": "https://example.com",
                "method": "GET",
                "headers": {"X-Test": "1"},
            },
            "repeaters": ["rep-1"],
        }

    def test_optional_fields_omitted(self):
        data = ScanConfig(
            name="n", tests=[TestType.CSRF], target=Target(url="https://example.com")
        ).to_dict()

        assert "repeaters" not in data
        assert "projectId" not in data
        assert "headers" not in data["target"]

    def test_tests_required(self):
        with pytest.raises(ValueError):
            ScanConfig(name="n", tests=[], target=Target(url="https://example.com"))


class TestRunningStatusTransitions:
    def test_off_only_starts(self):
        assert VALID_TRANSITIONS[RunningStatus.OFF] == {RunningStatus.STARTING}

    def test_starting_can_roll_back(self):
        assert RunningStatus.OFF in VALID_TRANSITIONS[RunningStatus.STARTING]

    def test_every_status_has_transitions(self):
        assert set(VALID_TRANSITIONS) == set(RunningStatus)
