"""Unit tests for structured logging configuration."""

import json
import logging

import pytest
from unittest.mock import AsyncMock, MagicMock

from core.logging_config import configure_logging, get_logger


class TestLoggingConfiguration:
    """Test suite for logging configuration."""

    def test_configure_logging_levels(self):
        """Test that configure_logging accepts level names in any case."""
        configure_logging(log_level="debug")
        configure_logging()

    def test_invalid_level_rejected(self):
        with pytest.raises(AttributeError):
            configure_logging(log_level="LOUD")

    def test_get_logger_returns_structured_logger(self):
        configure_logging()
        logger = get_logger("scan.scan")

        assert hasattr(logger, "info")
        assert hasattr(logger, "warning")
        assert hasattr(logger, "bind")

    def test_json_output_format(self, caplog):
        """Test that logs are output in JSON format with a timestamp."""
        configure_logging(log_level="INFO")
        logger = get_logger("test")

        with caplog.at_level(logging.INFO):
            logger.info("scan_refreshed", scan_id="abc", status="running")

        for record in caplog.records:
            try:
                log_data = json.loads(record.getMessage())
            except json.JSONDecodeError:
                continue
            assert log_data["event"] == "scan_refreshed"
            assert log_data["scan_id"] == "abc"
            assert log_data["status"] == "running"
            assert "T" in log_data["timestamp"]
            return

        pytest.fail("No valid JSON log output found")

    @pytest.mark.asyncio
    async def test_library_modules_log_json(self, caplog):
        """Test that events logged by library modules come out as JSON."""
        from scan import Scan

        configure_logging(log_level="INFO")
        scans = MagicMock()
        scans.get_scan = AsyncMock(side_effect=ConnectionError("refused"))

        with caplog.at_level(logging.INFO):
            await Scan("abc", scans).dispose()

        events = []
        for record in caplog.records:
            try:
                events.append(json.loads(record.getMessage()))
            except json.JSONDecodeError:
                continue

        failures = [e for e in events if e.get("event") == "scan_dispose_failed"]
        assert len(failures) == 1
        assert failures[0]["scan_id"] == "abc"
        assert failures[0]["logger"] == "scan.scan"
        assert failures[0]["level"] == "warning"
        assert "ConnectionError" in failures[0]["exception"]
