"""Unit tests for ScanFactory."""

import pytest

from core.config import Configuration
from scan import Scan, ScanConfig, ScanFactory, Target, TestType

SCAN_ID = "roMq1UVuhPKkndLERNKnA8"


@pytest.fixture
def config():
    return ScanConfig(name="smoke", tests=[TestType.XSS], target=Target(url="https://example.com"))


@pytest.mark.asyncio
async def test_create_scan_uses_configuration_defaults(mock_scans, config):
    configuration = Configuration(hostname="app.example.com", polling_interval=1000, timeout=2000)
    factory = ScanFactory(configuration, mock_scans)

    scan = await factory.create_scan(config)

    assert isinstance(scan, Scan)
    assert scan.id == SCAN_ID
    assert scan.polling_interval == 1000
    assert scan.timeout == 2000
    mock_scans.create_scan.assert_awaited_once_with(config)


@pytest.mark.asyncio
async def test_create_scan_overrides(mock_scans, configuration, config):
    factory = ScanFactory(configuration, mock_scans)

    scan = await factory.create_scan(config, polling_interval=250, timeout=60000)

    assert scan.polling_interval == 250
    assert scan.timeout == 60000


def test_attach_existing_scan(mock_scans, configuration):
    factory = ScanFactory(configuration, mock_scans)

    scan = factory.attach(SCAN_ID)

    assert scan.id == SCAN_ID
    assert scan.polling_interval == configuration.polling_interval
    mock_scans.create_scan.assert_not_called()
