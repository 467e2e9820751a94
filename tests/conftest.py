"""
Root pytest configuration for the SecTester client test suite.

Test Layer Architecture:
    unit:     Pure models, envelopes, configuration      [<1s]
    layer02:  Components with mocked dependencies        [~5s]
"""

import pytest


def pytest_configure(config):
    """Register all custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests - pure models and configuration"
    )
    config.addinivalue_line(
        "markers", "layer02: Layer 02 tests - Internal components (mocked dependencies)"
    )


def pytest_collection_modifyitems(config, items):
    """
    Auto-apply markers based on test location.

    Tests in layer directories automatically get the corresponding marker.
    """
    for item in items:
        test_path = str(item.fspath)

        if "layer02_internal" in test_path:
            item.add_marker(pytest.mark.layer02)
        elif "unit" in test_path:
            item.add_marker(pytest.mark.unit)
