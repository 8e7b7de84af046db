"""
Unit Test Layer Configuration (Layer 4)

Structure:
    tests/unit/
    └── golden/      🔒 Characterization (never modify)

Usage:
    pytest tests/unit -v                 # All unit tests
    pytest tests/unit/golden -v          # Only golden tests
    pytest tests/unit -m golden -v       # By marker
"""
import os
import sys

import pytest

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))


def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "golden: safety net tests - DO NOT MODIFY"
    )


@pytest.fixture
def clean_carrier_env(monkeypatch):
    """Remove carrier variables so from_env() sees defaults"""
    for name in (
        "OLVA_API_KEY", "OLVA_API_URL", "SHALOM_API_KEY", "SHALOM_API_URL",
        "CARRIER_TIMEOUT", "SHIPPING_SERVICE_PORT", "PORT", "SHIPPING_SERVICE_HOST",
        "SHIPPING_SENDER_NAME", "LOG_LEVEL", "ENABLE_STRUCTURED_LOGGING",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
