"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers (Top-Down TDD):
    - component/  : Component tests (mocked carrier APIs, FastAPI TestClient)
    - unit/       : Unit tests (pure functions, no I/O)
"""
import os
import sys
from typing import Any, List

import pytest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

# Never call real carriers from tests
os.environ.setdefault("ENV", "testing")
os.environ["OLVA_API_KEY"] = ""
os.environ["SHALOM_API_KEY"] = ""


# =============================================================================
# Assertion Helpers
# =============================================================================

class AssertionHelpers:
    """Custom assertion helpers for tests"""

    @staticmethod
    def assert_http_success(response, expected_status: int = 200):
        """Assert HTTP response is successful"""
        assert response.status_code == expected_status, \
            f"Expected {expected_status}, got {response.status_code}: {response.text}"

    @staticmethod
    def assert_sorted_by_price(quotes: List[Any]):
        """Assert quotes (models or dicts) are ordered cheapest first"""
        prices = [q["price"] if isinstance(q, dict) else q.price for q in quotes]
        prices = [float(p) for p in prices]
        assert prices == sorted(prices), f"Quotes not sorted by price: {prices}"


@pytest.fixture
def assertions() -> AssertionHelpers:
    """Provide assertion helpers"""
    return AssertionHelpers()


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "component: Component tests")
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "golden: safety net tests - DO NOT MODIFY")
