"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace real I/O dependencies (carrier HTTP APIs).
"""

from .http_mock import MockCarrierApi

# Service-specific mocks should be in tests/component/golden/{service}/mocks.py

__all__ = [
    'MockCarrierApi',
]
