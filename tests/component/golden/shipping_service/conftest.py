"""
Shipping Service Component Test Configuration

Pytest fixtures for component testing with mocked dependencies.
"""
from datetime import date

import pytest
import pytest_asyncio

from microservices.shipping_service.factory import create_shipping_service_for_testing
from microservices.shipping_service.models import Carrier
from microservices.shipping_service.providers.synthetic import SyntheticShipmentProvider
from tests.component.golden.shipping_service.mocks import (
    MockQuoteProvider,
    MockShipmentProvider,
    MockShipmentRepository,
)

FIXED_CLOCK_MS = 1714567890123
FIXED_TODAY = date(2024, 5, 1)


@pytest.fixture
def mock_repository():
    """Create mock label ledger"""
    return MockShipmentRepository()


@pytest.fixture
def mock_olva():
    """Live Olva adapter mock (quotes and shipments)"""
    return MockQuoteProvider(Carrier.OLVA)


@pytest.fixture
def mock_shalom():
    return MockQuoteProvider(Carrier.SHALOM)


@pytest.fixture
def mock_shipment_provider():
    return MockShipmentProvider(Carrier.OLVA)


@pytest.fixture
def synthetic_provider():
    """Synthetic labels with a fixed clock"""
    return SyntheticShipmentProvider(clock_ms=lambda: FIXED_CLOCK_MS, today=lambda: FIXED_TODAY)


@pytest_asyncio.fixture
async def shipping_service(mock_repository, synthetic_provider):
    """ShippingService with no live carrier configured"""
    service = create_shipping_service_for_testing(
        synthetic_provider=synthetic_provider,
        mock_repository=mock_repository,
    )
    yield service
    await service.close()


@pytest_asyncio.fixture
async def live_shipping_service(mock_olva, mock_shalom, mock_shipment_provider, mock_repository, synthetic_provider):
    """ShippingService with Olva and Shalom configured"""
    service = create_shipping_service_for_testing(
        quote_providers=[mock_olva, mock_shalom],
        shipment_providers={Carrier.OLVA: mock_shipment_provider},
        synthetic_provider=synthetic_provider,
        mock_repository=mock_repository,
    )
    yield service
    await service.close()
