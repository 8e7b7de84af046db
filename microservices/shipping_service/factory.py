"""
Shipping Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that turns carrier configuration into live adapters.

Usage:
    from .factory import create_shipping_service
    service = create_shipping_service(settings.carriers)
"""
import logging
from typing import Optional

import httpx

from core.config.carrier_config import CarrierConfig

from .models import Carrier
from .providers.olva import OlvaProvider
from .providers.shalom import ShalomProvider
from .protocols import ShipmentRepositoryProtocol
from .shipping_service import ShippingService

logger = logging.getLogger(__name__)


def create_shipping_service(
    carriers: Optional[CarrierConfig] = None,
    repository: Optional[ShipmentRepositoryProtocol] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> ShippingService:
    """
    Create ShippingService with live adapters for configured carriers.

    A carrier without an API key gets no adapter; its quotes come from the
    static rate table and its labels are synthesized.

    Args:
        carriers: Carrier capability configuration (defaults to environment)
        repository: Label ledger (defaults to in-memory)
        http_client: Shared HTTP client (created when omitted)

    Returns:
        Configured ShippingService instance
    """
    carriers = carriers or CarrierConfig.from_env()
    http_client = http_client or httpx.AsyncClient(timeout=carriers.request_timeout)

    quote_providers = []
    shipment_providers = {}

    if carriers.olva_enabled:
        olva = OlvaProvider(
            api_key=carriers.olva_api_key,
            http_client=http_client,
            base_url=carriers.olva_api_url,
            sender=carriers.sender,
        )
        quote_providers.append(olva)
        shipment_providers[Carrier.OLVA] = olva
    else:
        logger.warning("OLVA_API_KEY not configured, Olva served from the rate table")

    if carriers.shalom_enabled:
        quote_providers.append(ShalomProvider(
            api_key=carriers.shalom_api_key,
            http_client=http_client,
            base_url=carriers.shalom_api_url,
        ))
    else:
        logger.warning("SHALOM_API_KEY not configured, Shalom served from the rate table")

    return ShippingService(
        quote_providers=quote_providers,
        shipment_providers=shipment_providers,
        repository=repository,
        http_client=http_client,
    )


def create_shipping_service_for_testing(
    quote_providers=None,
    shipment_providers=None,
    synthetic_provider=None,
    mock_repository=None,
) -> ShippingService:
    """
    Create ShippingService with mock dependencies for testing.

    No HTTP client is created; providers are used as given.
    """
    return ShippingService(
        quote_providers=quote_providers,
        shipment_providers=shipment_providers,
        synthetic_provider=synthetic_provider,
        repository=mock_repository,
    )
