"""
Shipping Service Microservice

Servicio de envíos - carrier quotes, shipment labels and tracking
"""

from .client import ShippingServiceClient
from .shipping_service import ShippingService
from .shipment_repository import InMemoryShipmentRepository
from .models import (
    Carrier,
    DestinationZone,
    PackageDimensions,
    ShippingAddress,
    ShippingQuote,
    ShipmentRequest,
    ShipmentLabel,
    TrackingStatus,
)

__version__ = "1.0.0"
__all__ = [
    "ShippingServiceClient",
    "ShippingService",
    "InMemoryShipmentRepository",
    "Carrier",
    "DestinationZone",
    "PackageDimensions",
    "ShippingAddress",
    "ShippingQuote",
    "ShipmentRequest",
    "ShipmentLabel",
    "TrackingStatus",
]
