"""Carrier providers."""

from .base import QuoteProvider, ShipmentProvider, HttpCarrierClient
from .olva import OlvaProvider
from .shalom import ShalomProvider
from .synthetic import SyntheticShipmentProvider

__all__ = [
    "QuoteProvider",
    "ShipmentProvider",
    "HttpCarrierClient",
    "OlvaProvider",
    "ShalomProvider",
    "SyntheticShipmentProvider",
]
