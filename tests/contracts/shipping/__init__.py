"""
Shipping Service Contracts Package

Contract-Driven Development (CDD) test contracts for shipping service.
"""

from .data_contract import (
    # Response Contracts
    ShippingQuoteContract,
    QuotesResponseContract,
    ShipmentLabelContract,
    TrackingStatusContract,
    # Factory
    ShippingTestDataFactory,
    # Builders
    ShipmentRequestBuilder,
)

__all__ = [
    "ShippingQuoteContract",
    "QuotesResponseContract",
    "ShipmentLabelContract",
    "TrackingStatusContract",
    "ShippingTestDataFactory",
    "ShipmentRequestBuilder",
]
