"""
Shipping Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from enum import Enum
from typing import Optional, Protocol, runtime_checkable

# Import only models (no I/O dependencies)
from .models import (
    Carrier,
    QuoteRequest,
    ShipmentLabel,
    ShipmentRequest,
    ShippingQuote,
    TrackingStatus,
)


# =============================================================================
# Custom Exceptions (defined here to avoid importing providers)
# =============================================================================


class ErrorSeverity(str, Enum):
    """How the service reacts to an error"""
    RECOVERABLE = "recoverable"  # logged, service degrades to a fallback
    FATAL = "fatal"  # propagated to the caller


class ShippingServiceError(Exception):
    """Base exception for shipping service"""
    severity: ErrorSeverity = ErrorSeverity.FATAL

    @property
    def recoverable(self) -> bool:
        return self.severity is ErrorSeverity.RECOVERABLE


class ProviderQuoteError(ShippingServiceError):
    """Raised when a live carrier quote call fails"""
    severity = ErrorSeverity.RECOVERABLE

    def __init__(self, carrier: Carrier, message: str):
        self.carrier = carrier
        super().__init__(f"Quote from {carrier.display_name} failed: {message}")


class ShipmentCreationError(ShippingServiceError):
    """Raised when a live carrier rejects or fails shipment creation"""
    severity = ErrorSeverity.FATAL

    def __init__(self, carrier: Carrier, message: str, status_code: Optional[int] = None):
        self.carrier = carrier
        self.status_code = status_code
        super().__init__(f"Shipment creation with {carrier.display_name} failed: {message}")


class TrackingLookupError(ShippingServiceError):
    """Raised when a live tracking lookup fails"""
    severity = ErrorSeverity.RECOVERABLE

    def __init__(self, carrier: Carrier, tracking_number: str, message: str):
        self.carrier = carrier
        self.tracking_number = tracking_number
        super().__init__(f"Tracking {tracking_number} with {carrier.display_name} failed: {message}")


class InvalidShipmentRequestError(ShippingServiceError):
    """Raised when shipment details are incomplete"""
    severity = ErrorSeverity.FATAL


# =============================================================================
# Provider Protocols
# =============================================================================


@runtime_checkable
class QuoteProviderProtocol(Protocol):
    """
    Interface for a live carrier quoting adapter.

    Implementations:
    - OlvaProvider
    - ShalomProvider
    """

    carrier: Carrier

    async def get_quote(self, request: QuoteRequest) -> ShippingQuote:
        """
        Quote a package with the carrier.

        Raises:
            ProviderQuoteError: network failure, non-2xx response or
                malformed payload
        """
        ...


@runtime_checkable
class ShipmentProviderProtocol(Protocol):
    """
    Interface for label creation and tracking.

    Implementations:
    - OlvaProvider (live)
    - SyntheticShipmentProvider (no integration)
    """

    async def create_shipment(self, request: ShipmentRequest) -> ShipmentLabel:
        """
        Create a shipment and issue its label.

        Raises:
            ShipmentCreationError: carrier rejected or could not be reached
        """
        ...

    async def track_shipment(self, tracking_number: str, carrier: Carrier) -> TrackingStatus:
        """
        Look up the status of a shipment.

        Raises:
            TrackingLookupError: live lookup failed
        """
        ...


# =============================================================================
# Repository Protocol
# =============================================================================


@runtime_checkable
class ShipmentRepositoryProtocol(Protocol):
    """
    Interface for the per-order label ledger.

    Implementations:
    - InMemoryShipmentRepository (default)
    - MockShipmentRepository (testing)
    """

    async def get_label(self, order_id: str) -> Optional[ShipmentLabel]:
        """Return the label issued for an order, if any"""
        ...

    async def save_label(self, label: ShipmentLabel) -> ShipmentLabel:
        """
        Store a label unless the order already has one.

        Returns:
            The label stored for the order (the existing one wins)
        """
        ...
