"""
Shipping Service - Business Logic

Quote aggregation over live carrier adapters with a static fallback table,
plus shipment label issuance and tracking.
"""

import asyncio
import inspect
import logging
import math
import weakref
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Union

import httpx

from .models import (
    Carrier, DestinationZone, PackageDimensions, QuoteRequest, ShipmentLabel,
    ShipmentRequest, ShippingAddress, ShippingQuote, TrackingStatus,
)
from .protocols import (
    QuoteProviderProtocol,
    ShipmentCreationError,
    ShipmentProviderProtocol,
    ShipmentRepositoryProtocol,
    ShippingServiceError,
    TrackingLookupError,
)
from .providers.synthetic import SyntheticShipmentProvider
from .rate_table import fallback_quotes, within_weight_cap
from .shipment_repository import InMemoryShipmentRepository
from .tracking import unknown_tracking_status, untracked_carrier_status

logger = logging.getLogger(__name__)

SelectionCallback = Callable[[ShippingQuote], Union[None, Awaitable[None]]]
RateTable = Callable[[bool, float], List[ShippingQuote]]


class ShippingService:
    """
    Shipping business logic

    Carrier capability is decided at construction: only adapters whose API
    key was configured are passed in (see factory.py). Nothing here reads
    the process environment.
    """

    def __init__(
        self,
        quote_providers: Optional[Sequence[QuoteProviderProtocol]] = None,
        shipment_providers: Optional[Dict[Carrier, ShipmentProviderProtocol]] = None,
        synthetic_provider: Optional[ShipmentProviderProtocol] = None,
        repository: Optional[ShipmentRepositoryProtocol] = None,
        rate_table: RateTable = fallback_quotes,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize Shipping Service

        Args:
            quote_providers: Live quote adapters, one per configured carrier
            shipment_providers: Live label/tracking adapters keyed by carrier
            synthetic_provider: Label issuer for carriers without integration
            repository: Per-order label ledger
            rate_table: Fallback table, (is_metro, weight_kg) -> quotes
            http_client: Shared HTTP client, closed by close()
        """
        self.quote_providers = list(quote_providers or [])
        self.shipment_providers = dict(shipment_providers or {})
        self.synthetic_provider = synthetic_provider or SyntheticShipmentProvider()
        self.repository = repository or InMemoryShipmentRepository()
        self.rate_table = rate_table
        self.http_client = http_client
        self._order_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

        logger.info(
            "ShippingService initialized "
            f"(live quotes: {[p.carrier.value for p in self.quote_providers] or 'none'}, "
            f"live shipments: {[c.value for c in self.shipment_providers] or 'none'})"
        )

    async def close(self):
        """Close HTTP client"""
        if self.http_client is not None:
            await self.http_client.aclose()

    # =============================================================================
    # Quotes
    # =============================================================================

    async def get_quotes(
        self,
        destination_zone: Any,
        weight_kg: Any,
        dimensions: Optional[PackageDimensions] = None,
        selected_quote_id: Optional[str] = None,
        on_selection_changed: Optional[SelectionCallback] = None,
        destination_district: Optional[str] = None,
    ) -> List[ShippingQuote]:
        """
        Resolve the visible quote list for a destination and weight.

        Live carrier failures are recoverable: they are logged and the
        static table fills in. Unavailable options are dropped and the rest
        is ordered by price. When the caller has no valid selection the
        cheapest quote is reported through on_selection_changed.

        Returns:
            Available quotes, cheapest first; [] for an unknown zone or a
            non-positive weight
        """
        zone = DestinationZone.parse(destination_zone)
        weight = _positive_weight(weight_kg)
        if zone is None or weight is None:
            logger.debug(f"No quotes for destination={destination_zone!r} weight={weight_kg!r}")
            return []

        request = QuoteRequest(
            destination=zone,
            weight_kg=weight,
            dimensions=dimensions or PackageDimensions(),
            destination_district=destination_district,
        )

        quotes = await self._collect_live_quotes(request)
        if not quotes:
            quotes = self.rate_table(zone.is_metro, weight)

        under_cap = within_weight_cap(weight)
        visible = sorted(
            (q for q in quotes if q.available and under_cap),
            key=lambda q: q.price,
        )

        if on_selection_changed is not None:
            default = self.select_default(visible, selected_quote_id)
            if default is not None:
                result = on_selection_changed(default)
                if inspect.isawaitable(result):
                    await result

        return visible

    async def _collect_live_quotes(self, request: QuoteRequest) -> List[ShippingQuote]:
        """Query every configured adapter concurrently, dropping failures"""
        if not self.quote_providers:
            return []

        results = await asyncio.gather(
            *(provider.get_quote(request) for provider in self.quote_providers),
            return_exceptions=True,
        )

        quotes = []
        for result in results:
            if isinstance(result, ShippingQuote):
                quotes.append(result)
            elif isinstance(result, ShippingServiceError) and result.recoverable:
                logger.warning(f"Live quote dropped, falling back: {result}")
            elif isinstance(result, BaseException):
                raise result

        if not quotes:
            logger.warning(
                f"No live quotes for {request.destination.value} ({request.weight_kg}kg), using rate table"
            )
        return quotes

    @staticmethod
    def select_default(
        quotes: Sequence[ShippingQuote],
        selected_quote_id: Optional[str] = None,
    ) -> Optional[ShippingQuote]:
        """
        Cheapest quote when the current selection is missing or no longer
        offered, else None (keep the caller's choice).
        """
        if not quotes:
            return None
        if selected_quote_id and any(q.id == selected_quote_id for q in quotes):
            return None
        return min(quotes, key=lambda q: q.price)

    @staticmethod
    def resolve_zone(address: ShippingAddress) -> Optional[DestinationZone]:
        return address.zone

    # =============================================================================
    # Shipments
    # =============================================================================

    async def create_shipment(self, request: ShipmentRequest) -> ShipmentLabel:
        """
        Issue the shipment label for an order.

        An order keeps its first label: repeated calls return it unchanged.

        Raises:
            ShipmentCreationError: the live carrier failed; the order cannot
                ship and the caller must report it
        """
        lock = self._order_lock(request.order_id)
        async with lock:
            existing = await self.repository.get_label(request.order_id)
            if existing is not None:
                logger.info(f"Order {request.order_id} already has label {existing.tracking_number}")
                return existing

            provider = self.shipment_providers.get(request.carrier, self.synthetic_provider)
            try:
                label = await provider.create_shipment(request)
            except ShipmentCreationError as e:
                logger.error(f"Failed to create shipment for order {request.order_id}: {e}")
                raise

            return await self.repository.save_label(label)

    async def get_shipment(self, order_id: str) -> Optional[ShipmentLabel]:
        return await self.repository.get_label(order_id)

    def _order_lock(self, order_id: str) -> asyncio.Lock:
        lock = self._order_locks.get(order_id)
        if lock is None:
            lock = asyncio.Lock()
            self._order_locks[order_id] = lock
        return lock

    # =============================================================================
    # Tracking
    # =============================================================================

    async def track_shipment(self, tracking_number: str, carrier: Union[Carrier, str]) -> TrackingStatus:
        """
        Tracking status for a shipment.

        Live lookups are used where integrated; a failed lookup degrades to
        status "unknown" with the carrier's public tracking page. Unknown
        carrier codes get a generic in-transit status.
        """
        try:
            carrier = Carrier(carrier)
        except ValueError:
            logger.info(f"No tracking integration for carrier '{carrier}', returning generic status")
            return untracked_carrier_status(tracking_number, str(carrier))
        provider = self.shipment_providers.get(carrier)
        if provider is None:
            return await self.synthetic_provider.track_shipment(tracking_number, carrier)

        try:
            return await provider.track_shipment(tracking_number, carrier)
        except TrackingLookupError as e:
            logger.warning(f"Tracking lookup failed, returning unknown status: {e}")
            return unknown_tracking_status(
                tracking_number, carrier, "Error obteniendo información de rastreo"
            )


def _positive_weight(value: Any) -> Optional[float]:
    """Weight as float when it is a finite number > 0"""
    if value is None or isinstance(value, bool):
        return None
    try:
        weight = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(weight) or weight <= 0:
        return None
    return weight


__all__ = ["ShippingService"]
