"""Olva Courier provider (quotes, shipments, tracking)."""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from core.config.carrier_config import SenderConfig

from ..models import (
    Carrier, QuoteRequest, ShipmentLabel, ShipmentRequest, ShipmentStatus, ShippingQuote,
    TrackingEvent, TrackingStatus, department_for_city,
)
from ..protocols import ProviderQuoteError, ShipmentCreationError, TrackingLookupError
from ..rate_table import within_weight_cap
from ..tracking import estimate_delivery_date
from .base import HttpCarrierClient, QuoteProvider, ShipmentProvider, error_message, parse_price

logger = logging.getLogger(__name__)


class OlvaProvider(QuoteProvider, ShipmentProvider):
    """Live Olva Courier integration, built only when OLVA_API_KEY is set"""

    carrier = Carrier.OLVA

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
        base_url: str = "https://api.olvacourier.com",
        sender: Optional[SenderConfig] = None,
    ):
        self.client = HttpCarrierClient(base_url, api_key, http_client)
        self.sender = sender or SenderConfig()

    # =========================================================================
    # Quotes
    # =========================================================================

    async def get_quote(self, request: QuoteRequest) -> ShippingQuote:
        is_metro = request.destination.is_metro
        payload = {
            "origin": request.origin_district,
            "destination": "Lima" if is_metro else "Provincias",
            "destination_district": request.destination_district,
            "package": {
                "weight": request.weight_kg,
                "length": request.dimensions.length,
                "width": request.dimensions.width,
                "height": request.dimensions.height,
            },
            "service_type": "standard",
        }

        try:
            data = await self.client.post_json("/v1/quote", payload)
        except httpx.HTTPStatusError as e:
            raise ProviderQuoteError(self.carrier, error_message(e.response)) from e
        except httpx.HTTPError as e:
            raise ProviderQuoteError(self.carrier, f"network error: {e}") from e
        except ValueError as e:
            raise ProviderQuoteError(self.carrier, f"malformed payload: {e}") from e

        price = parse_price(data.get("price"))
        if price is None:
            raise ProviderQuoteError(self.carrier, "malformed payload: missing price")

        return ShippingQuote(
            id="olva_standard",
            carrier=self.carrier.display_name,
            carrier_code=self.carrier,
            service=data.get("service_name") or "Servicio Estándar",
            price=price,
            estimated_days=str(
                data.get("estimated_delivery_days")
                or data.get("estimated_days")
                or ("1-3 días" if is_metro else "3-7 días")
            ),
            tracking_available=True,
            description="Entrega a domicilio con seguimiento",
            features=["Seguimiento en línea", "Entrega a domicilio"],
            available=within_weight_cap(request.weight_kg),
        )

    # =========================================================================
    # Shipments
    # =========================================================================

    async def create_shipment(self, request: ShipmentRequest) -> ShipmentLabel:
        payload = self._shipment_payload(request)

        try:
            data = await self.client.post_json("/v1/shipments", payload)
        except httpx.HTTPStatusError as e:
            raise ShipmentCreationError(
                self.carrier, error_message(e.response), status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            raise ShipmentCreationError(self.carrier, f"network error: {e}") from e
        except ValueError as e:
            raise ShipmentCreationError(self.carrier, f"malformed payload: {e}") from e

        tracking_number = data.get("tracking_number")
        if not tracking_number:
            raise ShipmentCreationError(self.carrier, "malformed payload: missing tracking_number")

        estimated = _parse_date(data.get("estimated_delivery_date")) or estimate_delivery_date(request.zone)

        logger.info(f"Olva shipment created for order {request.order_id}: {tracking_number}")
        return ShipmentLabel(
            order_id=request.order_id,
            tracking_number=str(tracking_number),
            label_url=data.get("label_url"),
            estimated_delivery_date=estimated,
            carrier=self.carrier,
        )

    def _shipment_payload(self, request: ShipmentRequest) -> Dict[str, Any]:
        address = request.address
        is_metro = request.zone.is_metro
        province = address.province or ("Lima" if is_metro else request.city)
        department = address.department or ("Lima" if is_metro else department_for_city(request.city))
        return {
            "sender": {
                "name": self.sender.name,
                "address": self.sender.address,
                "district": self.sender.district,
                "province": self.sender.province,
                "department": self.sender.department,
                "phone": self.sender.phone,
                "email": self.sender.email,
            },
            "recipient": {
                "name": request.customer_name,
                "address": address.address,
                "district": address.district,
                "province": province,
                "department": department,
                "phone": request.phone,
                "reference": address.reference,
            },
            "package": {
                "weight": request.weight_kg,
                "length": request.dimensions.length,
                "width": request.dimensions.width,
                "height": request.dimensions.height,
                "description": request.description,
                "declared_value": str(request.declared_value),
            },
            "reference_code": request.order_id,
            "service_type": "standard",
            "payment_type": "sender",
        }

    # =========================================================================
    # Tracking
    # =========================================================================

    async def track_shipment(self, tracking_number: str, carrier: Carrier = Carrier.OLVA) -> TrackingStatus:
        try:
            data = await self.client.get_json(f"/v1/tracking/{tracking_number}")
        except httpx.HTTPStatusError as e:
            raise TrackingLookupError(self.carrier, tracking_number, error_message(e.response)) from e
        except (httpx.HTTPError, ValueError) as e:
            raise TrackingLookupError(self.carrier, tracking_number, str(e)) from e

        status = data.get("status")
        if not status:
            raise TrackingLookupError(self.carrier, tracking_number, "malformed payload: missing status")

        return TrackingStatus(
            tracking_number=tracking_number,
            carrier=self.carrier.value,
            status=ShipmentStatus.from_carrier(status).value,
            message=data.get("status_description") or str(status),
            events=_parse_events(data.get("events")),
            tracking_url=self.carrier.tracking_url(tracking_number),
        )


def _parse_date(value: Any) -> Optional[date]:
    if not isinstance(value, str) or len(value) < 10:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def _parse_events(raw: Any) -> List[TrackingEvent]:
    if not isinstance(raw, list):
        return []
    events = []
    for item in raw:
        if not isinstance(item, dict) or not item.get("status"):
            continue
        events.append(TrackingEvent(
            status=str(item["status"]),
            description=item.get("description"),
            location=item.get("location"),
            occurred_at=item.get("date") or item.get("occurred_at"),
        ))
    return events
