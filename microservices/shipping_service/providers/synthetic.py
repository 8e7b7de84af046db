"""Synthetic shipment provider for carriers without a live integration."""

import logging
from datetime import date
from typing import Callable, Optional

from ..models import Carrier, ShipmentLabel, ShipmentRequest, TrackingStatus
from ..tracking import estimate_delivery_date, generate_tracking_number, generic_tracking_status
from .base import ShipmentProvider

logger = logging.getLogger(__name__)


class SyntheticShipmentProvider(ShipmentProvider):
    """
    Issues carrier-formatted tracking numbers locally.

    Never raises: without an integration there is nothing that can fail.
    """

    def __init__(
        self,
        clock_ms: Optional[Callable[[], int]] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self._clock_ms = clock_ms
        self._today = today or date.today

    async def create_shipment(self, request: ShipmentRequest) -> ShipmentLabel:
        tracking_number = generate_tracking_number(request.carrier, clock_ms=self._clock_ms)
        logger.info(
            f"Synthesized {request.carrier.value} tracking number for order {request.order_id}: {tracking_number}"
        )
        return ShipmentLabel(
            order_id=request.order_id,
            tracking_number=tracking_number,
            estimated_delivery_date=estimate_delivery_date(request.zone, today=self._today()),
            carrier=request.carrier,
        )

    async def track_shipment(self, tracking_number: str, carrier: Carrier) -> TrackingStatus:
        return generic_tracking_status(tracking_number, carrier)
