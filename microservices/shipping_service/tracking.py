"""
Tracking helpers

Tracking number synthesis and delivery estimates for carriers without a
live integration.
"""
import secrets
import string
import time
from datetime import date, timedelta
from typing import Callable, Optional

from .models import Carrier, DestinationZone, ShipmentStatus, TrackingStatus

METRO_DELIVERY_DAYS = 3
PROVINCE_DELIVERY_DAYS = 7

_BASE36 = string.digits + string.ascii_uppercase
TRACKING_NUMBER_PATTERN = r"^[A-Z]{3}\d{8}[0-9A-Z]{4}$"


def generate_tracking_number(
    carrier: Carrier,
    clock_ms: Optional[Callable[[], int]] = None,
) -> str:
    """
    <prefix><last 8 digits of epoch ms><4 random base36 chars>

    e.g. OLV12345678K3ZQ
    """
    now_ms = clock_ms() if clock_ms else time.time_ns() // 1_000_000
    timestamp = str(now_ms)[-8:].rjust(8, "0")
    suffix = "".join(secrets.choice(_BASE36) for _ in range(4))
    return f"{carrier.tracking_prefix}{timestamp}{suffix}"


def estimate_delivery_date(zone: DestinationZone, today: Optional[date] = None) -> date:
    """Today + 3 days for Lima, + 7 days elsewhere"""
    today = today or date.today()
    days = METRO_DELIVERY_DAYS if zone.is_metro else PROVINCE_DELIVERY_DAYS
    return today + timedelta(days=days)


def generic_tracking_status(tracking_number: str, carrier: Carrier) -> TrackingStatus:
    """Status for carriers we cannot query: always in transit"""
    if carrier is Carrier.SHALOM:
        # Shalom has no public tracking API, only its agency lookup page
        message = "Consulta el estado en la web de Shalom"
    else:
        message = "Envío en tránsito"
    return TrackingStatus(
        tracking_number=tracking_number,
        carrier=carrier.value,
        status=ShipmentStatus.IN_TRANSIT.value,
        message=message,
        tracking_url=carrier.tracking_url(tracking_number),
    )


def unknown_tracking_status(tracking_number: str, carrier: Carrier, message: str) -> TrackingStatus:
    """Status returned when a live lookup failed"""
    return TrackingStatus(
        tracking_number=tracking_number,
        carrier=carrier.value,
        status=ShipmentStatus.UNKNOWN.value,
        message=message,
        tracking_url=carrier.tracking_url(tracking_number),
    )


def untracked_carrier_status(tracking_number: str, carrier_code: str) -> TrackingStatus:
    """Status for a carrier code this service does not know"""
    return TrackingStatus(
        tracking_number=tracking_number,
        carrier=carrier_code,
        status=ShipmentStatus.IN_TRANSIT.value,
        message="Envío en tránsito",
        tracking_url=f"#tracking-{tracking_number}",
    )
