#!/usr/bin/env python3
"""Carrier integration configuration

Live carrier integrations are switched on by the presence of their API key.
A missing key is not an error: the carrier is simply served from the
static rate table.
"""
import os
from dataclasses import dataclass, field

def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class SenderConfig:
    """Shipment sender identity sent to carriers"""
    name: str = "AgroBesser"
    address: str = "Av. Principal 123"
    district: str = "Miraflores"
    province: str = "Lima"
    department: str = "Lima"
    phone: str = "01-1234567"
    email: str = "envios@agrobesser.com"

    @classmethod
    def from_env(cls) -> 'SenderConfig':
        return cls(
            name=os.getenv("SHIPPING_SENDER_NAME", "AgroBesser"),
            address=os.getenv("SHIPPING_SENDER_ADDRESS", "Av. Principal 123"),
            district=os.getenv("SHIPPING_SENDER_DISTRICT", "Miraflores"),
            province=os.getenv("SHIPPING_SENDER_PROVINCE", "Lima"),
            department=os.getenv("SHIPPING_SENDER_DEPARTMENT", "Lima"),
            phone=os.getenv("SHIPPING_SENDER_PHONE", "01-1234567"),
            email=os.getenv("SHIPPING_SENDER_EMAIL", "envios@agrobesser.com"),
        )


@dataclass
class CarrierConfig:
    """Carrier API credentials and endpoints"""

    # ===========================================
    # Olva Courier (quotes, shipments, tracking)
    # ===========================================
    olva_api_key: str = ""
    olva_api_url: str = "https://api.olvacourier.com"

    # ===========================================
    # Shalom (quotes only)
    # ===========================================
    shalom_api_key: str = ""
    shalom_api_url: str = "https://api.shalom.com.pe"

    # ===========================================
    # HTTP
    # ===========================================
    request_timeout: float = 30.0

    sender: SenderConfig = field(default_factory=SenderConfig)

    @property
    def olva_enabled(self) -> bool:
        return bool(self.olva_api_key)

    @property
    def shalom_enabled(self) -> bool:
        return bool(self.shalom_api_key)

    @classmethod
    def from_env(cls) -> 'CarrierConfig':
        """Load carrier configuration from environment variables"""
        return cls(
            olva_api_key=os.getenv("OLVA_API_KEY", ""),
            olva_api_url=os.getenv("OLVA_API_URL", "https://api.olvacourier.com").rstrip("/"),
            shalom_api_key=os.getenv("SHALOM_API_KEY", ""),
            shalom_api_url=os.getenv("SHALOM_API_URL", "https://api.shalom.com.pe").rstrip("/"),
            request_timeout=_float(os.getenv("CARRIER_TIMEOUT", "30"), 30.0),
            sender=SenderConfig.from_env(),
        )
