"""
Shipping Service Data Models

Quotes, shipment labels and tracking for AgroBesser orders.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field, field_validator


DEFAULT_CURRENCY = "PEN"

# Cities served as Lima Metropolitana
METRO_DEPARTMENTS = {"lima", "callao"}
METRO_PROVINCES = {"lima", "callao"}


class DestinationZone(str, Enum):
    """Destination classification"""
    LIMA = "lima"
    PROVINCIAS = "provincias"

    @property
    def is_metro(self) -> bool:
        return self is DestinationZone.LIMA

    @classmethod
    def parse(cls, value: Any) -> Optional["DestinationZone"]:
        """Return the zone for a raw value, or None when it is unknown"""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class Carrier(str, Enum):
    """Carriers offered at checkout"""
    OLVA = "olva"
    SHALOM = "shalom"
    CRUZ_DEL_SUR = "cruz_del_sur"
    MARVISUR = "marvisur"
    AGROBESSER = "agrobesser"

    @property
    def display_name(self) -> str:
        return _CARRIER_NAMES[self]

    @property
    def tracking_prefix(self) -> str:
        return _TRACKING_PREFIXES[self]

    def tracking_url(self, tracking_number: str) -> str:
        """Public tracking web page for a tracking number"""
        template = _TRACKING_URLS.get(self)
        if template is None:
            return f"#tracking-{tracking_number}"
        return template.format(tracking_number=tracking_number)


_CARRIER_NAMES = {
    Carrier.OLVA: "Olva Courier",
    Carrier.SHALOM: "Shalom",
    Carrier.CRUZ_DEL_SUR: "Cruz del Sur",
    Carrier.MARVISUR: "Marvisur",
    Carrier.AGROBESSER: "AgroBesser",
}

_TRACKING_PREFIXES = {
    Carrier.OLVA: "OLV",
    Carrier.SHALOM: "SHL",
    Carrier.CRUZ_DEL_SUR: "CDS",
    Carrier.MARVISUR: "MVS",
    Carrier.AGROBESSER: "AGR",
}

_TRACKING_URLS = {
    Carrier.OLVA: "https://www.olvacourier.com/tracking?code={tracking_number}",
    Carrier.SHALOM: "http://agencias.shalom.com.pe/",
    Carrier.CRUZ_DEL_SUR: "https://www.cruzdelsur.com.pe/cargo",
    Carrier.MARVISUR: "https://www.expresomarvisur.com/sucursales",
}

# Simplified city -> department lookup for carrier payloads
CITY_DEPARTMENTS = {
    "Arequipa": "Arequipa",
    "Trujillo": "La Libertad",
    "Chiclayo": "Lambayeque",
    "Piura": "Piura",
    "Iquitos": "Loreto",
    "Cusco": "Cusco",
    "Huancayo": "Junín",
    "Tacna": "Tacna",
    "Ica": "Ica",
    "Cajamarca": "Cajamarca",
}


def department_for_city(city: str) -> str:
    """Department of a city, falling back to the city itself"""
    return CITY_DEPARTMENTS.get(city, city)


class ShipmentStatus(str, Enum):
    """Shipment status"""
    CREATED = "created"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    FAILED = "failed"
    UNKNOWN = "unknown"

    @classmethod
    def from_carrier(cls, value: Any) -> "ShipmentStatus":
        """Normalize a carrier status string, UNKNOWN when unrecognized"""
        if not isinstance(value, str):
            return cls.UNKNOWN
        key = value.strip().lower().replace("-", "_").replace(" ", "_")
        return _CARRIER_STATUSES.get(key, cls.UNKNOWN)


# Status vocabularies seen in carrier payloads (English and Spanish)
_CARRIER_STATUSES = {
    "created": ShipmentStatus.CREATED,
    "registrado": ShipmentStatus.CREATED,
    "generado": ShipmentStatus.CREATED,
    "in_transit": ShipmentStatus.IN_TRANSIT,
    "en_transito": ShipmentStatus.IN_TRANSIT,
    "en_tránsito": ShipmentStatus.IN_TRANSIT,
    "en_ruta": ShipmentStatus.IN_TRANSIT,
    "en_reparto": ShipmentStatus.IN_TRANSIT,
    "delivered": ShipmentStatus.DELIVERED,
    "entregado": ShipmentStatus.DELIVERED,
    "failed": ShipmentStatus.FAILED,
    "devuelto": ShipmentStatus.FAILED,
    "rechazado": ShipmentStatus.FAILED,
    "unknown": ShipmentStatus.UNKNOWN,
}


# Value Objects

class PackageDimensions(BaseModel):
    """Package dimensions in centimeters"""
    length: float = Field(30, gt=0)
    width: float = Field(20, gt=0)
    height: float = Field(15, gt=0)


class ShippingAddress(BaseModel):
    """Shipping address embedded in an order"""
    address: Optional[str] = Field(None, description="Street address line")
    district: Optional[str] = None
    province: Optional[str] = None
    department: Optional[str] = None
    postal_code: Optional[str] = None
    reference: Optional[str] = None

    @property
    def zone(self) -> Optional[DestinationZone]:
        """Metro when department/province is Lima or Callao, None when unknown"""
        department = (self.department or "").strip().lower()
        province = (self.province or "").strip().lower()
        if not department and not province:
            return None
        if department == "callao" or province == "callao":
            return DestinationZone.LIMA
        if department in METRO_DEPARTMENTS and (not province or province in METRO_PROVINCES):
            return DestinationZone.LIMA
        if province in METRO_PROVINCES and not department:
            return DestinationZone.LIMA
        return DestinationZone.PROVINCIAS


# Quote Models

class ShippingQuote(BaseModel):
    """Normalized carrier quote"""
    id: str = Field(..., description="Quote identifier, stable per carrier/service")
    carrier: str = Field(..., description="Carrier display name")
    carrier_code: Carrier
    service: str
    price: Decimal = Field(..., ge=0)
    currency: str = DEFAULT_CURRENCY
    estimated_days: str = Field(..., description="Free-text delivery window")
    tracking_available: bool = True
    description: str = ""
    features: List[str] = Field(default_factory=list)
    available: bool = True


class QuoteRequest(BaseModel):
    """Quote request sent to carrier adapters"""
    destination: DestinationZone
    weight_kg: float = Field(..., gt=0)
    dimensions: PackageDimensions = Field(default_factory=PackageDimensions)
    origin_district: str = "Lima"
    destination_district: Optional[str] = None


class QuotesRequest(BaseModel):
    """HTTP body for POST /api/v1/shipping/quotes"""
    destination: Optional[str] = None
    weight: Optional[float] = None
    dimensions: Optional[PackageDimensions] = None
    selected_quote_id: Optional[str] = None


class QuotesResponse(BaseModel):
    """Quote list returned to the checkout"""
    success: bool = True
    quotes: List[ShippingQuote] = Field(default_factory=list)
    default_quote_id: Optional[str] = None
    destination: Optional[str] = None
    weight: Optional[float] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# Shipment Models

class ShipmentRequest(BaseModel):
    """Order details needed to ship"""
    order_id: str = Field(..., min_length=1)
    customer_name: str = Field(..., min_length=1)
    phone: str = ""
    address: ShippingAddress
    city: str = Field("Lima", description="Destination city")
    weight_kg: float = Field(..., gt=0)
    dimensions: PackageDimensions = Field(default_factory=PackageDimensions)
    description: str = ""
    declared_value: Decimal = Field(Decimal("0"), ge=0)
    carrier: Carrier = Carrier.AGROBESSER

    @field_validator("order_id", "customer_name")
    @classmethod
    def strip_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @property
    def zone(self) -> DestinationZone:
        """Zone from the address, else from the city name"""
        zone = self.address.zone
        if zone is not None:
            return zone
        return DestinationZone.LIMA if self.city.strip().lower() in METRO_PROVINCES else DestinationZone.PROVINCIAS


class ShipmentLabel(BaseModel):
    """Issued shipment label, one per order"""
    order_id: str
    tracking_number: str
    label_url: Optional[str] = None
    estimated_delivery_date: Optional[date] = None
    carrier: Carrier
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {"frozen": True}


class TrackingEvent(BaseModel):
    """Carrier tracking checkpoint"""
    status: str
    description: Optional[str] = None
    location: Optional[str] = None
    occurred_at: Optional[str] = None


class TrackingStatus(BaseModel):
    """Tracking lookup result"""
    tracking_number: str
    carrier: str = Field(..., description="Carrier code as requested")
    status: str = ShipmentStatus.IN_TRANSIT.value
    message: str = "Envío en tránsito"
    events: List[TrackingEvent] = Field(default_factory=list)
    tracking_url: str
    checked_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ZoneResponse(BaseModel):
    """Zone classification result"""
    zone: Optional[DestinationZone] = None
    is_metro: bool = False


class ServiceInfo(BaseModel):
    """Service description"""
    message: str
    version: str
    endpoints: Dict[str, str] = Field(default_factory=dict)
