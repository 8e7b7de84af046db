"""
Fallback Rate Table

Static carrier prices used when no live carrier integration answers.
Pure functions, no I/O: safe to call from tests without mocking HTTP.
"""
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Tuple, Union

from .models import Carrier, DestinationZone, ShippingQuote

Number = Union[int, float, Decimal]

SURCHARGE_FREE_WEIGHT_KG = Decimal("5")
SURCHARGE_PER_KG = Decimal("2")
FREE_DELIVERY_MAX_WEIGHT_KG = Decimal("10")
MAX_WEIGHT_KG = Decimal("50")


@dataclass(frozen=True)
class RateEntry:
    """One row of the table"""
    quote_id: str
    carrier: Carrier
    service: str
    base_price: Decimal
    estimated_days: str
    description: str
    features: Tuple[str, ...] = ()
    # Free options are not surcharged and have their own weight cap
    free: bool = False


METRO_RATES: Tuple[RateEntry, ...] = (
    RateEntry(
        quote_id="olva_standard",
        carrier=Carrier.OLVA,
        service="Servicio Estándar",
        base_price=Decimal("15"),
        estimated_days="1-3 días",
        description="Entrega a domicilio en Lima Metropolitana",
        features=("Seguimiento en línea", "Seguro incluido", "Entrega a domicilio"),
    ),
    RateEntry(
        quote_id="shalom_economico",
        carrier=Carrier.SHALOM,
        service="Servicio Económico",
        base_price=Decimal("12"),
        estimated_days="2-4 días",
        description="Recojo en agencia más cercana",
        features=("Precio económico", "Red nacional", "Atención personalizada"),
    ),
    RateEntry(
        quote_id="delivery_express",
        carrier=Carrier.AGROBESSER,
        service="Delivery Express",
        base_price=Decimal("0"),
        estimated_days="Mismo día",
        description="Entrega gratuita en Lima Metropolitana",
        features=("Gratis", "Mismo día", "Lima Metropolitana"),
        free=True,
    ),
)

PROVINCE_RATES: Tuple[RateEntry, ...] = (
    RateEntry(
        quote_id="olva_standard",
        carrier=Carrier.OLVA,
        service="Envío a Provincias",
        base_price=Decimal("25"),
        estimated_days="3-7 días",
        description="Entrega a domicilio en provincias",
        features=("Seguimiento en línea", "Seguro incluido", "Entrega a domicilio"),
    ),
    RateEntry(
        quote_id="shalom_economico",
        carrier=Carrier.SHALOM,
        service="Servicio Económico",
        base_price=Decimal("20"),
        estimated_days="4-8 días",
        description="Opción económica y confiable",
        features=("Precio económico", "Red nacional", "Atención personalizada"),
    ),
    RateEntry(
        quote_id="cruz_del_sur",
        carrier=Carrier.CRUZ_DEL_SUR,
        service="Cargo Terrestre",
        base_price=Decimal("30"),
        estimated_days="2-5 días",
        description="Transporte terrestre confiable",
        features=("Red nacional", "Horarios frecuentes", "Oficinas en destino"),
    ),
    RateEntry(
        quote_id="marvisur",
        carrier=Carrier.MARVISUR,
        service="Envío Nacional",
        base_price=Decimal("22"),
        estimated_days="3-6 días",
        description="Especialistas en envíos interprovinciales",
        features=("Cobertura nacional", "Precios competitivos", "Seguimiento SMS"),
    ),
)


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def weight_surcharge(weight_kg: Number) -> Decimal:
    """
    Surcharge added to paid options.

    2 PEN per kg above 5 kg, rounded up to a whole sol:
    ceil((weight - 5) * 2). Nothing at or below 5 kg.
    """
    weight = _to_decimal(weight_kg)
    if weight <= SURCHARGE_FREE_WEIGHT_KG:
        return Decimal("0")
    return Decimal(math.ceil((weight - SURCHARGE_FREE_WEIGHT_KG) * SURCHARGE_PER_KG))


def within_weight_cap(weight_kg: Number) -> bool:
    """True when the package is under the 50 kg hard cap"""
    return _to_decimal(weight_kg) <= MAX_WEIGHT_KG


def rates_for(is_metro: bool) -> Tuple[RateEntry, ...]:
    return METRO_RATES if is_metro else PROVINCE_RATES


def fallback_quotes(is_metro: bool, weight_kg: Number) -> List[ShippingQuote]:
    """
    Build the static quote list for a destination class and weight.

    Entries are returned in table order. Unavailable entries (free option
    over 10 kg, anything over 50 kg) are kept with available=False; the
    aggregator filters them.
    """
    weight = _to_decimal(weight_kg)
    surcharge = weight_surcharge(weight)
    under_cap = within_weight_cap(weight)

    quotes = []
    for entry in rates_for(is_metro):
        if entry.free:
            price = entry.base_price
            available = under_cap and weight <= FREE_DELIVERY_MAX_WEIGHT_KG
        else:
            price = entry.base_price + surcharge
            available = under_cap
        quotes.append(ShippingQuote(
            id=entry.quote_id,
            carrier=entry.carrier.display_name,
            carrier_code=entry.carrier,
            service=entry.service,
            price=price,
            estimated_days=entry.estimated_days,
            tracking_available=True,
            description=entry.description,
            features=list(entry.features),
            available=available,
        ))
    return quotes


def fallback_quotes_for_zone(zone: DestinationZone, weight_kg: Number) -> List[ShippingQuote]:
    return fallback_quotes(zone.is_metro, weight_kg)
