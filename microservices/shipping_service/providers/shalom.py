"""Shalom provider (quotes only, no public tracking API)."""

import logging

import httpx

from ..models import Carrier, QuoteRequest, ShippingQuote
from ..protocols import ProviderQuoteError
from ..rate_table import within_weight_cap
from .base import HttpCarrierClient, QuoteProvider, error_message, parse_price

logger = logging.getLogger(__name__)


class ShalomProvider(QuoteProvider):
    """Live Shalom quoting, built only when SHALOM_API_KEY is set"""

    carrier = Carrier.SHALOM

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
        base_url: str = "https://api.shalom.com.pe",
    ):
        self.client = HttpCarrierClient(base_url, api_key, http_client)

    async def get_quote(self, request: QuoteRequest) -> ShippingQuote:
        is_metro = request.destination.is_metro
        # Shalom's API speaks Spanish field names
        payload = {
            "origen": request.origin_district,
            "destino": "Lima" if is_metro else "Nacional",
            "distrito_destino": request.destination_district,
            "peso": request.weight_kg,
            "dimensiones": {
                "largo": request.dimensions.length,
                "ancho": request.dimensions.width,
                "alto": request.dimensions.height,
            },
            "tipo_servicio": "economico",
        }

        try:
            data = await self.client.post_json("/v1/cotizar", payload)
        except httpx.HTTPStatusError as e:
            raise ProviderQuoteError(self.carrier, error_message(e.response)) from e
        except httpx.HTTPError as e:
            raise ProviderQuoteError(self.carrier, f"network error: {e}") from e
        except ValueError as e:
            raise ProviderQuoteError(self.carrier, f"malformed payload: {e}") from e

        price = parse_price(data.get("precio"))
        if price is None:
            raise ProviderQuoteError(self.carrier, "malformed payload: missing precio")

        return ShippingQuote(
            id="shalom_economico",
            carrier=self.carrier.display_name,
            carrier_code=self.carrier,
            service="Servicio Económico",
            price=price,
            estimated_days=str(data.get("tiempo_entrega") or ("2-4 días" if is_metro else "4-8 días")),
            tracking_available=True,
            description="Opción económica y confiable",
            features=["Precio económico", "Red nacional"],
            available=within_weight_cap(request.weight_kg),
        )
