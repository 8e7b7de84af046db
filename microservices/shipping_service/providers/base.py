"""Carrier provider interfaces."""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

import httpx

from ..models import Carrier, QuoteRequest, ShipmentLabel, ShipmentRequest, ShippingQuote, TrackingStatus

logger = logging.getLogger(__name__)


class QuoteProvider(ABC):
    """Abstract live quote provider."""

    carrier: Carrier

    @abstractmethod
    async def get_quote(self, request: QuoteRequest) -> ShippingQuote:
        """Quote a package with the carrier."""
        raise NotImplementedError


class ShipmentProvider(ABC):
    """Abstract shipment provider."""

    @abstractmethod
    async def create_shipment(self, request: ShipmentRequest) -> ShipmentLabel:
        """Create a shipment and issue its label."""
        raise NotImplementedError

    @abstractmethod
    async def track_shipment(self, tracking_number: str, carrier: Carrier) -> TrackingStatus:
        """Look up a shipment."""
        raise NotImplementedError


class HttpCarrierClient:
    """
    Bearer-token JSON client shared by live carrier adapters.

    The httpx.AsyncClient is injected so one connection pool serves every
    carrier; it is owned (and closed) by whoever created it.
    """

    def __init__(self, base_url: str, api_key: str, http_client: httpx.AsyncClient):
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.http_client = http_client

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    async def post_json(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a JSON body and return the decoded JSON object.

        Raises:
            httpx.HTTPStatusError: non-2xx response
            httpx.HTTPError: transport failure
            ValueError: body is not a JSON object
        """
        response = await self.http_client.post(f"{self.base_url}{path}", json=payload, headers=self._headers())
        return self._decode(response)

    async def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        response = await self.http_client.get(f"{self.base_url}{path}", params=params, headers=self._headers())
        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Dict[str, Any]:
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Expected JSON object, got {type(data).__name__}")
        return data


def error_message(response: httpx.Response) -> str:
    """Carrier error message from a failed response body, if any"""
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return f"HTTP {response.status_code}: {body['message']}"
    return f"HTTP {response.status_code}"


def parse_price(value: Any) -> Optional[Decimal]:
    """Non-negative finite Decimal from a carrier price field, else None"""
    if value is None or isinstance(value, bool):
        return None
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        return None
    if not price.is_finite() or price < 0:
        return None
    return price
