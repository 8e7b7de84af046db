"""
Shipping Service Client

Client library for other microservices (checkout, orders) to call the
shipping service
"""

import httpx
import logging
from typing import Optional, List, Dict, Any

logger = logging.getLogger(__name__)


class ShippingServiceClient:
    """Shipping Service HTTP client"""

    def __init__(self, base_url: str = None, http_client: Optional[httpx.AsyncClient] = None):
        """
        Initialize Shipping Service client

        Args:
            base_url: Base URL of the shipping service
            http_client: Preconfigured client (e.g. an ASGI transport in tests)
        """
        self.base_url = (base_url or "http://localhost:8231").rstrip('/')
        self.client = http_client or httpx.AsyncClient(timeout=30.0)

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # =============================================================================
    # Quotes
    # =============================================================================

    async def get_quotes(
        self,
        destination: str,
        weight: float,
        selected_quote_id: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Get shipping quotes for checkout

        Args:
            destination: "lima" or "provincias"
            weight: Package weight in kg
            selected_quote_id: Quote currently chosen by the customer

        Returns:
            Quotes response dict with 'quotes' and 'default_quote_id'

        Example:
            >>> client = ShippingServiceClient()
            >>> result = await client.get_quotes("lima", 3)
            >>> print(result['default_quote_id'])
        """
        try:
            payload = {"destination": destination, "weight": weight}
            if selected_quote_id:
                payload["selected_quote_id"] = selected_quote_id

            response = await self.client.post(
                f"{self.base_url}/api/v1/shipping/quotes",
                json=payload
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to get shipping quotes: {e.response.status_code}")
            return None
        except Exception as e:
            logger.error(f"Error getting shipping quotes: {e}")
            return None

    async def list_quotes(self, destination: str, weight: float) -> List[Dict[str, Any]]:
        """Quote list only, [] on failure"""
        result = await self.get_quotes(destination, weight)
        return result.get("quotes", []) if result else []

    # =============================================================================
    # Shipments
    # =============================================================================

    async def create_shipment(self, shipment: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Create the shipment label for an order

        Returns:
            Label dict, or None when the service rejected the request
        """
        try:
            response = await self.client.post(
                f"{self.base_url}/api/v1/shipping/shipments",
                json=shipment
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to create shipment: {e.response.status_code}")
            return None
        except Exception as e:
            logger.error(f"Error creating shipment: {e}")
            return None

    async def get_shipment(self, order_id: str) -> Optional[Dict[str, Any]]:
        """Label issued for an order, None if there is none"""
        try:
            response = await self.client.get(
                f"{self.base_url}/api/v1/shipping/shipments/{order_id}"
            )
            if response.status_code == 404:
                return None
            response.raise_for_status()
            return response.json()

        except Exception as e:
            logger.error(f"Error getting shipment: {e}")
            return None

    # =============================================================================
    # Tracking
    # =============================================================================

    async def track_shipment(self, carrier: str, tracking_number: str) -> Optional[Dict[str, Any]]:
        """Tracking status for a shipment"""
        try:
            response = await self.client.get(
                f"{self.base_url}/api/v1/shipping/tracking/{carrier}/{tracking_number}"
            )
            response.raise_for_status()
            return response.json()

        except Exception as e:
            logger.error(f"Error tracking shipment: {e}")
            return None

    # =============================================================================
    # Health Check
    # =============================================================================

    async def health_check(self) -> bool:
        """Check service health"""
        try:
            response = await self.client.get(f"{self.base_url}/health")
            return response.status_code == 200
        except Exception:
            return False


__all__ = ["ShippingServiceClient"]
