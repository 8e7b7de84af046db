"""
Shipping Service - Main Application

Cotizaciones, guías de envío y rastreo para pedidos AgroBesser
"""

from fastapi import FastAPI, HTTPException, Path, Body
from contextlib import asynccontextmanager
from typing import Any, Dict
import logging
import sys
import os

from pydantic import ValidationError

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from core.config import get_settings
from core.logger import setup_service_logger
from .factory import create_shipping_service
from .models import (
    QuotesRequest, QuotesResponse, ShipmentLabel, ShipmentRequest,
    ShippingAddress, ShippingQuote, ServiceInfo, TrackingStatus, ZoneResponse,
)
from .protocols import InvalidShipmentRequestError, ShipmentCreationError
from .rate_table import MAX_WEIGHT_KG
from .routes_registry import get_endpoint_summary, SERVICE_METADATA
from .shipping_service import ShippingService

# Initialize config
config = get_settings()

# Setup logger
app_logger = setup_service_logger("shipping_service", config.logging)
logger = app_logger


# Service instance
class ShippingMicroservice:
    def __init__(self):
        self.service = None

    async def initialize(self, service: ShippingService = None):
        self.service = service or create_shipping_service(config.carriers)
        logger.info(
            f"Shipping service initialized (olva={config.carriers.olva_enabled}, "
            f"shalom={config.carriers.shalom_enabled})"
        )

    async def shutdown(self):
        if self.service:
            await self.service.close()
        logger.info("Shipping service shutting down")


# Global instance
microservice = ShippingMicroservice()


# Lifespan management
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    # Startup
    await microservice.initialize()

    yield

    # Shutdown
    await microservice.shutdown()


# Create FastAPI application
app = FastAPI(
    title="Shipping Service",
    description="Servicio de envíos - carrier quotes, shipment labels and tracking",
    version=SERVICE_METADATA["version"],
    lifespan=lifespan
)


def parse_shipment_request(payload: Dict[str, Any]) -> ShipmentRequest:
    """Validate a raw shipment body"""
    try:
        return ShipmentRequest.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise InvalidShipmentRequestError(f"Datos de envío inválidos: {fields}") from e


# =============================================================================
# Health Check
# =============================================================================

@app.get("/health")
async def health_check():
    """Health check"""
    return {
        "status": "healthy",
        "service": "shipping_service",
        "version": SERVICE_METADATA["version"],
        "capabilities": SERVICE_METADATA["capabilities"]
    }


@app.get("/api/v1/shipping", response_model=ServiceInfo)
async def service_info():
    """Describe the service and its endpoints"""
    return ServiceInfo(
        message="API de cotizaciones de envío",
        version=SERVICE_METADATA["version"],
        endpoints=get_endpoint_summary(),
    )


# =============================================================================
# Quote Endpoints
# =============================================================================

@app.post("/api/v1/shipping/quotes", response_model=QuotesResponse)
async def get_quotes(request: QuotesRequest = Body(...)):
    """
    Obtener cotizaciones de envío

    - **destination**: lima or provincias
    - **weight**: package weight in kg (0 < weight <= 50)
    - **selected_quote_id**: quote currently chosen by the customer, if any
    """
    if not request.destination or not request.weight:
        raise HTTPException(status_code=400, detail="Faltan datos requeridos")
    if request.weight <= 0 or request.weight > MAX_WEIGHT_KG:
        raise HTTPException(status_code=400, detail="Peso debe estar entre 0.1 y 50 kg")

    default = {}

    def remember_default(quote: ShippingQuote):
        default["quote"] = quote

    try:
        quotes = await microservice.service.get_quotes(
            request.destination,
            request.weight,
            dimensions=request.dimensions,
            selected_quote_id=request.selected_quote_id,
            on_selection_changed=remember_default,
        )
    except Exception as e:
        logger.error(f"Error getting shipping quotes: {e}")
        raise HTTPException(status_code=500, detail="Error interno del servidor")

    if not quotes:
        raise HTTPException(status_code=400, detail="Destino no válido")

    if "quote" in default:
        default_quote_id = default["quote"].id
    else:
        default_quote_id = request.selected_quote_id

    return QuotesResponse(
        quotes=quotes,
        default_quote_id=default_quote_id,
        destination=request.destination,
        weight=request.weight,
    )


@app.post("/api/v1/shipping/zone", response_model=ZoneResponse)
async def classify_zone(address: ShippingAddress = Body(...)):
    """Classify an address as Lima Metropolitana or provincias"""
    zone = ShippingService.resolve_zone(address)
    return ZoneResponse(zone=zone, is_metro=bool(zone and zone.is_metro))


# =============================================================================
# Shipment Endpoints
# =============================================================================

@app.post("/api/v1/shipping/shipments", response_model=ShipmentLabel, status_code=201)
async def create_shipment(payload: Dict[str, Any] = Body(...)):
    """
    Create the shipment label for an order

    An order keeps its first label; repeating the call returns it.
    """
    try:
        request = parse_shipment_request(payload)
        return await microservice.service.create_shipment(request)
    except InvalidShipmentRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ShipmentCreationError as e:
        logger.error(f"Shipment creation failed: {e}")
        raise HTTPException(status_code=502, detail="Error procesando pedido")
    except Exception as e:
        logger.error(f"Error creating shipment: {e}")
        raise HTTPException(status_code=500, detail="Error interno del servidor")


@app.get("/api/v1/shipping/shipments/{order_id}", response_model=ShipmentLabel)
async def get_shipment(order_id: str = Path(..., description="Order ID")):
    """Get the label issued for an order"""
    label = await microservice.service.get_shipment(order_id)
    if label is None:
        raise HTTPException(status_code=404, detail="Shipment not found")
    return label


# =============================================================================
# Tracking Endpoints
# =============================================================================

@app.get("/api/v1/shipping/tracking/{carrier}/{tracking_number}", response_model=TrackingStatus)
async def track_shipment(
    carrier: str = Path(..., description="Carrier code"),
    tracking_number: str = Path(..., description="Tracking number")
):
    """Track a shipment"""
    try:
        return await microservice.service.track_shipment(tracking_number, carrier)
    except Exception as e:
        logger.error(f"Error tracking {tracking_number}: {e}")
        raise HTTPException(status_code=500, detail="Error interno del servidor")


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "microservices.shipping_service.main:app",
        host=config.service_host,
        port=config.service_port,
        reload=config.debug
    )
