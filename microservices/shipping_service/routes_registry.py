"""
Shipping Service Routes Registry
Defines all API routes exposed by the shipping service
"""

from typing import Dict, Any

# Define all routes
SERVICE_ROUTES = [
    {
        "path": "/health",
        "methods": ["GET"],
        "auth_required": False,
        "description": "Service health check"
    },
    {
        "path": "/api/v1/shipping",
        "methods": ["GET"],
        "auth_required": False,
        "description": "Service description and endpoints"
    },
    {
        "path": "/api/v1/shipping/quotes",
        "methods": ["POST"],
        "auth_required": False,
        "description": "Obtener cotizaciones de envío"
    },
    {
        "path": "/api/v1/shipping/zone",
        "methods": ["POST"],
        "auth_required": False,
        "description": "Classify a shipping address as Lima or provincias"
    },
    {
        "path": "/api/v1/shipping/shipments",
        "methods": ["POST"],
        "auth_required": True,
        "description": "Create the shipment label for an order"
    },
    {
        "path": "/api/v1/shipping/shipments/{order_id}",
        "methods": ["GET"],
        "auth_required": True,
        "description": "Get the label issued for an order"
    },
    {
        "path": "/api/v1/shipping/tracking/{carrier}/{tracking_number}",
        "methods": ["GET"],
        "auth_required": False,
        "description": "Track a shipment"
    },
]


def get_endpoint_summary() -> Dict[str, str]:
    """'METHOD path' -> description, for the service description endpoint"""
    summary = {}
    for route in SERVICE_ROUTES:
        for method in route["methods"]:
            summary[f"{method} {route['path']}"] = route["description"]
    return summary


# Service metadata
SERVICE_METADATA = {
    "service_name": "shipping_service",
    "version": "1.0.0",
    "capabilities": [
        "shipping_quotes",
        "rate_table_fallback",
        "shipment_labels",
        "shipment_tracking",
        "zone_classification"
    ]
}
