#!/usr/bin/env python3
"""
Core Module for the Shipping Microservice

Shared infrastructure used by the service package.

COMPONENTS:
    - config/: Environment-driven configuration dataclasses
    - logger.py: Service logger setup

USAGE:
    from core.config import get_settings
    from core.logger import setup_service_logger

    settings = get_settings()
    logger = setup_service_logger("shipping_service")
"""

from .config import ShippingConfig, CarrierConfig, LoggingConfig, get_settings
from .logger import setup_service_logger

# Export public API
__all__ = [
    "ShippingConfig",
    "CarrierConfig",
    "LoggingConfig",
    "get_settings",
    "setup_service_logger",
]

__version__ = "1.0.0"
