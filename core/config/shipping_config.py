#!/usr/bin/env python3
"""Shipping service main configuration

Combines all sub-configs for the shipping microservice.
"""
import os
from dataclasses import dataclass, field

from .carrier_config import CarrierConfig
from .logging_config import LoggingConfig


def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class ShippingConfig:
    """Shipping service configuration"""
    service_name: str = "shipping_service"
    service_host: str = "0.0.0.0"
    service_port: int = 8231
    environment: str = "development"
    debug: bool = False

    carriers: CarrierConfig = field(default_factory=CarrierConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> 'ShippingConfig':
        """Load full configuration from environment variables"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            service_name=os.getenv("SERVICE_NAME", "shipping_service"),
            service_host=os.getenv("SHIPPING_SERVICE_HOST", "0.0.0.0"),
            service_port=_int(os.getenv("SHIPPING_SERVICE_PORT") or os.getenv("PORT", ""), 8231),
            environment=env,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            carriers=CarrierConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )
