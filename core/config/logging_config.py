#!/usr/bin/env python3
"""Logging configuration

Service-wide level and format, plus a separate level for the carrier
adapters so live API traffic can be traced without raising the whole
service to DEBUG.
"""
import os
from dataclasses import dataclass

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CARRIER_LOGGER = "microservices.shipping_service.providers"


@dataclass
class LoggingConfig:
    """Logging configuration"""
    log_level: str = "INFO"
    log_format: str = DEFAULT_LOG_FORMAT
    log_file: str = ""
    enable_console: bool = True
    # One JSON object per line, for log shippers
    enable_structured: bool = False
    # Empty means inherit log_level
    carrier_log_level: str = ""

    service_name: str = "shipping_service"
    environment: str = "development"

    @classmethod
    def from_env(cls) -> 'LoggingConfig':
        """Load logging config from environment variables"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        default_level = "DEBUG" if env in ("development", "dev") else "INFO"
        return cls(
            log_level=os.getenv("LOG_LEVEL", default_level).upper(),
            log_format=os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT),
            log_file=os.getenv("LOG_FILE", ""),
            enable_console=os.getenv("LOG_CONSOLE", "true").lower() != "false",
            enable_structured=os.getenv("ENABLE_STRUCTURED_LOGGING", "false").lower() == "true",
            carrier_log_level=os.getenv("CARRIER_LOG_LEVEL", "").upper(),
            service_name=os.getenv("SERVICE_NAME", "shipping_service"),
            environment=env,
        )
