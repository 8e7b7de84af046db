#!/usr/bin/env python3
"""
Service logger setup

Configures the stdlib logging tree for a microservice from LoggingConfig.

Usage:
    from core.logger import setup_service_logger
    logger = setup_service_logger("shipping_service")
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from core.config.logging_config import CARRIER_LOGGER, LoggingConfig


class StructuredFormatter(logging.Formatter):
    """One JSON object per log line"""

    def __init__(self, service_name: str, environment: str):
        super().__init__()
        self.service_name = service_name
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service_name,
            "environment": self.environment,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_service_logger(
    service_name: str,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Configure root handlers once and return the service logger.

    Args:
        service_name: Logger name, also used as the service tag
        config: Logging configuration (defaults to LoggingConfig.from_env())

    Returns:
        Logger named after the service
    """
    config = config or LoggingConfig.from_env()

    if config.enable_structured:
        formatter: logging.Formatter = StructuredFormatter(service_name, config.environment)
    else:
        formatter = logging.Formatter(config.log_format)

    root = logging.getLogger()
    root.setLevel(config.log_level.upper())

    # Avoid stacking handlers when the app module is re-imported (reload, tests)
    for handler in list(root.handlers):
        if getattr(handler, "_service_handler", False):
            root.removeHandler(handler)

    if config.enable_console:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        console._service_handler = True
        root.addHandler(console)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler._service_handler = True
        root.addHandler(file_handler)

    if config.carrier_log_level:
        logging.getLogger(CARRIER_LOGGER).setLevel(config.carrier_log_level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logging.getLogger(service_name)
