#!/usr/bin/env python3
"""Modular configuration system for the shipping service

Configuration hierarchy:
- shipping_config: Service identity and network settings
- carrier_config: Carrier API keys, endpoints and sender identity
- logging_config: Logging configuration

Values already present in the process environment win over the env file.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

from .logging_config import LoggingConfig
from .carrier_config import CarrierConfig, SenderConfig
from .shipping_config import ShippingConfig

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
ENV_DIR = PROJECT_ROOT / "deployment" / "environments"

# ENV name -> file under deployment/environments
ENV_FILES = {
    "development": "dev.env",
    "dev": "dev.env",
    "testing": "test.env",
    "test": "test.env",
    "staging": "staging.env",
    "production": "production.env",
}


def load_env_file(env: str = None) -> Path:
    """Load the env file for an environment name, returning its path"""
    env = env or os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
    env_file = ENV_DIR / ENV_FILES.get(env, "dev.env")
    load_dotenv(env_file, override=False)
    return env_file


load_env_file()

# Create global settings instance
settings = ShippingConfig.from_env()


def get_settings() -> ShippingConfig:
    """Get global settings instance"""
    return settings


def reload_settings() -> ShippingConfig:
    """Reload settings from environment"""
    global settings
    settings = ShippingConfig.from_env()
    return settings


__all__ = [
    # Main config
    'ShippingConfig',
    'get_settings',
    'reload_settings',
    'load_env_file',
    'settings',
    # Sub-configs
    'LoggingConfig',
    'CarrierConfig',
    'SenderConfig',
]
