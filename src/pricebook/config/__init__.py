"""Application configuration helpers."""

from __future__ import annotations

from .anomalies import get_anomaly_thresholds
from .env import decimal_env_var, optional_env_var
from .errors import ConfigurationError
from .logging import configure_logging
from .pricing import DEFAULT_TAX_RATE, PricingConfig, get_pricing_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_TAX_RATE",
    "ConfigurationError",
    "DatabaseConfig",
    "PricingConfig",
    "StorageConfig",
    "configure_logging",
    "decimal_env_var",
    "get_anomaly_thresholds",
    "get_database_config",
    "get_pricing_config",
    "get_storage_config",
    "optional_env_var",
]
