"""Application configuration helpers."""

from __future__ import annotations

from shelfsync.common.logging import configure_logging

from .env import optional_env_var, optional_int_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import (
    CREATE_RETRY,
    ENTITY_RETRY,
    LISTING_RETRY,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
)
from .keycrm import KeyCrmConfig, get_keycrm_config
from .strapi import StrapiConfig, get_strapi_config
from .sync import SyncConfig, ZeroStockPolicy, get_sync_config, parse_zero_stock_policy

__all__ = [
    "CREATE_RETRY",
    "ENTITY_RETRY",
    "LISTING_RETRY",
    "ConfigurationError",
    "KeyCrmConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StrapiConfig",
    "SyncConfig",
    "ZeroStockPolicy",
    "configure_logging",
    "get_keycrm_config",
    "get_strapi_config",
    "get_sync_config",
    "optional_env_var",
    "optional_int_env_var",
    "parse_zero_stock_policy",
    "require_env_vars",
]
