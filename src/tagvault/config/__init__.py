"""Application configuration helpers."""

from __future__ import annotations

from .endpoints import EndpointsConfig, get_endpoints_config
from .env import optional_env_var, require_env_vars
from .errors import (
    ConfigurationError,
    InvalidConfigurationValueError,
    MissingConfigurationError,
)
from .http_resilience import ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .tagging import get_system_tag_filter

__all__ = [
    "ConfigurationError",
    "EndpointsConfig",
    "InvalidConfigurationValueError",
    "MissingConfigurationError",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "get_endpoints_config",
    "get_system_tag_filter",
    "optional_env_var",
    "require_env_vars",
]
