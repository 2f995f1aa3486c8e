"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, InvalidConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .management import ManagementConfig, get_management_config

__all__ = [
    "ConfigurationError",
    "InvalidConfigurationError",
    "ManagementConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "get_management_config",
    "require_env_var",
    "require_env_vars",
]
