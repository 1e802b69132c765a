"""Application configuration helpers."""

from __future__ import annotations

from .comparison import ComparisonSettings, get_comparison_settings
from .env import env_flag, require_env_var, require_env_vars
from .errors import (
    ConfigurationError,
    InvalidConfigurationValueError,
    MissingConfigurationError,
)
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .published import PublishedConfig, get_published_config

__all__ = [
    "ComparisonSettings",
    "ConfigurationError",
    "InvalidConfigurationValueError",
    "MissingConfigurationError",
    "PublishedConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "env_flag",
    "get_comparison_settings",
    "get_published_config",
    "require_env_var",
    "require_env_vars",
]
