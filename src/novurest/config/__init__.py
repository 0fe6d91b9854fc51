"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .novu import NOVU_API_BASE_URL, NovuConfig, build_novu_resilience, get_novu_config

__all__ = [
    "NOVU_API_BASE_URL",
    "ConfigurationError",
    "MissingConfigurationError",
    "NovuConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "build_novu_resilience",
    "get_novu_config",
    "require_env_vars",
]
