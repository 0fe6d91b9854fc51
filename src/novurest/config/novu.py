"""Novu configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_var, optional_float_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

NOVU_API_BASE_URL = "https://api.novu.co/v1"
NOVU_TIMEOUT_SECONDS = 30.0


def build_novu_resilience(
    *,
    base_url: str = NOVU_API_BASE_URL,
    timeout_seconds: float = NOVU_TIMEOUT_SECONDS,
    retry: RetryPolicy | None = None,
    ratelimit: RateLimit | None = None,
) -> ResilienceConfig:
    return ResilienceConfig(
        name="novu",
        base_url=base_url,
        timeout_seconds=timeout_seconds,
        retry=retry,
        ratelimit=ratelimit,
    )


@dataclass(frozen=True)
class NovuConfig:
    """Holds Novu API configuration values."""

    api_key: str
    resilience: ResilienceConfig = field(default_factory=build_novu_resilience)

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_key.strip():
            raise ConfigurationError(f"Invalid API Key: {self.api_key!r}")

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"ApiKey {self.api_key}",
            "Content-Type": "application/json",
        }


def get_novu_config(*, resilience: ResilienceConfig | None = None) -> NovuConfig:
    values = require_env_vars(("NOVU_API_KEY",))
    if resilience is None:
        timeout = optional_float_env_var("NOVU_TIMEOUT_SECONDS")
        resilience = build_novu_resilience(
            base_url=optional_env_var("NOVU_API_BASE_URL") or NOVU_API_BASE_URL,
            timeout_seconds=timeout if timeout is not None else NOVU_TIMEOUT_SECONDS,
        )
    return NovuConfig(api_key=values["NOVU_API_KEY"], resilience=resilience)
