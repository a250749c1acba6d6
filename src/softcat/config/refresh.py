"""Refresh scheduling defaults."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_int_env_var
from .errors import ConfigurationError

DEFAULT_REFRESH_CONCURRENCY = 4
DEFAULT_FETCH_TIMEOUT_SECONDS = 9.0
DEFAULT_PROJECTION_CACHE_TTL_SECONDS = 300.0


@dataclass(frozen=True, slots=True)
class RefreshConfig:
    staleness_minutes: int | None = None
    concurrency: int = DEFAULT_REFRESH_CONCURRENCY
    fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    projection_cache_ttl_seconds: float = DEFAULT_PROJECTION_CACHE_TTL_SECONDS

    def __post_init__(self) -> None:
        if self.staleness_minutes is not None and self.staleness_minutes < 0:
            raise ConfigurationError("Staleness window must be non-negative")
        if self.concurrency < 1:
            raise ConfigurationError("Refresh concurrency must be at least 1")
        if self.fetch_timeout_seconds <= 0:
            raise ConfigurationError("Fetch timeout must be positive")


def get_refresh_config() -> RefreshConfig:
    concurrency = optional_int_env_var("SOFTCAT_REFRESH_CONCURRENCY")
    return RefreshConfig(
        staleness_minutes=optional_int_env_var("SOFTCAT_REFRESH_STALENESS_MINUTES"),
        concurrency=concurrency if concurrency is not None else DEFAULT_REFRESH_CONCURRENCY,
    )
