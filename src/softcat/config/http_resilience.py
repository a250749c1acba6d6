"""Configuration types for the provider HTTP clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, cast

import httpx

from .env import optional_env_var
from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

type CacheBackend = Literal["sqlite", "memory"]

# Provider calls must fail fast instead of hanging a refresh batch.
DEFAULT_PROVIDER_TIMEOUT_SECONDS = 8.0
DEFAULT_CACHE_TTL_SECONDS = 600.0
CACHE_BACKENDS: frozenset[str] = frozenset({"sqlite", "memory"})


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    total: int = 2
    backoff_factor: float = 0.5
    max_backoff_wait: float = 4.0
    respect_retry_after_header: bool = True
    # Every provider call is a read.
    allowed_methods: frozenset[str] = frozenset({"GET", "HEAD"})
    status_forcelist: frozenset[int] = frozenset({429, 500, 502, 503, 504})
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )
    backoff_jitter: float = 1.0


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float = 1.0


@dataclass(slots=True, frozen=True)
class CacheConfig:
    backend: CacheBackend = "memory"
    sqlite_path: str | None = None
    ttl_seconds: float | None = DEFAULT_CACHE_TTL_SECONDS


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = DEFAULT_PROVIDER_TIMEOUT_SECONDS
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = field(default_factory=CacheConfig)
    default_headers: Mapping[str, str] | None = None


def get_cache_config() -> CacheConfig | None:
    """Response cache selected by ``SOFTCAT_HTTP_CACHE`` (memory, sqlite or off)."""

    backend = (optional_env_var("SOFTCAT_HTTP_CACHE") or "memory").lower()
    if backend == "off":
        return None
    if backend not in CACHE_BACKENDS:
        raise ConfigurationError(
            f"SOFTCAT_HTTP_CACHE must be one of memory, sqlite, off; got {backend!r}"
        )
    return CacheConfig(backend=cast("CacheBackend", backend))


def provider_resilience(
    name: str,
    base_url: str,
    *,
    calls_per_second: int,
    headers: Mapping[str, str],
) -> ResilienceConfig:
    return ResilienceConfig(
        name=name,
        base_url=base_url,
        ratelimit=RateLimit(max_calls=calls_per_second),
        cache=get_cache_config(),
        default_headers=dict(headers),
    )
