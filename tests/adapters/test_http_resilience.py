from __future__ import annotations

import asyncio

import httpx
import pytest

from softcat.adapters.http_resilience import ResilientClient, build_cache_storage, build_retry
from softcat.config.http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
)


def test_build_retry_copies_policy() -> None:
    retry = build_retry(RetryPolicy(total=5, backoff_factor=0.1))

    assert retry.total == 5
    assert retry.backoff_factor == 0.1


def test_no_cache_config_means_no_storage() -> None:
    assert build_cache_storage(None) is None


def test_cache_storage_rejects_unknown_backend() -> None:
    with pytest.raises(ValueError, match="Unsupported cache backend"):
        build_cache_storage(CacheConfig(backend="redis"))  # type: ignore[arg-type]


def test_client_applies_base_url_and_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    config = ResilienceConfig(
        name="test",
        base_url="https://api.example.org/v1/",
        cache=None,
        ratelimit=RateLimit(max_calls=10),
        default_headers={"User-Agent": "softcat-tests"},
    )

    async def run() -> httpx.Response:
        async with ResilientClient(config, transport=httpx.MockTransport(handler)) as client:
            return await client.get("things/1", params={"lang": "en"})

    response = asyncio.run(run())

    assert response.json() == {"ok": True}
    (request,) = seen
    assert str(request.url) == "https://api.example.org/v1/things/1?lang=en"
    assert request.headers["User-Agent"] == "softcat-tests"


def test_client_retries_transient_statuses() -> None:
    statuses = iter([503, 200])

    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(next(statuses))

    config = ResilienceConfig(
        name="test",
        base_url="https://api.example.org/",
        cache=None,
        retry=RetryPolicy(total=1, backoff_factor=0.0, backoff_jitter=0.0),
    )

    async def run() -> httpx.Response:
        async with ResilientClient(config, transport=httpx.MockTransport(handler)) as client:
            return await client.get("flaky")

    assert asyncio.run(run()).status_code == 200
