"""Rate-limited, retrying and caching HTTP client shared by the provider adapters."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from softcat.config import get_http_cache_path

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._client import UseClientDefault
    from httpx._types import HeaderTypes, QueryParamTypes, TimeoutTypes, URLTypes

    from softcat.config.http_resilience import CacheConfig, ResilienceConfig, RetryPolicy

log = getLogger(__name__)


class RequestOptions(TypedDict, total=False):
    params: QueryParamTypes | None
    headers: HeaderTypes | None
    timeout: TimeoutTypes | UseClientDefault


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
        backoff_jitter=policy.backoff_jitter,
    )


def build_cache_storage(config: CacheConfig | None) -> AsyncSqliteStorage | None:
    if config is None:
        return None
    match config.backend:
        case "sqlite":
            database_path = config.sqlite_path or str(get_http_cache_path())
        case "memory":
            database_path = ":memory:"
        case _:
            raise ValueError(f"Unsupported cache backend: {config.backend}")
    return AsyncSqliteStorage(database_path=database_path, default_ttl=config.ttl_seconds)


class ResilientClient:
    """Async GET client for one provider.

    Requests go through the provider rate limit, then the response cache, then
    the retry layer. ``transport`` replaces the network underneath the retry
    layer, which is how tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )
        options = {
            "base_url": config.base_url or "",
            "timeout": config.timeout_seconds,
            "headers": dict(config.default_headers or {}),
            "transport": RetryTransport(transport=transport, retry=build_retry(config.retry)),
            "follow_redirects": True,
            "event_hooks": {"response": [self._log_response]},
        }
        storage = build_cache_storage(config.cache)
        self._client: httpx.AsyncClient = (
            AsyncCacheClient(**options, storage=storage)
            if storage is not None
            else httpx.AsyncClient(**options)
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, url: URLTypes, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        if self._limiter is None:
            return await self._client.get(url, **kwargs)
        async with self._limiter:
            return await self._client.get(url, **kwargs)

    async def _log_response(self, response: httpx.Response) -> None:
        log.debug(
            "%s GET %s -> %s", self.config.name, response.request.url, response.status_code
        )


__all__ = ["ResilientClient", "build_cache_storage", "build_retry"]
