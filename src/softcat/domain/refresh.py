"""Refresh scheduling and the re-fetch orchestration built on it."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any, Protocol

from softcat.domain.errors import ConfigurationMismatchError, ProviderFetchError
from softcat.domain.registry import SourceRegistry

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from uuid import UUID

    from softcat.domain.cache import ProjectionCache
    from softcat.domain.model import ExternalRecord, ExternalRecordData, RecordKey, Source
    from softcat.domain.ports import CatalogUnitOfWork, ExternalRecordFetcher, FetcherFactory

log = logging.getLogger(__name__)


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def _utcnow() -> datetime:
    return datetime.now(UTC)


def due_for_refresh(
    records: Iterable[ExternalRecord],
    staleness_minutes: int | None = None,
    *,
    clock: Clock = _utcnow,
) -> list[RecordKey]:
    """Keys of the records to re-fetch.

    Without a window every record is due. Otherwise a record is due when it
    was never fetched or was last fetched before ``now - window``.
    """

    if staleness_minutes is None:
        return [record.key for record in records]
    if staleness_minutes < 0:
        raise ValueError("Staleness window must be non-negative")
    cutoff = clock() - timedelta(minutes=staleness_minutes)
    return [
        record.key
        for record in records
        if record.last_fetch_time is None or record.last_fetch_time < cutoff
    ]


@dataclass(frozen=True, slots=True)
class RefreshResult:
    candidates: int = 0
    refreshed: int = 0
    not_found: int = 0
    failed: int = 0
    failed_keys: tuple[RecordKey, ...] = field(default=())


@dataclass(frozen=True, slots=True)
class _FetchOutcome:
    key: RecordKey
    data: ExternalRecordData | None = None
    failed: bool = False


def _resolve_fetchers(
    keys: Iterable[RecordKey],
    registry: SourceRegistry,
    fetcher_factory: FetcherFactory,
) -> dict[str, tuple[Source, ExternalRecordFetcher]]:
    fetchers: dict[str, tuple[Source, ExternalRecordFetcher]] = {}
    for key in keys:
        if key.source_slug in fetchers:
            continue
        source = registry.get(key.source_slug)
        fetchers[source.slug] = (source, fetcher_factory(source))
    return fetchers


async def refresh_external_records(
    *,
    unit_of_work_factory: Callable[[], CatalogUnitOfWork],
    fetcher_factory: FetcherFactory,
    staleness_minutes: int | None = None,
    concurrency: int = 4,
    fetch_timeout_seconds: float = 9.0,
    cache: ProjectionCache[Any] | None = None,
    clock: Clock = _utcnow,
) -> RefreshResult:
    """Re-fetch stale records and write the answers back.

    Provider failures, timeouts and unexpected fetcher errors leave the
    record stale and do not stop sibling fetches. Unknown sources and
    mismatching source definitions are raised before any request is sent.
    """

    with unit_of_work_factory() as uow:
        registry = SourceRegistry.load(uow)
        keys = due_for_refresh(
            uow.repositories.external_records.list(), staleness_minutes, clock=clock
        )
    fetchers = _resolve_fetchers(keys, registry, fetcher_factory)
    if not keys:
        log.info("No external record is due for refresh")
        return RefreshResult()

    semaphore = asyncio.Semaphore(concurrency)

    async def fetch_one(key: RecordKey) -> _FetchOutcome:
        source, fetcher = fetchers[key.source_slug]
        async with semaphore:
            try:
                async with asyncio.timeout(fetch_timeout_seconds):
                    data = await fetcher(key.external_id, source)
            except ProviderFetchError as exc:
                log.warning("Fetching %s:%s failed: %s", *key, exc)
                return _FetchOutcome(key, failed=True)
            except TimeoutError:
                log.warning(
                    "Fetching %s:%s timed out after %.1fs", *key, fetch_timeout_seconds
                )
                return _FetchOutcome(key, failed=True)
            except ConfigurationMismatchError:
                raise
            except Exception:
                log.exception("Fetching %s:%s failed unexpectedly", *key)
                return _FetchOutcome(key, failed=True)
        return _FetchOutcome(key, data=data)

    log.info("Refreshing %d external records from %d sources", len(keys), len(fetchers))
    outcomes = await asyncio.gather(*(fetch_one(key) for key in keys))

    refreshed = not_found = 0
    failed_keys: list[RecordKey] = []
    touched: set[UUID | None] = set()
    fetched_at = clock()
    with unit_of_work_factory() as uow:
        repository = uow.repositories.external_records
        for outcome in outcomes:
            if outcome.failed:
                failed_keys.append(outcome.key)
                continue
            record = repository.get(*outcome.key)
            if record is None:
                continue
            if outcome.data is None:
                record.mark_fetched(fetched_at)
                not_found += 1
            else:
                record.apply_fetched(outcome.data, fetched_at=fetched_at)
                refreshed += 1
            touched.add(record.software_id)
        uow.commit()

    if cache is not None:
        cache.invalidate(*touched)

    result = RefreshResult(
        candidates=len(keys),
        refreshed=refreshed,
        not_found=not_found,
        failed=len(failed_keys),
        failed_keys=tuple(failed_keys),
    )
    log.info(
        "Refresh done: %d candidates, %d refreshed, %d not found, %d failed",
        result.candidates,
        result.refreshed,
        result.not_found,
        result.failed,
    )
    return result


__all__ = ["Clock", "RefreshResult", "due_for_refresh", "refresh_external_records"]
