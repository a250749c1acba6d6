"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from functools import cache
from logging import getLogger
from typing import TYPE_CHECKING

from softcat.adapters.fetchers import build_fetcher
from softcat.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    is_started,
    startup,
)
from softcat.config import get_refresh_config
from softcat.domain.cache import ProjectionCache
from softcat.domain.catalog import SoftwareView, get_software, import_software, list_software
from softcat.domain.model import Source, SourceKind
from softcat.domain.ports.unit_of_work import CatalogUnitOfWork
from softcat.domain.refresh import RefreshResult, refresh_external_records
from softcat.domain.registry import SourceRegistry, register_source

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from softcat.config import RefreshConfig
    from softcat.domain.ports.fetching import FetcherFactory

UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]


log = getLogger(__name__)


@cache
def projection_cache() -> ProjectionCache[SoftwareView]:
    """Process-wide projection cache shared by readers and writers."""

    return ProjectionCache(ttl_seconds=get_refresh_config().projection_cache_ttl_seconds)


def _unit_of_work_factory(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyCatalogUnitOfWork


def add_source(
    slug: str,
    *,
    kind: SourceKind,
    url: str,
    priority: int,
    description: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> bool:
    """Register a provider; returns ``False`` when an identical one already exists."""

    source = Source(slug=slug, priority=priority, kind=kind, url=url, description=description)
    return register_source(source, unit_of_work=_unit_of_work_factory(unit_of_work_factory)())


def list_sources(*, unit_of_work_factory: UnitOfWorkFactory | None = None) -> list[Source]:
    with _unit_of_work_factory(unit_of_work_factory)() as uow:
        return SourceRegistry.load(uow).ordered()


def refresh_catalog(
    *,
    staleness_minutes: int | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    fetcher_factory: FetcherFactory | None = None,
    config: RefreshConfig | None = None,
) -> RefreshResult:
    """Re-fetch stale external records with the configured provider adapters."""

    refresh_config = config or get_refresh_config()
    window = refresh_config.staleness_minutes if staleness_minutes is None else staleness_minutes
    log.info(
        "Starting refresh: staleness=%s minutes, concurrency=%s",
        window,
        refresh_config.concurrency,
    )
    return asyncio.run(
        refresh_external_records(
            unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
            fetcher_factory=fetcher_factory or build_fetcher,
            staleness_minutes=window,
            concurrency=refresh_config.concurrency,
            fetch_timeout_seconds=refresh_config.fetch_timeout_seconds,
            cache=projection_cache(),
        )
    )


def import_from_source(
    source_slug: str,
    external_ids: Iterable[str],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    fetcher_factory: FetcherFactory | None = None,
) -> list[UUID]:
    imported = asyncio.run(
        import_software(
            source_slug,
            list(external_ids),
            unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
            fetcher_factory=fetcher_factory or build_fetcher,
            cache=projection_cache(),
        )
    )
    log.info("Imported %d software from %s", len(imported), source_slug)
    return imported


def show_software(
    software_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> SoftwareView | None:
    return get_software(
        software_id,
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        cache=projection_cache(),
    )


def list_catalog(
    *,
    include_dereferenced: bool = False,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[SoftwareView]:
    return list_software(
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        cache=projection_cache(),
        include_dereferenced=include_dereferenced,
    )
