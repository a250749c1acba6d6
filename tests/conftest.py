from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002

from softcat.adapters.sqlalchemy import start_mappers
from softcat.adapters.sqlalchemy.migrations import upgrade_head
from softcat.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    shutdown,
    startup,
)
from softcat.domain.model import Source, SourceKind
from softcat.domain.registry import register_source

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyCatalogUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyCatalogUnitOfWork:
        return SqlAlchemyCatalogUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def catalog_sources(
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork],
) -> dict[str, Source]:
    """Wikidata (priority 1), GitHub (priority 10) and HAL (priority 20)."""

    sources = {
        "wikidata": Source(
            slug="wikidata", priority=1, kind=SourceKind.WIKIDATA, url="https://www.wikidata.org/"
        ),
        "github": Source(
            slug="github", priority=10, kind=SourceKind.GITHUB, url="https://github.com/"
        ),
        "hal": Source(slug="hal", priority=20, kind=SourceKind.HAL, url="https://hal.science/"),
    }
    for source in sources.values():
        register_source(
            Source(
                slug=source.slug,
                priority=source.priority,
                kind=source.kind,
                url=source.url,
            ),
            unit_of_work=sqlite_unit_of_work(),
        )
    return sources
