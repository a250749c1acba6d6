"""SQLAlchemy-backed unit of work for the catalog."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from softcat.adapters.sqlalchemy.mappings import start_mappers
from softcat.adapters.sqlalchemy.migrations import upgrade_head
from softcat.adapters.sqlalchemy.repositories import (
    SqlAlchemyExternalRecordRepository,
    SqlAlchemySimilarityRepository,
    SqlAlchemySoftwareRepository,
    SqlAlchemySourceRepository,
)
from softcat.config import get_database_uri
from softcat.domain.ports.unit_of_work import CatalogRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the catalog store is used before ``startup()`` or twice."""


@dataclass(slots=True)
class _StoreState:
    engine: Engine | None = None
    session_factory: sessionmaker[Session] | None = None


_STATE = _StoreState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Open the catalog database and migrate it to the latest schema."""

    if _STATE.engine is not None and not force:
        raise StartupError("Catalog store already started. Pass force=True to reconfigure.")

    resolved_engine = engine or create_engine(database_uri or get_database_uri())
    start_mappers()
    upgrade_head(engine=resolved_engine)
    _STATE.engine = resolved_engine
    _STATE.session_factory = sessionmaker(bind=resolved_engine, expire_on_commit=False)
    log.info("Catalog store ready at %s", resolved_engine.url.render_as_string())


def configured_engine() -> Engine | None:
    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the engine and forget it (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None
    _STATE.session_factory = None


class SqlAlchemyCatalogUnitOfWork:
    """One session per ``with`` block; leaving the block without ``commit()`` discards changes."""

    def __init__(self, session_factory: sessionmaker[Session] | None = None) -> None:
        factory = session_factory or _STATE.session_factory
        if factory is None:
            raise StartupError(
                "Catalog store not started. Call softcat.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        self._session_factory = factory
        self._session: Session | None = None
        self._repositories: CatalogRepositories | None = None

    def __enter__(self) -> SqlAlchemyCatalogUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work session already initialised")
        session = self._session_factory()
        self._session = session
        self._repositories = CatalogRepositories(
            sources=SqlAlchemySourceRepository(session),
            software=SqlAlchemySoftwareRepository(session),
            external_records=SqlAlchemyExternalRecordRepository(session),
            similarities=SqlAlchemySimilarityRepository(session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        if exc_type is not None:
            session.rollback()
        session.close()
        self._session = None
        self._repositories = None
        return False

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> CatalogRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session


if TYPE_CHECKING:
    from softcat.domain.ports.unit_of_work import CatalogUnitOfWork

    _uow_check: CatalogUnitOfWork = SqlAlchemyCatalogUnitOfWork()
