"""SQLAlchemy adapter package for softcat."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyExternalRecordRepository,
    SqlAlchemySimilarityRepository,
    SqlAlchemySoftwareRepository,
    SqlAlchemySourceRepository,
)
from .unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyCatalogUnitOfWork",
    "SqlAlchemyExternalRecordRepository",
    "SqlAlchemySimilarityRepository",
    "SqlAlchemySoftwareRepository",
    "SqlAlchemySourceRepository",
    "StartupError",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
