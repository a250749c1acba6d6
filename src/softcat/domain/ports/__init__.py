"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import ExternalRecordFetcher, FetcherFactory
from .persistence import (
    ExternalRecordRepository,
    Repository,
    SimilarityRepository,
    SoftwareRepository,
    SourceRepository,
)
from .unit_of_work import CatalogRepositories, CatalogUnitOfWork

__all__ = [
    "CatalogRepositories",
    "CatalogUnitOfWork",
    "ExternalRecordFetcher",
    "ExternalRecordRepository",
    "FetcherFactory",
    "Repository",
    "SimilarityRepository",
    "SoftwareRepository",
    "SourceRepository",
]
