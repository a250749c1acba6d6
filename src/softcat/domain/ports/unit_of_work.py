"""Transaction boundary around the catalog repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Self

if TYPE_CHECKING:
    from types import TracebackType

    from softcat.domain.ports.persistence import (
        ExternalRecordRepository,
        SimilarityRepository,
        SoftwareRepository,
        SourceRepository,
    )


@dataclass(slots=True)
class CatalogRepositories:
    sources: SourceRepository
    software: SoftwareRepository
    external_records: ExternalRecordRepository
    similarities: SimilarityRepository


class CatalogUnitOfWork(Protocol):
    """Repositories are only usable inside ``with``; nothing persists without ``commit()``."""

    @property
    def repositories(self) -> CatalogRepositories: ...

    def __enter__(self) -> Self: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
