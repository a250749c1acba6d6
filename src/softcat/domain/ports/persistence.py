"""Ports for persisting catalog aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from softcat.domain.model import ExternalRecord, SimilarityLink, Software, Source

if TYPE_CHECKING:
    from uuid import UUID


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class SourceRepository(Repository[Source], Protocol):
    """Persistence contract for provider definitions."""

    def get(self, slug: str) -> Source | None: ...

    def list(self) -> list[Source]: ...


@runtime_checkable
class SoftwareRepository(Repository[Software], Protocol):
    """Persistence contract for canonical software.

    ``add`` and ``save`` raise ``DuplicateSoftwareError`` when another
    non-dereferenced software already carries the same name.
    """

    def save(self, entity: Software) -> None: ...

    def get(self, software_id: UUID) -> Software | None: ...

    def find_active_by_name(self, name: str) -> Software | None: ...

    def list(self, *, include_dereferenced: bool = False) -> list[Software]: ...


@runtime_checkable
class ExternalRecordRepository(Repository[ExternalRecord], Protocol):
    """Persistence contract for provider records keyed by (source_slug, external_id)."""

    def get(self, source_slug: str, external_id: str) -> ExternalRecord | None: ...

    def list(self) -> list[ExternalRecord]: ...

    def list_for_software(self, software_id: UUID) -> list[ExternalRecord]: ...

    def find_by_identifier(
        self,
        *,
        subject_url: str,
        value: str,
        exclude_source_slug: str,
    ) -> list[ExternalRecord]:
        """Linked records of other sources carrying ``value`` scoped to ``subject_url``."""
        ...


@runtime_checkable
class SimilarityRepository(Repository[SimilarityLink], Protocol):
    """Persistence contract for "similar to" links."""

    def list_for_software(self, software_id: UUID) -> list[SimilarityLink]: ...

    def delete_for_software(self, software_id: UUID) -> None: ...


__all__ = [
    "ExternalRecordRepository",
    "Repository",
    "SimilarityRepository",
    "SoftwareRepository",
    "SourceRepository",
]
