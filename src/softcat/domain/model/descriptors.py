"""Inbound shapes consumed by the create/update use cases, and similarity links."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from softcat.domain.model.external_record import RecordKey
from softcat.domain.model.software import SoftwareFields

if TYPE_CHECKING:
    from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class SimilarSoftwareDescriptor:
    source_slug: str
    external_id: str
    label: str | None = None
    description: str | None = None
    is_libre_software: bool | None = None

    @property
    def key(self) -> RecordKey:
        return RecordKey(self.source_slug, self.external_id)


@dataclass(frozen=True, slots=True, kw_only=True)
class SoftwareDescriptor:
    display_name: str
    source_slug: str
    external_id: str | None = None
    fields: SoftwareFields = field(default_factory=SoftwareFields)
    similar_software: tuple[SimilarSoftwareDescriptor, ...] = ()


@dataclass(eq=False, kw_only=True)
class SimilarityLink:
    """Non-identity relation: the record is "similar to" the software."""

    software_id: UUID
    source_slug: str
    external_id: str

    @property
    def record_key(self) -> RecordKey:
        return RecordKey(self.source_slug, self.external_id)
