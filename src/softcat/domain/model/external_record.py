"""Provider-specific descriptions of a software package.

Important: an ExternalRecord is keyed by (source_slug, external_id) and only
*points* at a canonical software through ``software_id``. The pointer is set
once and only cleared by an explicit ``unlink()``.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, NamedTuple

from softcat.domain.errors import RecordLinkConflictError
from softcat.domain.model.enums import DeveloperKind

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


class RecordKey(NamedTuple):
    source_slug: str
    external_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Identifier:
    """Cross-provider reference: ``value`` is an id on the provider at ``subject_url``."""

    value: str
    subject_url: str
    name: str | None = None
    url: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Developer:
    name: str
    kind: DeveloperKind = DeveloperKind.PERSON
    url: str | None = None
    identifiers: tuple[Identifier, ...] = ()
    affiliations: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalRecordData:
    """Descriptive fields a provider returns for one external id."""

    label: str | None = None
    description: str | None = None
    is_libre_software: bool | None = None
    developers: tuple[Developer, ...] = ()
    logo_url: str | None = None
    website_url: str | None = None
    source_url: str | None = None
    documentation_url: str | None = None
    license: str | None = None
    software_version: str | None = None
    publication_time: datetime | None = None
    keywords: tuple[str, ...] = ()
    application_categories: tuple[str, ...] = ()
    programming_languages: tuple[str, ...] = ()
    identifiers: tuple[Identifier, ...] = ()


DATA_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(ExternalRecordData))


@dataclass(eq=False, kw_only=True)
class ExternalRecord:
    source_slug: str
    external_id: str
    software_id: UUID | None = None

    label: str | None = None
    description: str | None = None
    is_libre_software: bool | None = None
    developers: tuple[Developer, ...] = ()
    logo_url: str | None = None
    website_url: str | None = None
    source_url: str | None = None
    documentation_url: str | None = None
    license: str | None = None
    software_version: str | None = None
    publication_time: datetime | None = None
    keywords: tuple[str, ...] = ()
    application_categories: tuple[str, ...] = ()
    programming_languages: tuple[str, ...] = ()
    identifiers: tuple[Identifier, ...] = ()

    last_fetch_time: datetime | None = None

    @classmethod
    def blank(
        cls,
        source_slug: str,
        external_id: str,
        *,
        software_id: UUID | None = None,
        label: str | None = None,
        description: str | None = None,
        is_libre_software: bool | None = None,
    ) -> ExternalRecord:
        """Record created lazily before any fetch (never fetched yet)."""
        return cls(
            source_slug=source_slug,
            external_id=external_id,
            software_id=software_id,
            label=label or "",
            description=description or "",
            is_libre_software=is_libre_software,
        )

    @property
    def key(self) -> RecordKey:
        return RecordKey(self.source_slug, self.external_id)

    @property
    def is_linked(self) -> bool:
        return self.software_id is not None

    def link_to(self, software_id: UUID) -> None:
        if self.software_id is not None and self.software_id != software_id:
            raise RecordLinkConflictError(
                f"{self.source_slug}:{self.external_id} is already linked to {self.software_id}"
            )
        self.software_id = software_id

    def unlink(self) -> None:
        self.software_id = None

    @property
    def data(self) -> ExternalRecordData:
        return ExternalRecordData(**{name: getattr(self, name) for name in DATA_FIELDS})

    def apply_fetched(self, data: ExternalRecordData, *, fetched_at: datetime) -> None:
        """Overwrite descriptive fields with a fresh provider answer."""
        for name in DATA_FIELDS:
            setattr(self, name, getattr(data, name))
        self.last_fetch_time = fetched_at

    def mark_fetched(self, fetched_at: datetime) -> None:
        self.last_fetch_time = fetched_at
