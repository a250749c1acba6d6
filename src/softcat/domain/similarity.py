"""Non-identity "similar to" links between a software and external records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from softcat.domain.model import ExternalRecord, RecordKey, SimilarityLink

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from softcat.domain.model import SimilarSoftwareDescriptor
    from softcat.domain.ports import CatalogRepositories

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class SimilarSoftware:
    """Read-side entry of a similarity list.

    ``registered`` entries point at a record linked to an active software.
    """

    source_slug: str
    external_id: str
    label: str | None
    description: str | None
    is_libre_software: bool | None
    registered: bool
    software_id: UUID | None = None
    software_name: str | None = None
    software_description: str | None = None


def set_similarities(
    software_id: UUID,
    items: Iterable[SimilarSoftwareDescriptor],
    *,
    repositories: CatalogRepositories,
) -> list[RecordKey]:
    """Replace the full similarity set of ``software_id`` with ``items``.

    Missing records are created blank and unlinked. Returns the linked keys.
    """

    keys: list[RecordKey] = []
    for item in items:
        key = item.key
        if key in keys:
            continue
        keys.append(key)
        if repositories.external_records.get(*key) is None:
            repositories.external_records.add(
                ExternalRecord.blank(
                    item.source_slug,
                    item.external_id,
                    label=item.label,
                    description=item.description,
                    is_libre_software=item.is_libre_software,
                )
            )

    repositories.similarities.delete_for_software(software_id)
    for key in keys:
        repositories.similarities.add(
            SimilarityLink(
                software_id=software_id,
                source_slug=key.source_slug,
                external_id=key.external_id,
            )
        )
    log.debug("Software %s now has %d similar records", software_id, len(keys))
    return keys


def similar_software(
    software_id: UUID,
    *,
    repositories: CatalogRepositories,
) -> list[SimilarSoftware]:
    entries: list[SimilarSoftware] = []
    for link in repositories.similarities.list_for_software(software_id):
        record = repositories.external_records.get(link.source_slug, link.external_id)
        if record is None:
            continue
        linked = (
            repositories.software.get(record.software_id)
            if record.software_id is not None
            else None
        )
        if linked is not None and linked.is_dereferenced:
            linked = None
        entries.append(
            SimilarSoftware(
                source_slug=record.source_slug,
                external_id=record.external_id,
                label=record.label,
                description=record.description,
                is_libre_software=record.is_libre_software,
                registered=linked is not None,
                software_id=linked.id if linked else None,
                software_name=linked.name if linked else None,
                software_description=linked.description if linked else None,
            )
        )
    return entries


__all__ = ["SimilarSoftware", "set_similarities", "similar_software"]
