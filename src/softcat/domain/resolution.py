"""Identity resolution: map an inbound descriptor onto an existing software.

Lookup order, first match wins:

1. exact name among non-dereferenced software
2. the descriptor's own (source_slug, external_id) record, when linked
3. identifiers stored on linked records of *other* sources that point at the
   descriptor's external id on the descriptor's provider
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from softcat.domain.errors import StoreCorruptionError
from softcat.domain.model import ExternalRecord, Software, same_source_url

if TYPE_CHECKING:
    from uuid import UUID

    from softcat.domain.model import SoftwareDescriptor
    from softcat.domain.ports import CatalogRepositories
    from softcat.domain.registry import SourceRegistry

log = logging.getLogger(__name__)


def resolve(
    descriptor: SoftwareDescriptor,
    *,
    repositories: CatalogRepositories,
    registry: SourceRegistry,
) -> UUID | None:
    """Return the id of the software ``descriptor`` refers to, or ``None``.

    A match through cross-provider identifiers attaches the descriptor's
    record to the discovered software (created when absent).
    """

    source = registry.get(descriptor.source_slug)

    software = repositories.software.find_active_by_name(descriptor.display_name)
    if software is not None:
        log.debug("Resolved %r by name to %s", descriptor.display_name, software.id)
        return software.id

    external_id = descriptor.external_id
    if external_id is None:
        return None

    record = repositories.external_records.get(source.slug, external_id)
    if record is not None and record.software_id is not None:
        log.debug("Resolved %s:%s by record link", source.slug, external_id)
        return record.software_id

    subject_url = source.normalized_url
    matches = repositories.external_records.find_by_identifier(
        subject_url=subject_url,
        value=external_id,
        exclude_source_slug=source.slug,
    )
    software_ids: set[UUID] = set()
    for match in matches:
        scoped = [
            identifier
            for identifier in match.identifiers
            if same_source_url(identifier.subject_url, subject_url)
        ]
        if len(scoped) > 1:
            log.error(
                "Record %s:%s carries %d identifiers for %s",
                match.source_slug,
                match.external_id,
                len(scoped),
                subject_url,
            )
            raise StoreCorruptionError(
                f"Record {match.source_slug}:{match.external_id} has several identifiers "
                f"for {subject_url}"
            )
        if match.software_id is not None:
            software_ids.add(match.software_id)

    if len(software_ids) > 1:
        log.error(
            "Identifier %s on %s points at %d software: %s",
            external_id,
            subject_url,
            len(software_ids),
            sorted(str(software_id) for software_id in software_ids),
        )
        raise StoreCorruptionError(
            f"Identifier {external_id} on {subject_url} is claimed by several software"
        )
    if not software_ids:
        return None

    (software_id,) = software_ids
    if record is None:
        repositories.external_records.add(
            ExternalRecord.blank(source.slug, external_id, software_id=software_id)
        )
    else:
        record.link_to(software_id)
    log.info(
        "Resolved %s:%s through cross-provider identifier to %s",
        source.slug,
        external_id,
        software_id,
    )
    return software_id


def resolve_or_create(
    descriptor: SoftwareDescriptor,
    *,
    repositories: CatalogRepositories,
    registry: SourceRegistry,
) -> tuple[UUID, bool]:
    """Resolve ``descriptor``, creating a software when nothing matches.

    Returns the software id and whether it was created. Raises
    ``DuplicateSoftwareError`` when a concurrent writer took the name first.
    """

    software_id = resolve(descriptor, repositories=repositories, registry=registry)
    if software_id is not None:
        return software_id, False

    software = Software.create(descriptor.display_name, descriptor.fields)
    repositories.software.add(software)
    log.info("Created software %r (%s)", software.name, software.id)
    return software.id, True


__all__ = ["resolve", "resolve_or_create"]
