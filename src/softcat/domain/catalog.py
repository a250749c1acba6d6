"""Catalog use cases: create, update, dereference, import and read software."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from softcat.domain.errors import (
    DuplicateSoftwareError,
    ProviderFetchError,
    SoftwareNotFoundError,
)
from softcat.domain.fusion import PrioritizedRecord, fuse
from softcat.domain.model import (
    ExternalRecord,
    SoftwareDescriptor,
    SoftwareFields,
    classify_software_type,
)
from softcat.domain.registry import SourceRegistry
from softcat.domain.resolution import resolve_or_create
from softcat.domain.similarity import SimilarSoftware, set_similarities, similar_software

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping
    from uuid import UUID

    from softcat.domain.cache import ProjectionCache
    from softcat.domain.fusion import FusedExternalData
    from softcat.domain.model import Dereferencing, Software, SoftwareType
    from softcat.domain.ports import CatalogRepositories, CatalogUnitOfWork, FetcherFactory

    type UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class SoftwareView:
    """Intrinsic fields, fused external data and annotated similar software."""

    id: UUID
    name: str
    description: str
    intrinsic_license: str
    intrinsic_logo_url: str | None
    keywords: tuple[str, ...]
    categories: tuple[str, ...]
    software_type: SoftwareType | None
    custom_attributes: Mapping[str, Any]
    referenced_since: datetime
    updated_at: datetime
    dereferencing: Dereferencing | None
    external_data: FusedExternalData | None
    similar_software: tuple[SimilarSoftware, ...]

    @property
    def logo_url(self) -> str | None:
        if self.external_data is not None and self.external_data.logo_url:
            return self.external_data.logo_url
        return self.intrinsic_logo_url

    @property
    def license(self) -> str:
        if self.external_data is not None and self.external_data.license:
            return self.external_data.license
        return self.intrinsic_license

    @property
    def application_categories(self) -> tuple[str, ...]:
        fused = self.external_data.application_categories if self.external_data else ()
        return self.categories + tuple(item for item in fused if item not in self.categories)


def _invalidate(cache: ProjectionCache[Any] | None, *software_ids: UUID | None) -> None:
    if cache is not None:
        cache.invalidate(*software_ids)


def _attach_record(
    software_id: UUID,
    source_slug: str,
    external_id: str,
    *,
    repositories: CatalogRepositories,
) -> None:
    record = repositories.external_records.get(source_slug, external_id)
    if record is None:
        repositories.external_records.add(
            ExternalRecord.blank(source_slug, external_id, software_id=software_id)
        )
        log.info("%s:%s saved and linked to %s", source_slug, external_id, software_id)
    elif record.software_id is None:
        record.link_to(software_id)
        log.info("%s:%s now linked to %s", source_slug, external_id, software_id)
    elif record.software_id != software_id:
        log.warning(
            "%s:%s stays linked to %s instead of %s",
            source_slug,
            external_id,
            record.software_id,
            software_id,
        )


def _create_once(descriptor: SoftwareDescriptor, unit_of_work_factory: UnitOfWorkFactory) -> UUID:
    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        registry = SourceRegistry.load(uow)
        software_id, _ = resolve_or_create(
            descriptor, repositories=repositories, registry=registry
        )
        if descriptor.external_id is not None:
            _attach_record(
                software_id,
                descriptor.source_slug,
                descriptor.external_id,
                repositories=repositories,
            )
        if descriptor.similar_software:
            set_similarities(software_id, descriptor.similar_software, repositories=repositories)
        uow.commit()
    return software_id


def create_software(
    descriptor: SoftwareDescriptor,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    cache: ProjectionCache[Any] | None = None,
) -> UUID:
    """Resolve or create the software described by ``descriptor`` and attach its record.

    A name taken by a concurrent writer is retried once in a fresh unit of
    work, where name resolution then finds the other writer's software.
    """

    try:
        software_id = _create_once(descriptor, unit_of_work_factory)
    except DuplicateSoftwareError:
        log.info("Software %r created concurrently, resolving again", descriptor.display_name)
        software_id = _create_once(descriptor, unit_of_work_factory)
    _invalidate(cache, software_id)
    return software_id


def update_software(
    software_id: UUID,
    descriptor: SoftwareDescriptor,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    cache: ProjectionCache[Any] | None = None,
) -> None:
    """Overwrite intrinsic fields and the similarity set of an existing software."""

    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        software = repositories.software.get(software_id)
        if software is None:
            raise SoftwareNotFoundError(software_id)
        holder = repositories.software.find_active_by_name(descriptor.display_name)
        if holder is not None and holder.id != software_id:
            raise DuplicateSoftwareError(descriptor.display_name)
        software.update_from(descriptor.display_name, descriptor.fields)
        repositories.software.save(software)
        set_similarities(software_id, descriptor.similar_software, repositories=repositories)
        uow.commit()
    log.info("Updated software %r (%s)", descriptor.display_name, software_id)
    _invalidate(cache, software_id)


def dereference_software(
    software_id: UUID,
    reason: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    cache: ProjectionCache[Any] | None = None,
) -> None:
    with unit_of_work_factory() as uow:
        software = uow.repositories.software.get(software_id)
        if software is None:
            raise SoftwareNotFoundError(software_id)
        software.dereference(reason)
        uow.commit()
    log.info("Dereferenced software %s: %s", software_id, reason)
    _invalidate(cache, software_id)


async def import_software(
    source_slug: str,
    external_ids: Iterable[str],
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    fetcher_factory: FetcherFactory,
    cache: ProjectionCache[Any] | None = None,
) -> list[UUID]:
    """Fetch ``external_ids`` from one source and register each as software.

    Ids the provider does not know or fails to answer for are skipped. The
    fetched data is stored on the record, so the new software immediately has
    a fused projection.
    """

    with unit_of_work_factory() as uow:
        source = SourceRegistry.load(uow).get(source_slug)
    fetcher = fetcher_factory(source)

    imported: list[UUID] = []
    for external_id in external_ids:
        try:
            data = await fetcher(external_id, source)
        except ProviderFetchError as exc:
            log.warning("%s, skipped", exc)
            continue
        if data is None or not data.label:
            log.warning("%s:%s not found, skipped", source_slug, external_id)
            continue
        descriptor = SoftwareDescriptor(
            display_name=data.label,
            source_slug=source_slug,
            external_id=external_id,
            fields=SoftwareFields(
                description=data.description or "",
                license=data.license or "",
                logo_url=data.logo_url,
                keywords=data.keywords,
                categories=data.application_categories,
                software_type=classify_software_type(
                    (*data.application_categories, *data.keywords)
                ),
            ),
        )
        software_id = create_software(
            descriptor, unit_of_work_factory=unit_of_work_factory, cache=cache
        )
        with unit_of_work_factory() as uow:
            record = uow.repositories.external_records.get(source_slug, external_id)
            if record is not None:
                record.apply_fetched(data, fetched_at=datetime.now(UTC))
            uow.commit()
        _invalidate(cache, software_id)
        imported.append(software_id)
    return imported


def _build_view(
    software: Software,
    *,
    repositories: CatalogRepositories,
    registry: SourceRegistry,
) -> SoftwareView:
    records = repositories.external_records.list_for_software(software.id)
    fused = fuse(
        [PrioritizedRecord(record, registry.get(record.source_slug)) for record in records]
    )
    return SoftwareView(
        id=software.id,
        name=software.name,
        description=software.description,
        intrinsic_license=software.license,
        intrinsic_logo_url=software.logo_url,
        keywords=software.keywords,
        categories=software.categories,
        software_type=software.software_type,
        custom_attributes=dict(software.custom_attributes),
        referenced_since=software.referenced_since,
        updated_at=software.updated_at,
        dereferencing=software.dereferencing,
        external_data=fused,
        similar_software=tuple(similar_software(software.id, repositories=repositories)),
    )


def get_software(
    software_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    cache: ProjectionCache[SoftwareView] | None = None,
) -> SoftwareView | None:
    if cache is not None and (cached := cache.get(software_id)) is not None:
        return cached
    with unit_of_work_factory() as uow:
        software = uow.repositories.software.get(software_id)
        if software is None:
            return None
        view = _build_view(
            software, repositories=uow.repositories, registry=SourceRegistry.load(uow)
        )
    if cache is not None:
        cache.put(software_id, view)
    return view


def list_software(
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    cache: ProjectionCache[SoftwareView] | None = None,
    include_dereferenced: bool = False,
) -> list[SoftwareView]:
    """Views of the catalog ordered by name; dereferenced software hidden by default."""

    views: list[SoftwareView] = []
    with unit_of_work_factory() as uow:
        registry = SourceRegistry.load(uow)
        for software in uow.repositories.software.list(include_dereferenced=include_dereferenced):
            view = cache.get(software.id) if cache is not None else None
            if view is None:
                view = _build_view(software, repositories=uow.repositories, registry=registry)
                if cache is not None:
                    cache.put(software.id, view)
            views.append(view)
    return views


__all__ = [
    "SoftwareView",
    "create_software",
    "dereference_software",
    "get_software",
    "import_software",
    "list_software",
    "update_software",
]
