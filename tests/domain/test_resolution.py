from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from softcat.domain.errors import StoreCorruptionError, UnknownSourceError
from softcat.domain.model import Identifier, Software, SoftwareDescriptor, SoftwareFields
from softcat.domain.registry import SourceRegistry
from softcat.domain.resolution import resolve, resolve_or_create
from tests.helpers.catalog import make_record

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from softcat.adapters.sqlalchemy.unit_of_work import SqlAlchemyCatalogUnitOfWork
    from softcat.domain.model import Source

pytestmark = pytest.mark.integration

type Factory = Callable[[], SqlAlchemyCatalogUnitOfWork]

REPO = "facebook/create-react-app"
GITHUB_ID = Identifier(value=REPO, subject_url="https://github.com/")


def _github_descriptor(name: str = "create-react-app") -> SoftwareDescriptor:
    return SoftwareDescriptor(display_name=name, source_slug="github", external_id=REPO)


def _seed_linked(
    factory: Factory, name: str, external_id: str, *identifiers: Identifier
) -> UUID:
    software = Software.create(name, SoftwareFields())
    with factory() as uow:
        uow.repositories.software.add(software)
        uow.repositories.external_records.add(
            make_record(
                "wikidata", external_id, software_id=software.id, identifiers=tuple(identifiers)
            )
        )
        uow.commit()
    return software.id


def _resolve(factory: Factory, descriptor: SoftwareDescriptor) -> UUID | None:
    with factory() as uow:
        software_id = resolve(
            descriptor, repositories=uow.repositories, registry=SourceRegistry.load(uow)
        )
        uow.commit()
    return software_id


def test_resolve_or_create_is_idempotent(
    sqlite_unit_of_work: Factory,
    catalog_sources: dict[str, Source],
) -> None:
    descriptor = SoftwareDescriptor(display_name="Vite JS", source_slug="wikidata")
    results: list[tuple[UUID, bool]] = []
    for _ in range(2):
        with sqlite_unit_of_work() as uow:
            results.append(
                resolve_or_create(
                    descriptor, repositories=uow.repositories, registry=SourceRegistry.load(uow)
                )
            )
            uow.commit()

    (first_id, created), (second_id, created_again) = results
    assert first_id == second_id
    assert created is True
    assert created_again is False
    with sqlite_unit_of_work() as uow:
        assert len(uow.repositories.software.list()) == 1


def test_resolve_by_record_link(
    sqlite_unit_of_work: Factory,
    catalog_sources: dict[str, Source],
) -> None:
    software_id = _seed_linked(sqlite_unit_of_work, "Create React App", "Q1")
    descriptor = SoftwareDescriptor(
        display_name="CRA", source_slug="wikidata", external_id="Q1"
    )

    assert _resolve(sqlite_unit_of_work, descriptor) == software_id


def test_resolve_without_match_returns_none(
    sqlite_unit_of_work: Factory,
    catalog_sources: dict[str, Source],
) -> None:
    assert _resolve(sqlite_unit_of_work, _github_descriptor()) is None
    with sqlite_unit_of_work() as uow:
        assert uow.repositories.external_records.list() == []


def test_resolve_through_cross_provider_identifier_attaches_record(
    sqlite_unit_of_work: Factory,
    catalog_sources: dict[str, Source],
) -> None:
    software_id = _seed_linked(sqlite_unit_of_work, "Create React App", "Q1", GITHUB_ID)

    assert _resolve(sqlite_unit_of_work, _github_descriptor()) == software_id
    with sqlite_unit_of_work() as uow:
        record = uow.repositories.external_records.get("github", REPO)
        assert record is not None
        assert record.software_id == software_id


def test_resolve_links_existing_unlinked_record(
    sqlite_unit_of_work: Factory,
    catalog_sources: dict[str, Source],
) -> None:
    software_id = _seed_linked(sqlite_unit_of_work, "Create React App", "Q1", GITHUB_ID)
    with sqlite_unit_of_work() as uow:
        uow.repositories.external_records.add(make_record("github", REPO))
        uow.commit()

    assert _resolve(sqlite_unit_of_work, _github_descriptor()) == software_id
    with sqlite_unit_of_work() as uow:
        record = uow.repositories.external_records.get("github", REPO)
        assert record is not None
        assert record.software_id == software_id


def test_identifier_match_ignores_other_provider_urls(
    sqlite_unit_of_work: Factory,
    catalog_sources: dict[str, Source],
) -> None:
    gitlab_id = Identifier(value=REPO, subject_url="https://gitlab.com/")
    _seed_linked(sqlite_unit_of_work, "Create React App", "Q1", gitlab_id)

    assert _resolve(sqlite_unit_of_work, _github_descriptor()) is None


def test_identifiers_pointing_at_several_software_are_store_corruption(
    sqlite_unit_of_work: Factory,
    catalog_sources: dict[str, Source],
) -> None:
    _seed_linked(sqlite_unit_of_work, "Create React App", "Q1", GITHUB_ID)
    _seed_linked(sqlite_unit_of_work, "CRA fork", "Q2", GITHUB_ID)

    with pytest.raises(StoreCorruptionError):
        _resolve(sqlite_unit_of_work, _github_descriptor())


def test_several_identifiers_for_one_provider_are_store_corruption(
    sqlite_unit_of_work: Factory,
    catalog_sources: dict[str, Source],
) -> None:
    other = Identifier(value="facebook/react", subject_url="https://github.com")
    _seed_linked(sqlite_unit_of_work, "Create React App", "Q1", GITHUB_ID, other)

    with pytest.raises(StoreCorruptionError):
        _resolve(sqlite_unit_of_work, _github_descriptor())


def test_resolve_unknown_source_raises(
    sqlite_unit_of_work: Factory,
    catalog_sources: dict[str, Source],
) -> None:
    descriptor = SoftwareDescriptor(display_name="X", source_slug="npm", external_id="x")

    with pytest.raises(UnknownSourceError):
        _resolve(sqlite_unit_of_work, descriptor)
