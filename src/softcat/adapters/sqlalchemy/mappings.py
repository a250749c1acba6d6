"""SQLAlchemy mapping metadata for the softcat domain model."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import Any, cast

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    ForeignKeyConstraint,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    Uuid,
    orm,
)

from softcat.domain.model import (
    Developer,
    DeveloperKind,
    ExternalRecord,
    Identifier,
    OperatingSystem,
    SimilarityLink,
    Software,
    SoftwareKind,
    SoftwareType,
    Source,
    SourceKind,
)

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _load_list(value: str | None) -> list[Any]:
    if value is None:
        return []
    loaded = json.loads(value)
    if not isinstance(loaded, list):
        return []
    return cast(list[Any], loaded)


def _identifier_to_json(identifier: Identifier) -> dict[str, Any]:
    return {
        "value": identifier.value,
        "subject_url": identifier.subject_url,
        "name": identifier.name,
        "url": identifier.url,
    }


def _identifier_from_json(item: dict[str, Any]) -> Identifier:
    return Identifier(
        value=str(item["value"]),
        subject_url=str(item["subject_url"]),
        name=item.get("name"),
        url=item.get("url"),
    )


class StringTupleType(TypeDecorator[tuple[str, ...]]):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value: tuple[str, ...] | None, dialect: Dialect) -> str:
        _ = dialect
        return json.dumps(list(value or ()), ensure_ascii=False)

    def process_result_value(self, value: str | None, dialect: Dialect) -> tuple[str, ...]:
        _ = dialect
        return tuple(str(item) for item in _load_list(value))


class IdentifierTupleType(TypeDecorator[tuple[Identifier, ...]]):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value: tuple[Identifier, ...] | None, dialect: Dialect) -> str:
        _ = dialect
        return json.dumps([_identifier_to_json(item) for item in value or ()], ensure_ascii=False)

    def process_result_value(self, value: str | None, dialect: Dialect) -> tuple[Identifier, ...]:
        _ = dialect
        return tuple(
            _identifier_from_json(item) for item in _load_list(value) if isinstance(item, dict)
        )


class DeveloperTupleType(TypeDecorator[tuple[Developer, ...]]):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value: tuple[Developer, ...] | None, dialect: Dialect) -> str:
        _ = dialect
        payload = [
            {
                "name": developer.name,
                "kind": developer.kind.value,
                "url": developer.url,
                "identifiers": [_identifier_to_json(item) for item in developer.identifiers],
                "affiliations": list(developer.affiliations),
            }
            for developer in value or ()
        ]
        return json.dumps(payload, ensure_ascii=False)

    def process_result_value(self, value: str | None, dialect: Dialect) -> tuple[Developer, ...]:
        _ = dialect
        developers: list[Developer] = []
        for item in _load_list(value):
            if not isinstance(item, dict):
                continue
            developers.append(
                Developer(
                    name=str(item["name"]),
                    kind=DeveloperKind(item.get("kind", DeveloperKind.PERSON.value)),
                    url=item.get("url"),
                    identifiers=tuple(
                        _identifier_from_json(identifier)
                        for identifier in item.get("identifiers", [])
                    ),
                    affiliations=tuple(item.get("affiliations", [])),
                )
            )
        return tuple(developers)


class SoftwareTypeType(TypeDecorator[SoftwareType]):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value: SoftwareType | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps({"kind": value.kind.value, "os": sorted(item.value for item in value.os)})

    def process_result_value(self, value: str | None, dialect: Dialect) -> SoftwareType | None:
        _ = dialect
        if value is None:
            return None
        loaded = json.loads(value)
        return SoftwareType(
            kind=SoftwareKind(loaded["kind"]),
            os=frozenset(OperatingSystem(item) for item in loaded.get("os", [])),
        )


class JSONDictType(TypeDecorator[dict[str, Any]]):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value: dict[str, Any] | None, dialect: Dialect) -> str:
        _ = dialect
        return json.dumps(value or {}, ensure_ascii=False, sort_keys=True)

    def process_result_value(self, value: str | None, dialect: Dialect) -> dict[str, Any]:
        _ = dialect
        if value is None:
            return {}
        loaded = json.loads(value)
        return cast(dict[str, Any], loaded) if isinstance(loaded, dict) else {}


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

source_table = Table(
    "source",
    mapper_registry.metadata,
    Column("slug", String, primary_key=True),
    Column("priority", Integer, nullable=False),
    Column("kind", Enum(SourceKind, native_enum=False), nullable=False),
    Column("url", String, nullable=False),
    Column("description", Text, nullable=True),
)

software_table = Table(
    "software",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("description", Text, nullable=False, default=""),
    Column("license", String, nullable=False, default=""),
    Column("logo_url", String, nullable=True),
    Column("keywords", StringTupleType, nullable=False),
    Column("categories", StringTupleType, nullable=False),
    Column("software_type", SoftwareTypeType, nullable=True),
    Column("custom_attributes", JSONDictType, nullable=False),
    Column("referenced_since", UTCDateTime, nullable=False),
    Column("updated_at", UTCDateTime, nullable=False),
    Column("dereferencing_reason", Text, nullable=True),
    Column("dereferenced_at", UTCDateTime, nullable=True),
    Column("last_recommended_version", String, nullable=True),
)

# One active software per name; dereferenced software may share it.
Index(
    "uq_software_active_name",
    software_table.c.name,
    unique=True,
    sqlite_where=software_table.c.dereferenced_at.is_(None),
    postgresql_where=software_table.c.dereferenced_at.is_(None),
)

external_record_table = Table(
    "external_record",
    mapper_registry.metadata,
    Column("source_slug", String, ForeignKey("source.slug"), primary_key=True),
    Column("external_id", String, primary_key=True),
    Column(
        "software_id",
        UUIDColumnType,
        ForeignKey("software.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    ),
    Column("label", Text, nullable=True),
    Column("description", Text, nullable=True),
    Column("is_libre_software", Boolean, nullable=True),
    Column("developers", DeveloperTupleType, nullable=False),
    Column("logo_url", String, nullable=True),
    Column("website_url", String, nullable=True),
    Column("source_url", String, nullable=True),
    Column("documentation_url", String, nullable=True),
    Column("license", String, nullable=True),
    Column("software_version", String, nullable=True),
    Column("publication_time", UTCDateTime, nullable=True),
    Column("keywords", StringTupleType, nullable=False),
    Column("application_categories", StringTupleType, nullable=False),
    Column("programming_languages", StringTupleType, nullable=False),
    Column("identifiers", IdentifierTupleType, nullable=False),
    Column("last_fetch_time", UTCDateTime, nullable=True),
)

similar_software_table = Table(
    "similar_software",
    mapper_registry.metadata,
    Column(
        "software_id",
        UUIDColumnType,
        ForeignKey("software.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("source_slug", String, primary_key=True),
    Column("external_id", String, primary_key=True),
    ForeignKeyConstraint(
        ["source_slug", "external_id"],
        ["external_record.source_slug", "external_record.external_id"],
        name="fk_similar_software_external_record",
        ondelete="CASCADE",
    ),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Source, source_table)
    mapper_registry.map_imperatively(Software, software_table)
    mapper_registry.map_imperatively(ExternalRecord, external_record_table)
    mapper_registry.map_imperatively(SimilarityLink, similar_software_table)

    orm.configure_mappers()
    return mapper_registry

