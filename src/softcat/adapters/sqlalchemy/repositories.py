"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from sqlalchemy import Text, cast, select
from sqlalchemy.exc import IntegrityError

from softcat.adapters.sqlalchemy.mappings import (
    external_record_table,
    similar_software_table,
    software_table,
    source_table,
)
from softcat.domain.errors import DuplicateSoftwareError
from softcat.domain.model import ExternalRecord, SimilarityLink, Software, Source, same_source_url

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.orm import Session


class SqlAlchemySourceRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Source) -> None:
        self.session.add(entity)

    def get(self, slug: str) -> Source | None:
        return self.session.get(Source, slug)

    def list(self) -> list[Source]:
        stmt = select(Source).order_by(source_table.c.priority, source_table.c.slug)
        return list(self.session.execute(stmt).scalars())


class SqlAlchemySoftwareRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Software) -> None:
        self.session.add(entity)
        self.save(entity)

    def save(self, entity: Software) -> None:
        """Flush pending changes to ``entity`` so a taken name fails here, not at commit."""
        try:
            self.session.flush()
        except IntegrityError as exc:
            # The active-name index is the only constraint a software row can break.
            raise DuplicateSoftwareError(entity.name) from exc

    def get(self, software_id: UUID) -> Software | None:
        return self.session.get(Software, software_id)

    def find_active_by_name(self, name: str) -> Software | None:
        stmt = (
            select(Software)
            .where(software_table.c.name == name)
            .where(software_table.c.dereferenced_at.is_(None))
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def list(self, *, include_dereferenced: bool = False) -> list[Software]:
        stmt = select(Software).order_by(software_table.c.name, software_table.c.id)
        if not include_dereferenced:
            stmt = stmt.where(software_table.c.dereferenced_at.is_(None))
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyExternalRecordRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: ExternalRecord) -> None:
        self.session.add(entity)
        self.session.flush()

    def get(self, source_slug: str, external_id: str) -> ExternalRecord | None:
        return self.session.get(ExternalRecord, (source_slug, external_id))

    def list(self) -> list[ExternalRecord]:
        stmt = select(ExternalRecord).order_by(
            external_record_table.c.source_slug, external_record_table.c.external_id
        )
        return list(self.session.execute(stmt).scalars())

    def list_for_software(self, software_id: UUID) -> list[ExternalRecord]:
        stmt = (
            select(ExternalRecord)
            .where(external_record_table.c.software_id == software_id)
            .order_by(external_record_table.c.source_slug, external_record_table.c.external_id)
        )
        return list(self.session.execute(stmt).scalars())

    def find_by_identifier(
        self,
        *,
        subject_url: str,
        value: str,
        exclude_source_slug: str,
    ) -> list[ExternalRecord]:
        # Identifiers are stored as JSON text: prefilter on the encoded value, match exactly below.
        encoded = json.dumps(value, ensure_ascii=False)[1:-1]
        stmt = (
            select(ExternalRecord)
            .where(external_record_table.c.software_id.is_not(None))
            .where(external_record_table.c.source_slug != exclude_source_slug)
            .where(
                cast(external_record_table.c.identifiers, Text).contains(encoded, autoescape=True)
            )
        )
        return [
            record
            for record in self.session.execute(stmt).scalars()
            if any(
                identifier.value == value and same_source_url(identifier.subject_url, subject_url)
                for identifier in record.identifiers
            )
        ]


class SqlAlchemySimilarityRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: SimilarityLink) -> None:
        self.session.add(entity)

    def list_for_software(self, software_id: UUID) -> list[SimilarityLink]:
        stmt = (
            select(SimilarityLink)
            .where(similar_software_table.c.software_id == software_id)
            .order_by(similar_software_table.c.source_slug, similar_software_table.c.external_id)
        )
        return list(self.session.execute(stmt).scalars())

    def delete_for_software(self, software_id: UUID) -> None:
        for link in self.list_for_software(software_id):
            self.session.delete(link)
        self.session.flush()
