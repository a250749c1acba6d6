"""Builders and fakes for catalog tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from softcat.domain.errors import ProviderFetchError
from softcat.domain.model import ExternalRecord, ExternalRecordData, Source, SourceKind

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime
    from uuid import UUID


def make_source(
    slug: str = "wikidata",
    *,
    priority: int = 1,
    kind: SourceKind = SourceKind.WIKIDATA,
    url: str = "https://www.wikidata.org/",
) -> Source:
    return Source(slug=slug, priority=priority, kind=kind, url=url)


def make_record(
    source_slug: str = "wikidata",
    external_id: str = "Q1",
    *,
    software_id: UUID | None = None,
    last_fetch_time: datetime | None = None,
    **fields: object,
) -> ExternalRecord:
    record = ExternalRecord(
        source_slug=source_slug,
        external_id=external_id,
        software_id=software_id,
        last_fetch_time=last_fetch_time,
    )
    for name, value in fields.items():
        setattr(record, name, value)
    return record


@dataclass
class FakeFetcher:
    """In-memory fetcher answering from a mapping of external ids.

    Ids listed in ``failing`` raise a provider error; unknown ids are not found.
    """

    answers: Mapping[str, ExternalRecordData] = field(default_factory=dict)
    failing: frozenset[str] = frozenset()
    calls: list[tuple[str, str]] = field(default_factory=list)

    async def __call__(self, external_id: str, source: Source) -> ExternalRecordData | None:
        self.calls.append((source.slug, external_id))
        if external_id in self.failing:
            raise ProviderFetchError(source.slug, external_id, "503 Service Unavailable")
        return self.answers.get(external_id)
