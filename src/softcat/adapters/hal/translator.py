"""Translate HAL software notices into external record data."""

from __future__ import annotations

from typing import TYPE_CHECKING

from softcat.adapters.github.fetcher import parse_repository
from softcat.adapters.github.translator import repository_identifier
from softcat.config.hal import HAL_SOURCE_URL
from softcat.domain.model import Developer, DeveloperKind, ExternalRecordData, Identifier

if TYPE_CHECKING:
    from .schema import HalSoftware


def _first(values: list[str]) -> str | None:
    return values[0] if values else None


def translate_software(software: HalSoftware) -> ExternalRecordData:
    identifiers = [
        Identifier(
            value=software.docid,
            subject_url=HAL_SOURCE_URL,
            name=f"HAL document {software.docid}",
            url=software.uri,
        )
    ]
    for repository in software.code_repositories:
        parsed = parse_repository(repository)
        if parsed is not None:
            identifiers.append(repository_identifier("/".join(parsed)))
            break

    return ExternalRecordData(
        label=_first(software.title),
        description=_first(software.abstract),
        developers=tuple(
            Developer(name=name, kind=DeveloperKind.PERSON) for name in software.authors if name
        ),
        website_url=software.uri,
        source_url=_first(software.code_repositories),
        license=_first(software.licences),
        software_version=_first(software.versions),
        publication_time=software.released_at,
        keywords=tuple(software.keywords),
        application_categories=tuple(software.platforms),
        programming_languages=tuple(software.programming_languages),
        identifiers=tuple(identifiers),
    )
