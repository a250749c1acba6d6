"""Translate Wikidata entities into external record data."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final
from urllib.parse import quote

from softcat.adapters.github.fetcher import parse_repository
from softcat.adapters.github.translator import repository_identifier
from softcat.config.wikidata import COMMONS_FILE_URL, WIKIDATA_SOURCE_URL
from softcat.domain.model import Developer, DeveloperKind, ExternalRecordData, Identifier

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .schema import WikidataEntity, WikidataStatement, WikidataText

P_INSTANCE_OF: Final = "P31"
P_LOGO: Final = "P154"
P_DEVELOPER: Final = "P178"
P_LICENSE: Final = "P275"
P_PROGRAMMING_LANGUAGE: Final = "P277"
P_OPERATING_SYSTEM: Final = "P306"
P_SOFTWARE_VERSION: Final = "P348"
P_PUBLICATION_DATE: Final = "P577"
P_WEBSITE: Final = "P856"
P_SOURCE_REPOSITORY: Final = "P1324"
P_USER_MANUAL: Final = "P2078"

# free software, free and open-source software, open-source software
LIBRE_CLASSES: Final = frozenset({"Q341", "Q506883", "Q1130645"})


def _pick_text(texts: Mapping[str, WikidataText], languages: Sequence[str]) -> str | None:
    for language in languages:
        text = texts.get(language)
        if text is not None and text.value:
            return text.value
    return None


def _pick_label(labels: Mapping[str, str], languages: Sequence[str]) -> str | None:
    for language in languages:
        if labels.get(language):
            return labels[language]
    return next(iter(labels.values()), None)


def _ranked(statements: Sequence[WikidataStatement]) -> list[WikidataStatement]:
    usable = [statement for statement in statements if statement.rank != "deprecated"]
    preferred = [statement for statement in usable if statement.rank == "preferred"]
    return preferred or usable


def _values(entity: WikidataEntity, prop: str) -> list[object]:
    values: list[object] = []
    for statement in _ranked(entity.claims.get(prop, [])):
        datavalue = statement.mainsnak.datavalue
        if statement.mainsnak.snaktype == "value" and datavalue is not None:
            values.append(datavalue.value)
    return values


def _strings(entity: WikidataEntity, prop: str) -> list[str]:
    return [value for value in _values(entity, prop) if isinstance(value, str)]


def _entity_ids(entity: WikidataEntity, prop: str) -> list[str]:
    ids: list[str] = []
    for value in _values(entity, prop):
        if isinstance(value, dict) and isinstance(value.get("id"), str):
            ids.append(value["id"])
    return ids


def _first_string(entity: WikidataEntity, prop: str) -> str | None:
    values = _strings(entity, prop)
    return values[0] if values else None


def parse_wikidata_time(value: object) -> datetime | None:
    """Parse ``+2016-07-22T00:00:00Z``; unknown month/day parts become 1."""

    if not isinstance(value, dict):
        return None
    raw = value.get("time")
    if not isinstance(raw, str) or not raw.startswith("+"):
        return None
    date_part, _, _ = raw[1:].partition("T")
    pieces = date_part.split("-")
    if len(pieces) != 3:
        return None
    try:
        year, month, day = (int(piece) for piece in pieces)
        return datetime(year, month or 1, day or 1, tzinfo=UTC)
    except ValueError:
        return None


def _logo_url(entity: WikidataEntity) -> str | None:
    filename = _first_string(entity, P_LOGO)
    if filename is None:
        return None
    return f"{COMMONS_FILE_URL}{quote(filename.replace(' ', '_'))}"


def _identifiers(entity: WikidataEntity, repositories: Sequence[str]) -> tuple[Identifier, ...]:
    identifiers = [
        Identifier(
            value=entity.id,
            subject_url=WIKIDATA_SOURCE_URL,
            name=f"Wikidata item {entity.id}",
            url=f"{WIKIDATA_SOURCE_URL}wiki/{entity.id}",
        )
    ]
    for repository in repositories:
        parsed = parse_repository(repository)
        if parsed is not None:
            # One identifier per provider: the first GitHub repository wins.
            identifiers.append(repository_identifier("/".join(parsed)))
            break
    return tuple(identifiers)


def translate_entity(
    entity: WikidataEntity,
    *,
    labels: Mapping[str, Mapping[str, str]],
    languages: Sequence[str],
) -> ExternalRecordData:
    def label_of(entity_id: str) -> str | None:
        return _pick_label(labels.get(entity_id, {}), languages)

    repositories = _strings(entity, P_SOURCE_REPOSITORY)
    versions = _strings(entity, P_SOFTWARE_VERSION)
    published = [parse_wikidata_time(value) for value in _values(entity, P_PUBLICATION_DATE)]
    licenses = [name for name in map(label_of, _entity_ids(entity, P_LICENSE)) if name]
    developers = tuple(
        Developer(
            name=name,
            kind=DeveloperKind.ORGANIZATION,
            url=f"{WIKIDATA_SOURCE_URL}wiki/{developer_id}",
            identifiers=(Identifier(value=developer_id, subject_url=WIKIDATA_SOURCE_URL),),
        )
        for developer_id in _entity_ids(entity, P_DEVELOPER)
        if (name := label_of(developer_id))
    )
    libre = bool(LIBRE_CLASSES.intersection(_entity_ids(entity, P_INSTANCE_OF)))

    return ExternalRecordData(
        label=_pick_text(entity.labels, languages),
        description=_pick_text(entity.descriptions, languages),
        is_libre_software=True if libre else None,
        developers=developers,
        logo_url=_logo_url(entity),
        website_url=_first_string(entity, P_WEBSITE),
        source_url=repositories[0] if repositories else None,
        documentation_url=_first_string(entity, P_USER_MANUAL),
        license=licenses[0] if licenses else None,
        software_version=versions[-1] if versions else None,
        publication_time=max((item for item in published if item), default=None),
        application_categories=tuple(
            name for name in map(label_of, _entity_ids(entity, P_OPERATING_SYSTEM)) if name
        ),
        programming_languages=tuple(
            name for name in map(label_of, _entity_ids(entity, P_PROGRAMMING_LANGUAGE)) if name
        ),
        identifiers=_identifiers(entity, repositories),
    )
