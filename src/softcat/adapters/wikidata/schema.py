"""Wikidata entity JSON schemas (``Special:EntityData`` and ``wbgetentities``)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WikidataBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class WikidataText(WikidataBaseModel):
    language: str
    value: str


class WikidataDataValue(WikidataBaseModel):
    value: Any
    type: str


class WikidataSnak(WikidataBaseModel):
    snaktype: str
    property: str
    datavalue: WikidataDataValue | None = None


class WikidataStatement(WikidataBaseModel):
    mainsnak: WikidataSnak
    rank: str = "normal"


class WikidataEntity(WikidataBaseModel):
    id: str
    labels: dict[str, WikidataText] = Field(default_factory=dict)
    descriptions: dict[str, WikidataText] = Field(default_factory=dict)
    claims: dict[str, list[WikidataStatement]] = Field(default_factory=dict)


class WikidataEntityDocument(WikidataBaseModel):
    entities: dict[str, WikidataEntity]


class WikidataLabelledEntity(WikidataBaseModel):
    id: str
    labels: dict[str, WikidataText] = Field(default_factory=dict)


class WikidataLabelsResponse(WikidataBaseModel):
    entities: dict[str, WikidataLabelledEntity] = Field(default_factory=dict)


class WikidataSnapshot(BaseModel):
    """An entity plus the labels of the entities its claims reference."""

    entity: WikidataEntity
    labels: dict[str, dict[str, str]] = Field(default_factory=dict)
