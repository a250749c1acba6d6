"""HAL search API response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

SOFTWARE_FIELDS: tuple[str, ...] = (
    "docid",
    "title_s",
    "abstract_s",
    "keyword_s",
    "softPlatform_s",
    "softProgrammingLanguage_s",
    "uri_s",
    "softCodeRepository_s",
    "releasedDate_tdate",
    "authFullName_s",
    "softVersion_s",
    "licence_s",
)


class HalBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class HalSoftware(HalBaseModel):
    docid: str
    title: list[str] = Field(default_factory=list, alias="title_s")
    abstract: list[str] = Field(default_factory=list, alias="abstract_s")
    keywords: list[str] = Field(default_factory=list, alias="keyword_s")
    platforms: list[str] = Field(default_factory=list, alias="softPlatform_s")
    programming_languages: list[str] = Field(
        default_factory=list, alias="softProgrammingLanguage_s"
    )
    uri: str | None = Field(default=None, alias="uri_s")
    code_repositories: list[str] = Field(default_factory=list, alias="softCodeRepository_s")
    released_at: datetime | None = Field(default=None, alias="releasedDate_tdate")
    authors: list[str] = Field(default_factory=list, alias="authFullName_s")
    versions: list[str] = Field(default_factory=list, alias="softVersion_s")
    licences: list[str] = Field(default_factory=list, alias="licence_s")

    @field_validator("docid", mode="before")
    @classmethod
    def _docid_as_text(cls, value: object) -> object:
        return str(value) if isinstance(value, int) else value


class HalSearchResponseBody(HalBaseModel):
    num_found: int = Field(default=0, alias="numFound")
    docs: list[HalSoftware] = Field(default_factory=list)


class HalSearchResponse(HalBaseModel):
    response: HalSearchResponseBody
