"""GitHub REST API response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GitHubBaseModel(BaseModel):
    # GitHub payloads are large; only the fields below are used.
    model_config = ConfigDict(extra="ignore")


class GitHubLicense(GitHubBaseModel):
    key: str | None = None
    name: str | None = None
    spdx_id: str | None = None


class GitHubOwner(GitHubBaseModel):
    id: int
    login: str
    type: str | None = None
    html_url: str | None = None


class GitHubRepository(GitHubBaseModel):
    id: int
    name: str
    full_name: str
    html_url: str
    description: str | None = None
    homepage: str | None = None
    topics: list[str] = Field(default_factory=list)
    license: GitHubLicense | None = None
    owner: GitHubOwner
    archived: bool = False
    fork: bool = False


class GitHubRelease(GitHubBaseModel):
    tag_name: str
    name: str | None = None
    published_at: datetime | None = None


class GitHubRepositorySnapshot(BaseModel):
    """Everything fetched for one repository."""

    repository: GitHubRepository
    languages: dict[str, int] = Field(default_factory=dict)
    latest_release: GitHubRelease | None = None
