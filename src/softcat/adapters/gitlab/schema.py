"""GitLab REST API (v4) response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GitLabBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class GitLabLicense(GitLabBaseModel):
    key: str | None = None
    name: str | None = None
    nickname: str | None = None


class GitLabNamespace(GitLabBaseModel):
    id: int
    name: str
    path: str | None = None
    kind: str | None = None
    web_url: str | None = None


class GitLabProject(GitLabBaseModel):
    id: int
    name: str
    path_with_namespace: str
    web_url: str
    description: str | None = None
    readme_url: str | None = None
    avatar_url: str | None = None
    topics: list[str] = Field(default_factory=list)
    tag_list: list[str] = Field(default_factory=list)
    license: GitLabLicense | None = None
    namespace: GitLabNamespace | None = None


class GitLabRelease(GitLabBaseModel):
    tag_name: str
    name: str | None = None
    released_at: datetime | None = None


class GitLabProjectSnapshot(BaseModel):
    project: GitLabProject
    languages: dict[str, float] = Field(default_factory=dict)
    latest_release: GitLabRelease | None = None
