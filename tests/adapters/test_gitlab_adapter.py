from __future__ import annotations

import asyncio

import httpx
import pytest

from softcat.adapters.gitlab import GitLabFetcher, project_reference
from softcat.domain.errors import ConfigurationMismatchError, ProviderFetchError
from softcat.domain.model import DeveloperKind, SourceKind
from tests.helpers.catalog import make_source
from tests.helpers.http import make_client_factory

GITLAB = make_source("gitlab", priority=15, kind=SourceKind.GITLAB, url="https://gitlab.com/")

PROJECT = {
    "id": 250833,
    "name": "GitLab Runner",
    "path_with_namespace": "gitlab-org/gitlab-runner",
    "web_url": "https://gitlab.com/gitlab-org/gitlab-runner",
    "description": "GitLab Runner executes CI/CD jobs.",
    "readme_url": "https://gitlab.com/gitlab-org/gitlab-runner/-/blob/main/README.md",
    "avatar_url": "https://gitlab.com/uploads/-/system/project/avatar/250833/runner.png",
    "topics": ["ci", "runner"],
    "license": {"key": "mit", "name": "MIT License", "nickname": None},
    "namespace": {
        "id": 9970,
        "name": "GitLab.org",
        "path": "gitlab-org",
        "kind": "group",
        "web_url": "https://gitlab.com/groups/gitlab-org",
    },
}


def _handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path.endswith("/languages"):
        return httpx.Response(200, json={"Shell": 1.5, "Go": 97.2})
    if path.endswith("/releases"):
        return httpx.Response(
            200, json=[{"tag_name": "v17.5.0", "released_at": "2024-10-17T09:00:00Z"}]
        )
    if "gitlab-runner" in path or path.endswith("/250833"):
        return httpx.Response(200, json=PROJECT)
    return httpx.Response(404, json={"message": "404 Project Not Found"})


@pytest.mark.parametrize(
    ("external_id", "expected"),
    [
        ("250833", "250833"),
        ("gitlab-org/gitlab-runner", "gitlab-org/gitlab-runner"),
        ("https://gitlab.com/gitlab-org/gitlab-runner/-/tree/main", "gitlab-org/gitlab-runner"),
        ("https://gitlab.com/gitlab-org/gitlab-runner.git", "gitlab-org/gitlab-runner"),
        ("https://github.com/gitlab-org/gitlab-runner", None),
        ("gitlab-runner", None),
    ],
)
def test_project_reference(external_id: str, expected: str | None) -> None:
    assert project_reference(external_id, "https://gitlab.com/") == expected


def test_fetch_translates_project() -> None:
    requests: list[httpx.Request] = []
    fetcher = GitLabFetcher(client_factory=make_client_factory(_handler, requests=requests))

    data = asyncio.run(fetcher("gitlab-org/gitlab-runner", GITLAB))

    assert data is not None
    assert requests[0].url.host == "gitlab.com"
    assert requests[0].url.path.startswith("/api/v4/projects/")
    assert requests[0].url.params["license"] == "true"
    assert data.label == "GitLab Runner"
    assert data.license == "MIT License"
    assert data.is_libre_software is True
    assert data.documentation_url == PROJECT["readme_url"]
    assert data.logo_url == PROJECT["avatar_url"]
    assert data.software_version == "v17.5.0"
    assert data.programming_languages == ("Go", "Shell")
    assert data.keywords == ("ci", "runner")
    (namespace,) = data.developers
    assert namespace.kind is DeveloperKind.ORGANIZATION
    (identifier,) = data.identifiers
    assert identifier.value == "gitlab-org/gitlab-runner"
    assert identifier.subject_url == "https://gitlab.com/"


def test_fetch_uses_self_hosted_instance() -> None:
    requests: list[httpx.Request] = []
    source = make_source(
        "framagit", priority=30, kind=SourceKind.GITLAB, url="https://framagit.org"
    )
    fetcher = GitLabFetcher(client_factory=make_client_factory(_handler, requests=requests))

    data = asyncio.run(fetcher("250833", source))

    assert data is not None
    assert {request.url.host for request in requests} == {"framagit.org"}
    assert data.identifiers[0].subject_url == "https://framagit.org/"


def test_fetch_unknown_project_returns_none() -> None:
    fetcher = GitLabFetcher(client_factory=make_client_factory(_handler))

    assert asyncio.run(fetcher("gitlab-org/missing", GITLAB)) is None


def test_server_errors_become_provider_fetch_errors() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    fetcher = GitLabFetcher(client_factory=make_client_factory(handler))

    with pytest.raises(ProviderFetchError):
        asyncio.run(fetcher("gitlab-org/gitlab-runner", GITLAB))


def test_fetch_rejects_other_source_kinds() -> None:
    fetcher = GitLabFetcher(client_factory=make_client_factory(_handler))

    with pytest.raises(ConfigurationMismatchError):
        asyncio.run(fetcher("gitlab-org/gitlab-runner", make_source("wikidata")))
