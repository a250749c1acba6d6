"""GitLab REST API client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from softcat.adapters.http_resilience import ResilientClient
from softcat.adapters.provider_support import ProviderPayloadError

from .schema import GitLabProject, GitLabProjectSnapshot, GitLabRelease

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from softcat.config.gitlab import GitLabConfig
    from softcat.config.http_resilience import ResilienceConfig

log = getLogger(__name__)


class GitLabAPIError(ProviderPayloadError):
    """Raised when the GitLab API returns an unexpected response."""


class GitLabClient:
    """Low-level HTTP client for one GitLab instance."""

    def __init__(
        self,
        *,
        config: GitLabConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    async def fetch_snapshot(self, project_ref: str) -> GitLabProjectSnapshot | None:
        """Project, languages and latest release for a numeric id or a namespace path."""

        path = f"projects/{quote(project_ref, safe='')}"
        async with self._client_factory(self._resilience) as client:
            response = await client.get(path, params={"license": "true"})
            payload = self._json(response, path)
            if payload is None:
                return None
            if not isinstance(payload, dict):
                raise GitLabAPIError(f"Unexpected GitLab response payload for {path}")
            project = GitLabProject.model_validate(payload)

            base = f"projects/{project.id}"
            languages = self._json(await client.get(f"{base}/languages"), f"{base}/languages")
            releases = self._json(
                await client.get(f"{base}/releases", params={"per_page": "1"}),
                f"{base}/releases",
            )

        latest: GitLabRelease | None = None
        if isinstance(releases, list) and releases:
            latest = GitLabRelease.model_validate(releases[0])
        return GitLabProjectSnapshot(
            project=project,
            languages=languages if isinstance(languages, dict) else {},
            latest_release=latest,
        )

    @staticmethod
    def _json(response: httpx.Response, path: str) -> Any:
        if response.status_code == 404:
            log.debug("GitLab %s not found", path)
            return None
        response.raise_for_status()
        return response.json()
