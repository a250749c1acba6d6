"""GitHub REST API client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from softcat.adapters.http_resilience import ResilientClient
from softcat.adapters.provider_support import ProviderPayloadError

from .schema import GitHubRelease, GitHubRepository, GitHubRepositorySnapshot

if TYPE_CHECKING:
    from collections.abc import Callable

    from softcat.config.github import GitHubConfig
    from softcat.config.http_resilience import ResilienceConfig

log = getLogger(__name__)


class GitHubAPIError(ProviderPayloadError):
    """Raised when the GitHub API returns an unexpected response."""


class GitHubClient:
    """Low-level HTTP client for the GitHub REST API."""

    def __init__(
        self,
        *,
        config: GitHubConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    async def fetch_snapshot(self, owner: str, repo: str) -> GitHubRepositorySnapshot | None:
        """Repository, languages and latest release; ``None`` when the repository is unknown."""

        base = f"repos/{owner}/{repo}"
        async with self._client_factory(self._resilience) as client:
            payload = await self._get_json(client, base)
            if payload is None:
                return None
            repository = GitHubRepository.model_validate(payload)
            languages = await self._get_json(client, f"{base}/languages")
            release_payload = await self._get_json(client, f"{base}/releases/latest")

        return GitHubRepositorySnapshot(
            repository=repository,
            languages=languages or {},
            latest_release=(
                GitHubRelease.model_validate(release_payload) if release_payload else None
            ),
        )

    async def _get_json(self, client: ResilientClient, path: str) -> dict[str, object] | None:
        response = await client.get(path)
        if response.status_code == 404:
            log.debug("GitHub %s not found", path)
            return None
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict):
            raise GitHubAPIError(f"Unexpected GitHub response payload for {path}")
        return payload
