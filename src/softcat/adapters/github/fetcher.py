"""GitHub external record fetcher."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from softcat.adapters.provider_support import provider_errors, require_source_kind
from softcat.config.github import GITHUB_SOURCE_URL, get_github_config
from softcat.domain.errors import ConfigurationMismatchError
from softcat.domain.model import SourceKind

from .client import GitHubClient
from .translator import translate_repository

if TYPE_CHECKING:
    from softcat.config.github import GitHubConfig
    from softcat.domain.model import ExternalRecordData, Source

log = getLogger(__name__)


def parse_repository(external_id: str) -> tuple[str, str] | None:
    """Split ``owner/repo`` or a github.com URL into its parts."""

    value = external_id.strip()
    if value.startswith("git+"):
        value = value[4:]
    if "://" in value:
        parts = urlsplit(value)
        if parts.netloc.lower() not in {"github.com", "www.github.com"}:
            return None
        value = parts.path
    segments = [segment for segment in value.strip("/").split("/") if segment]
    if len(segments) < 2:
        return None
    owner, repo = segments[0], segments[1]
    repo = repo.removesuffix(".git")
    if not owner or not repo:
        return None
    return owner, repo


def check_github_source(source: Source) -> None:
    url = require_source_kind(source, SourceKind.GITHUB)
    if url != GITHUB_SOURCE_URL:
        raise ConfigurationMismatchError(
            f"GitHub source {source.slug!r} must use {GITHUB_SOURCE_URL}, got {source.url}"
        )


class GitHubFetcher:
    """Fetch one repository per external id (``owner/repo``)."""

    def __init__(
        self,
        *,
        config: GitHubConfig | None = None,
        client: GitHubClient | None = None,
    ) -> None:
        self._client = client or GitHubClient(config=config or get_github_config())

    async def __call__(self, external_id: str, source: Source) -> ExternalRecordData | None:
        check_github_source(source)
        parsed = parse_repository(external_id)
        if parsed is None:
            log.warning("%s:%s is not a GitHub repository reference", source.slug, external_id)
            return None
        with provider_errors(source, external_id):
            snapshot = await self._client.fetch_snapshot(*parsed)
        if snapshot is None:
            return None
        return translate_repository(snapshot)
