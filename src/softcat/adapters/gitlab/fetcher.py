"""GitLab external record fetcher."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from softcat.adapters.http_resilience import ResilientClient
from softcat.adapters.provider_support import provider_errors, require_source_kind
from softcat.config.gitlab import get_gitlab_config
from softcat.domain.model import SourceKind

from .client import GitLabClient
from .translator import translate_project

if TYPE_CHECKING:
    from collections.abc import Callable

    from softcat.config.http_resilience import ResilienceConfig
    from softcat.domain.model import ExternalRecordData, Source

log = getLogger(__name__)


def project_reference(external_id: str, instance_url: str) -> str | None:
    """Numeric project id or ``namespace/project`` path for ``external_id``."""

    value = external_id.strip().removeprefix("git+")
    if value.isdigit():
        return value
    if "://" in value:
        parts = urlsplit(value)
        if parts.netloc.lower() != urlsplit(instance_url).netloc:
            return None
        value = parts.path
    value = value.split("/-/", 1)[0].strip("/").removesuffix(".git")
    if "/" not in value:
        return None
    return value


class GitLabFetcher:
    """Fetch GitLab projects from the instance the source points at."""

    def __init__(
        self,
        *,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._client_factory = client_factory or ResilientClient

    async def __call__(self, external_id: str, source: Source) -> ExternalRecordData | None:
        instance_url = require_source_kind(source, SourceKind.GITLAB)
        reference = project_reference(external_id, instance_url)
        if reference is None:
            log.warning("%s:%s is not a GitLab project reference", source.slug, external_id)
            return None
        client = GitLabClient(
            config=get_gitlab_config(instance_url=instance_url),
            client_factory=self._client_factory,
        )
        with provider_errors(source, external_id):
            snapshot = await client.fetch_snapshot(reference)
        if snapshot is None:
            return None
        return translate_project(snapshot, instance_url=instance_url)
