"""Fetcher dispatch over the provider kinds."""

from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from softcat.adapters.github import GitHubFetcher, check_github_source
from softcat.adapters.gitlab import GitLabFetcher
from softcat.adapters.hal import HalFetcher
from softcat.adapters.provider_support import require_source_kind
from softcat.adapters.wikidata import WikidataFetcher
from softcat.domain.model import SourceKind

if TYPE_CHECKING:
    from softcat.domain.model import Source
    from softcat.domain.ports import ExternalRecordFetcher


def build_fetcher(source: Source) -> ExternalRecordFetcher:
    """Return the fetcher for ``source``.

    Malformed source URLs and mismatching definitions raise here, before any
    request is sent.
    """

    require_source_kind(source, source.kind)
    match source.kind:
        case SourceKind.GITHUB:
            check_github_source(source)
            return GitHubFetcher()
        case SourceKind.GITLAB:
            return GitLabFetcher()
        case SourceKind.WIKIDATA:
            return WikidataFetcher()
        case SourceKind.HAL:
            return HalFetcher()
        case _:
            assert_never(source.kind)


__all__ = ["build_fetcher"]
