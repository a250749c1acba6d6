"""Registry of the providers records can originate from."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from softcat.domain.errors import SourceConflictError, UnknownSourceError
from softcat.domain.fusion import precedence_key
from softcat.domain.model import normalize_source_url

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from softcat.domain.model import Source
    from softcat.domain.ports import CatalogUnitOfWork

log = logging.getLogger(__name__)


class SourceRegistry:
    """Read-only view over the registered sources."""

    def __init__(self, sources: Iterable[Source]) -> None:
        self._by_slug: dict[str, Source] = {}
        for source in sources:
            if source.slug in self._by_slug:
                raise SourceConflictError(f"Source slug registered twice: {source.slug}")
            self._by_slug[source.slug] = source

    @classmethod
    def load(cls, unit_of_work: CatalogUnitOfWork) -> SourceRegistry:
        return cls(unit_of_work.repositories.sources.list())

    def get(self, slug: str) -> Source:
        source = self._by_slug.get(slug)
        if source is None:
            raise UnknownSourceError(slug)
        return source

    def find(self, slug: str) -> Source | None:
        return self._by_slug.get(slug)

    def by_normalized_url(self, url: str) -> list[Source]:
        target = normalize_source_url(url)
        return [source for source in self.ordered() if source.normalized_url == target]

    def ordered(self) -> list[Source]:
        """Sources sorted from highest to lowest precedence."""
        return sorted(self._by_slug.values(), key=precedence_key)

    def main_source(self) -> Source:
        ordered = self.ordered()
        if not ordered:
            raise UnknownSourceError("<main>")
        return ordered[0]

    def __iter__(self) -> Iterator[Source]:
        return iter(self.ordered())

    def __len__(self) -> int:
        return len(self._by_slug)

    def __contains__(self, slug: object) -> bool:
        return slug in self._by_slug


def register_source(source: Source, *, unit_of_work: CatalogUnitOfWork) -> bool:
    """Store ``source``; return ``False`` when an identical source already exists."""

    normalize_source_url(source.url)
    with unit_of_work:
        repository = unit_of_work.repositories.sources
        existing = repository.get(source.slug)
        if existing is not None:
            if not existing.same_definition(source):
                raise SourceConflictError(
                    f"Source {source.slug!r} is already registered with a different definition"
                )
            log.info("Source %s already registered", source.slug)
            return False
        repository.add(source)
        unit_of_work.commit()
    log.info("Registered source %s (%s, priority %s)", source.slug, source.kind, source.priority)
    return True
