"""Ports for fetching provider records."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from softcat.domain.model import ExternalRecordData, Source


@runtime_checkable
class ExternalRecordFetcher(Protocol):
    """Fetch one record by external id from the provider described by ``source``.

    Returns ``None`` when the provider affirmatively has no such record and
    raises ``ProviderFetchError`` on transient failures.
    """

    async def __call__(self, external_id: str, source: Source) -> ExternalRecordData | None: ...


type FetcherFactory = Callable[[Source], ExternalRecordFetcher]


__all__ = ["ExternalRecordFetcher", "FetcherFactory"]
