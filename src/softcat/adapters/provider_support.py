"""Checks and error translation shared by the provider fetchers."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from softcat.domain.errors import ConfigurationMismatchError, ProviderFetchError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from softcat.domain.model import Source, SourceKind


class ProviderPayloadError(RuntimeError):
    """A provider answered with a payload the adapter cannot use."""


def require_source_kind(source: Source, kind: SourceKind) -> str:
    """Reject ``source`` unless it is a well-formed source of ``kind``.

    Returns the normalized source URL.
    """

    if source.kind is not kind:
        raise ConfigurationMismatchError(
            f"Source {source.slug!r} is a {source.kind} source, not {kind}"
        )
    return source.normalized_url


@contextmanager
def provider_errors(source: Source, external_id: str) -> Iterator[None]:
    """Turn transport, HTTP and payload failures into ``ProviderFetchError``.

    ``ValueError`` covers bodies that are not JSON, such as HTML error pages
    served with a 200 status.
    """

    try:
        yield
    except (httpx.HTTPError, ValidationError, ProviderPayloadError, ValueError) as exc:
        raise ProviderFetchError(source.slug, external_id, str(exc) or type(exc).__name__) from exc
