"""Provider definitions."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit, urlunsplit

from softcat.domain.errors import ConfigurationMismatchError
from softcat.domain.model.enums import SourceKind


def normalize_source_url(url: str | None) -> str:
    """Return the canonical form of a provider base URL.

    Scheme and host are lower-cased and a bare host gets a trailing slash, so
    ``https://GitHub.com`` and ``https://github.com/`` compare equal.
    """

    if url is None or not url.strip():
        raise ConfigurationMismatchError("Source URL is missing")
    parts = urlsplit(url.strip())
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise ConfigurationMismatchError(f"Source URL is malformed: {url!r}")
    path = parts.path or "/"
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, parts.query, ""))


@dataclass(eq=False, kw_only=True)
class Source:
    """An external data origin. Never modified once referenced by a record."""

    slug: str
    priority: int
    kind: SourceKind
    url: str
    description: str | None = None

    @property
    def normalized_url(self) -> str:
        return normalize_source_url(self.url)

    def same_definition(self, other: Source) -> bool:
        return (self.slug, self.priority, self.kind, self.normalized_url, self.description) == (
            other.slug,
            other.priority,
            other.kind,
            other.normalized_url,
            other.description,
        )


def same_source_url(left: str | None, right: str | None) -> bool:
    """Compare two provider base URLs; malformed URLs never match."""

    try:
        return normalize_source_url(left) == normalize_source_url(right)
    except ConfigurationMismatchError:
        return False
