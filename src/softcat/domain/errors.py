"""Domain error taxonomy.

Not-found outcomes are never errors: resolvers and fetchers return ``None``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID


class CatalogError(RuntimeError):
    """Base class for catalog domain errors."""


class ConfigurationMismatchError(CatalogError):
    """A source definition does not fit the operation it is used for."""


class UnknownSourceError(ConfigurationMismatchError):
    """Raised when a source slug is not registered."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Source slug is unknown: {slug}")
        self.slug = slug


class SourceConflictError(CatalogError):
    """Raised when a registered source would be redefined."""


class StoreCorruptionError(CatalogError):
    """Stored records violate an identity invariant."""


class ProviderFetchError(CatalogError):
    """Transient provider failure (timeout, rate limit, 5xx, bad payload)."""

    def __init__(self, source_slug: str, external_id: str, message: str) -> None:
        super().__init__(f"{source_slug}:{external_id}: {message}")
        self.source_slug = source_slug
        self.external_id = external_id


class DuplicateSoftwareError(CatalogError):
    """Another active software already uses this name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"An active software named {name!r} already exists")
        self.name = name


class SoftwareNotFoundError(CatalogError):
    def __init__(self, software_id: UUID) -> None:
        super().__init__(f"Software {software_id} does not exist")
        self.software_id = software_id


class RecordLinkConflictError(CatalogError):
    """An external record is already linked to another software."""
