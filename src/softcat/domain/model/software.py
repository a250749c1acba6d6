"""Canonical catalog entries."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID, uuid4

from softcat.domain.model.enums import OperatingSystem, SoftwareKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


def new_id() -> UUID:
    return uuid4()


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True, kw_only=True)
class SoftwareType:
    kind: SoftwareKind
    os: frozenset[OperatingSystem] = frozenset()

    def __post_init__(self) -> None:
        if self.os and self.kind is not SoftwareKind.DESKTOP_MOBILE:
            raise ValueError("Only desktop/mobile software declares operating systems")


_PLATFORM_KEYWORDS: dict[str, OperatingSystem] = {
    "windows": OperatingSystem.WINDOWS,
    "linux": OperatingSystem.LINUX,
    "unix": OperatingSystem.LINUX,
    "mac": OperatingSystem.MAC,
    "macos": OperatingSystem.MAC,
    "osx": OperatingSystem.MAC,
    "android": OperatingSystem.ANDROID,
    "ios": OperatingSystem.IOS,
}
_CLOUD_KEYWORDS = frozenset({"web", "saas", "cloud", "browser"})
_WORD = re.compile(r"[a-z0-9]+")


def classify_software_type(platforms: Iterable[str]) -> SoftwareType | None:
    """Map free-form provider platform names onto a ``SoftwareType``.

    Operating systems win over web hints; nothing recognised yields ``None``.
    """

    systems: set[OperatingSystem] = set()
    cloud = False
    for platform in platforms:
        words = set(_WORD.findall(platform.lower().replace("os x", "osx")))
        systems.update(_PLATFORM_KEYWORDS[word] for word in words & _PLATFORM_KEYWORDS.keys())
        if words & _CLOUD_KEYWORDS:
            cloud = True
    if systems:
        return SoftwareType(kind=SoftwareKind.DESKTOP_MOBILE, os=frozenset(systems))
    if cloud:
        return SoftwareType(kind=SoftwareKind.CLOUD)
    return None


@dataclass(frozen=True, slots=True, kw_only=True)
class Dereferencing:
    reason: str
    time: datetime
    last_recommended_version: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class SoftwareFields:
    """Intrinsic (user-maintained) fields of a software."""

    description: str = ""
    license: str = ""
    logo_url: str | None = None
    keywords: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    software_type: SoftwareType | None = None
    custom_attributes: Mapping[str, Any] = field(default_factory=dict[str, Any])


@dataclass(eq=False, kw_only=True)
class Software:
    """The one authoritative catalog record for a real-world package."""

    id: UUID = field(default_factory=new_id)
    name: str
    description: str = ""
    license: str = ""
    logo_url: str | None = None
    keywords: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    software_type: SoftwareType | None = None
    custom_attributes: dict[str, Any] = field(default_factory=dict[str, Any])
    referenced_since: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    dereferencing_reason: str | None = None
    dereferenced_at: datetime | None = None
    last_recommended_version: str | None = None

    @classmethod
    def create(cls, name: str, fields: SoftwareFields, *, at: datetime | None = None) -> Software:
        now = at or _utcnow()
        software = cls(name=name, referenced_since=now, updated_at=now)
        software._assign(fields)
        return software

    @property
    def is_dereferenced(self) -> bool:
        return self.dereferenced_at is not None

    @property
    def dereferencing(self) -> Dereferencing | None:
        if self.dereferenced_at is None:
            return None
        return Dereferencing(
            reason=self.dereferencing_reason or "",
            time=self.dereferenced_at,
            last_recommended_version=self.last_recommended_version,
        )

    def dereference(self, reason: str, *, at: datetime | None = None) -> None:
        """Soft-delete: hide from default listings, keep every link."""
        version_min = self.custom_attributes.get("versionMin")
        self.dereferencing_reason = reason
        self.dereferenced_at = at or _utcnow()
        self.last_recommended_version = str(version_min) if version_min is not None else None

    def update_from(self, name: str, fields: SoftwareFields, *, at: datetime | None = None) -> None:
        self.name = name
        self._assign(fields)
        self.dereferencing_reason = None
        self.dereferenced_at = None
        self.last_recommended_version = None
        self.updated_at = at or _utcnow()

    def _assign(self, fields: SoftwareFields) -> None:
        self.description = fields.description
        self.license = fields.license
        self.logo_url = fields.logo_url
        self.keywords = tuple(fields.keywords)
        self.categories = tuple(fields.categories)
        self.software_type = fields.software_type
        self.custom_attributes = dict(fields.custom_attributes)
