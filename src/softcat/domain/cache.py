"""Explicit, invalidatable cache for software projections."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from uuid import UUID


class MonotonicClock(Protocol):
    def __call__(self) -> float: ...


@dataclass(slots=True)
class _Entry[T]:
    value: T
    expires_at: float


@dataclass
class ProjectionCache[T]:
    """Per-software cache with a time-to-live.

    Writers must call ``invalidate`` for every software they touch; readers
    fall back to recomputing on a miss.
    """

    ttl_seconds: float = 300.0
    clock: MonotonicClock = time.monotonic
    _entries: dict[UUID, _Entry[T]] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.ttl_seconds < 0:
            raise ValueError("Cache time-to-live must be non-negative")

    def get(self, software_id: UUID) -> T | None:
        entry = self._entries.get(software_id)
        if entry is None:
            return None
        if entry.expires_at <= self.clock():
            del self._entries[software_id]
            return None
        return entry.value

    def put(self, software_id: UUID, value: T) -> None:
        if self.ttl_seconds == 0:
            return
        self._entries[software_id] = _Entry(value=value, expires_at=self.clock() + self.ttl_seconds)

    def invalidate(self, *software_ids: UUID | None) -> None:
        for software_id in software_ids:
            if software_id is not None:
                self._entries.pop(software_id, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
