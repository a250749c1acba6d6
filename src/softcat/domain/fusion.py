"""Priority-ordered fusion of the records linked to one software.

The merge is explicit and field by field:

- scalar fields: the value of the highest-precedence record that has one wins;
  ``None`` and blank strings never erase a value from a lower-precedence record
- list fields: union of every record's values, highest precedence first,
  duplicates removed

Routing fields of the sources (slug, priority, kind, url) only drive the
ordering and never appear in the result.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from softcat.domain.model import Developer, ExternalRecordData, Identifier

if TYPE_CHECKING:
    from collections.abc import Sequence

    from softcat.domain.model import ExternalRecord, Source

# Priority 1 beats priority 10.
LOWER_PRIORITY_VALUE_WINS: Final = True


def precedence_key(source: Source) -> tuple[int, str]:
    """Sort key placing the highest-precedence source first.

    The slug breaks ties so equal priorities still give a stable order.
    """

    rank = source.priority if LOWER_PRIORITY_VALUE_WINS else -source.priority
    return rank, source.slug


@dataclass(frozen=True, slots=True)
class PrioritizedRecord:
    record: ExternalRecord
    source: Source


@dataclass(frozen=True, slots=True, kw_only=True)
class FusedExternalData(ExternalRecordData):
    """Canonical projection of all external records of one software."""


SCALAR_FIELDS: Final[tuple[str, ...]] = (
    "label",
    "description",
    "is_libre_software",
    "logo_url",
    "website_url",
    "source_url",
    "documentation_url",
    "license",
    "software_version",
    "publication_time",
)


def _developer_key(developer: Developer) -> Hashable:
    return developer.name.strip().casefold()


def _identifier_key(identifier: Identifier) -> Hashable:
    return identifier.subject_url, identifier.value


def _text_key(value: str) -> Hashable:
    return value


LIST_FIELDS: Final[dict[str, Callable[[Any], Hashable]]] = {
    "developers": _developer_key,
    "keywords": _text_key,
    "application_categories": _text_key,
    "programming_languages": _text_key,
    "identifiers": _identifier_key,
}


def _is_present(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def _merge_scalar(name: str, ordered: Sequence[ExternalRecord]) -> Any:
    # ``ordered`` runs from lowest to highest precedence: the last present value wins.
    value: Any = None
    for record in ordered:
        candidate = getattr(record, name)
        if _is_present(candidate):
            value = candidate
    if value is None:
        return getattr(ordered[-1], name)
    return value


def _merge_list[T](values: Iterable[Iterable[T]], key: Callable[[T], Hashable]) -> tuple[T, ...]:
    seen: set[Hashable] = set()
    merged: list[T] = []
    for items in values:
        for item in items:
            marker = key(item)
            if marker in seen:
                continue
            seen.add(marker)
            merged.append(item)
    return tuple(merged)


def fuse(records: Sequence[PrioritizedRecord]) -> FusedExternalData | None:
    """Merge ``records`` into one projection; ``None`` when there is nothing to merge."""

    if not records:
        return None

    ordered = [
        item.record
        for item in sorted(records, key=lambda item: precedence_key(item.source), reverse=True)
    ]
    fused: dict[str, Any] = {name: _merge_scalar(name, ordered) for name in SCALAR_FIELDS}
    for name, key in LIST_FIELDS.items():
        fused[name] = _merge_list((getattr(record, name) for record in reversed(ordered)), key)
    return FusedExternalData(**fused)


__all__ = [
    "LOWER_PRIORITY_VALUE_WINS",
    "FusedExternalData",
    "PrioritizedRecord",
    "fuse",
    "precedence_key",
]
