"""Translate list request parameters into a storage-neutral filter and ordering.

Untrusted ``sort``/``order`` values never reach the store: anything outside the
allow-lists silently falls back to the defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Final

ALL: Final[str] = "all"

SORT_FIELDS: Final[tuple[str, ...]] = ("id", "createdAt", "title", "category", "difficulty")
DEFAULT_SORT_FIELD: Final[str] = "createdAt"
TIE_BREAKER_FIELD: Final[str] = "id"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


DEFAULT_SORT_DIRECTION: Final[SortDirection] = SortDirection.DESC


@dataclass(frozen=True)
class Keyset:
    """Rows strictly after ``(created_at, id)`` in ``direction`` order."""

    created_at: datetime
    id: int
    direction: SortDirection


@dataclass(frozen=True)
class ContentFilter:
    """Equality/substring constraints, ANDed together. ``None`` means unconstrained."""

    category: str | None = None
    type: str | None = None
    title_contains: str | None = None
    keyset: Keyset | None = None


@dataclass(frozen=True)
class ContentOrdering:
    field: str = DEFAULT_SORT_FIELD
    direction: SortDirection = DEFAULT_SORT_DIRECTION

    def keys(self) -> list[tuple[str, SortDirection]]:
        """Sort keys with the id tie-breaker appended in the same direction."""
        if self.field == TIE_BREAKER_FIELD:
            return [(TIE_BREAKER_FIELD, self.direction)]
        return [(self.field, self.direction), (TIE_BREAKER_FIELD, self.direction)]


def _exact_or_any(value: str | None) -> str | None:
    if value is None or value == "" or value == ALL:
        return None
    return value


def build_filter(
    category: str | None = None,
    content_type: str | None = None,
    q: str | None = None,
) -> ContentFilter:
    keyword = (q or "").strip()
    return ContentFilter(
        category=_exact_or_any(category),
        type=_exact_or_any(content_type),
        title_contains=keyword or None,
    )


def build_ordering(sort: str | None = None, order: str | None = None) -> ContentOrdering:
    field = sort if sort in SORT_FIELDS else DEFAULT_SORT_FIELD
    try:
        direction = SortDirection(order) if order is not None else DEFAULT_SORT_DIRECTION
    except ValueError:
        direction = DEFAULT_SORT_DIRECTION
    return ContentOrdering(field=field, direction=direction)
