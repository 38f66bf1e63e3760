"""Offset and keyset (cursor) pagination over a content store.

Cursor mode always keys on ``(createdAt, id)`` in the requested direction, even
when the rows are displayed in ``title`` or ``category`` order.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Final

from app.core.errors import DomainError
from app.db.content_store import ContentStore, Window
from app.db.models.content import BIGINT_MAX, BIGINT_MIN, Content
from app.services.query_builder import ContentFilter, ContentOrdering, Keyset

logger = logging.getLogger(__name__)

DEFAULT_LIMIT: Final[int] = 10
MAX_LIMIT: Final[int] = 50
DEFAULT_PAGE: Final[int] = 1


class PaginationMode(StrEnum):
    OFFSET = "offset"
    CURSOR = "cursor"


class InvalidCursorError(DomainError):
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message, "invalid_cursor")


@dataclass(frozen=True)
class ContentCursor:
    id: int
    created_at: datetime


@dataclass(frozen=True)
class OffsetPage:
    page: int
    limit: int
    total: int
    rows: list[Content]


@dataclass(frozen=True)
class CursorPage:
    limit: int
    total: int
    rows: list[Content]
    has_next: bool
    next_cursor: ContentCursor | None


def _parse_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def resolve_limit(raw: str | None) -> int:
    """Missing, non-numeric, zero or negative limits use the default; large ones clamp."""
    value = _parse_int(raw)
    if value is None or value < 1:
        return DEFAULT_LIMIT
    return min(value, MAX_LIMIT)


def resolve_page(raw: str | None) -> int:
    value = _parse_int(raw)
    if value is None or value < 1:
        return DEFAULT_PAGE
    return value


def resolve_mode(raw: str | None) -> PaginationMode:
    if raw == PaginationMode.CURSOR:
        return PaginationMode.CURSOR
    return PaginationMode.OFFSET


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_cursor(raw_id: str | None, raw_created_at: str | None) -> ContentCursor | None:
    """Parse the ``cursorId``/``cursorCreatedAt`` pair.

    Returns None when neither is given. Anything else that is not a valid pair
    raises :class:`InvalidCursorError`; a bad cursor never restarts from page one.
    """
    if raw_id is None and raw_created_at is None:
        return None
    if raw_id is None or raw_created_at is None:
        raise InvalidCursorError("cursorId and cursorCreatedAt must be provided together")
    try:
        cursor_id = int(raw_id.strip())
    except ValueError:
        raise InvalidCursorError("cursorId must be an integer") from None
    if not BIGINT_MIN <= cursor_id <= BIGINT_MAX:
        raise InvalidCursorError("cursorId is out of range")
    try:
        created_at = datetime.fromisoformat(raw_created_at.strip())
    except ValueError:
        raise InvalidCursorError("cursorCreatedAt must be an ISO 8601 timestamp") from None
    return ContentCursor(id=cursor_id, created_at=as_utc(created_at))


def cursor_for(content: Content) -> ContentCursor:
    return ContentCursor(id=content.id, created_at=as_utc(content.created_at))


async def paginate_offset(
    store: ContentStore,
    content_filter: ContentFilter,
    ordering: ContentOrdering,
    *,
    page: int,
    limit: int,
) -> OffsetPage:
    total = await store.count(content_filter)
    offset = (page - 1) * limit
    if offset > BIGINT_MAX:
        return OffsetPage(page=page, limit=limit, total=total, rows=[])
    rows = await store.find_many(content_filter, ordering, Window(limit=limit, offset=offset))
    return OffsetPage(page=page, limit=limit, total=total, rows=rows)


async def paginate_cursor(
    store: ContentStore,
    content_filter: ContentFilter,
    ordering: ContentOrdering,
    *,
    cursor: ContentCursor | None,
    limit: int,
) -> CursorPage:
    total = await store.count(content_filter)

    windowed_filter = content_filter
    if cursor is not None:
        windowed_filter = dataclasses.replace(
            content_filter,
            keyset=Keyset(created_at=cursor.created_at, id=cursor.id, direction=ordering.direction),
        )

    # One extra row tells us whether another page exists.
    rows = await store.find_many(windowed_filter, ordering, Window(limit=limit + 1))
    has_next = len(rows) > limit
    rows = rows[:limit]
    next_cursor = cursor_for(rows[-1]) if has_next else None
    logger.debug(
        "Cursor page: after=%s returned=%d has_next=%s", cursor, len(rows), has_next
    )
    return CursorPage(
        limit=limit, total=total, rows=rows, has_next=has_next, next_cursor=next_cursor
    )
