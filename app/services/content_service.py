"""Content catalog service - listing, detail, article edits and categories."""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import DomainError
from app.db.content_store import ContentPatch, ContentStore, SqlAlchemyContentStore
from app.db.models.content import BIGINT_MAX, BIGINT_MIN, Content
from app.services.pagination import (
    CursorPage,
    OffsetPage,
    PaginationMode,
    paginate_cursor,
    paginate_offset,
    parse_cursor,
    resolve_limit,
    resolve_mode,
    resolve_page,
)
from app.services.query_builder import build_filter, build_ordering

logger = logging.getLogger(__name__)


class ContentNotFoundError(DomainError):
    status_code = 404

    def __init__(self, content_id: int) -> None:
        super().__init__(f"Content {content_id} not found", "not_found")


class InvalidContentRequestError(DomainError):
    status_code = 400


@dataclass(frozen=True)
class ContentListQuery:
    """Raw list parameters as received; resolution and fallbacks happen in the service."""

    category: str | None = None
    type: str | None = None
    q: str | None = None
    mode: str | None = None
    limit: str | None = None
    sort: str | None = None
    order: str | None = None
    page: str | None = None
    cursor_id: str | None = None
    cursor_created_at: str | None = None


def category_sort_key(label: str) -> tuple[str, str]:
    """Collation key: accents and case are ignored first, then lowercase sorts first."""
    decomposed = unicodedata.normalize("NFKD", label)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), label.swapcase()


def parse_content_id(raw_id: str) -> int:
    try:
        return int(raw_id)
    except ValueError:
        raise InvalidContentRequestError("ID must be a number", "invalid_id") from None


class ContentService:
    """Catalog operations on top of a :class:`ContentStore`."""

    def __init__(self, store: ContentStore) -> None:
        self._store = store

    async def list_contents(self, query: ContentListQuery) -> OffsetPage | CursorPage:
        content_filter = build_filter(query.category, query.type, query.q)
        ordering = build_ordering(query.sort, query.order)
        limit = resolve_limit(query.limit)
        mode = resolve_mode(query.mode)
        logger.debug(
            "Listing contents: mode=%s filter=%s ordering=%s limit=%d",
            mode,
            content_filter,
            ordering,
            limit,
        )

        if mode is PaginationMode.CURSOR:
            cursor = parse_cursor(query.cursor_id, query.cursor_created_at)
            return await paginate_cursor(
                self._store, content_filter, ordering, cursor=cursor, limit=limit
            )
        return await paginate_offset(
            self._store, content_filter, ordering, page=resolve_page(query.page), limit=limit
        )

    async def get_content(self, content_id: int) -> Content:
        if not BIGINT_MIN <= content_id <= BIGINT_MAX:
            raise ContentNotFoundError(content_id)
        content = await self._store.find_one(content_id)
        if content is None:
            raise ContentNotFoundError(content_id)
        return content

    async def update_article(self, content_id: int, patch: ContentPatch) -> Content:
        """Update ``title``/``content`` of an article.

        Raises:
            ContentNotFoundError: If no record has this id.
            InvalidContentRequestError: If the record is not an article or the title is blank.
        """
        content = await self.get_content(content_id)
        if not content.is_article:
            raise InvalidContentRequestError("Only articles can be edited", "not_article")
        if patch.title is not None:
            title = patch.title.strip()
            if not title:
                raise InvalidContentRequestError("title must not be blank", "blank_title")
            patch = ContentPatch(title=title, content=patch.content)
        if not patch.values():
            return content

        updated = await self._store.update(content_id, patch)
        if updated is None:
            raise ContentNotFoundError(content_id)
        logger.info("Updated article %d fields=%s", content_id, sorted(patch.values()))
        return updated

    async def list_categories(self) -> list[str]:
        categories = await self._store.list_categories()
        return sorted({c for c in categories if c}, key=category_sort_key)


def content_service_factory_provider() -> Callable[[AsyncSession], ContentService]:
    """Registry entry building a session-scoped :class:`ContentService`."""

    def factory(session: AsyncSession) -> ContentService:
        return ContentService(SqlAlchemyContentStore(session))

    return factory
