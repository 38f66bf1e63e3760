"""Content store: the repository the catalog services query through."""

from __future__ import annotations

import logging
import operator
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement, Select, and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from app.core.errors import DomainError
from app.db.models.content import Content
from app.services.query_builder import ContentFilter, ContentOrdering, SortDirection

logger = logging.getLogger(__name__)


class ContentStoreError(DomainError):
    """The backing store failed; details are logged, never returned to clients."""

    expose = False

    def __init__(self, message: str = "Content store operation failed") -> None:
        super().__init__(message, "store_failure")


@dataclass(frozen=True)
class Window:
    limit: int
    offset: int = 0


@dataclass(frozen=True)
class ContentPatch:
    title: str | None = None
    content: str | None = None

    def values(self) -> dict[str, str]:
        return {key: value for key, value in vars(self).items() if value is not None}


class ContentStore(ABC):
    """Abstract content repository."""

    @abstractmethod
    async def count(self, content_filter: ContentFilter) -> int:
        raise NotImplementedError

    @abstractmethod
    async def find_many(
        self, content_filter: ContentFilter, ordering: ContentOrdering, window: Window
    ) -> list[Content]:
        raise NotImplementedError

    @abstractmethod
    async def find_one(self, content_id: int) -> Content | None:
        raise NotImplementedError

    @abstractmethod
    async def update(self, content_id: int, patch: ContentPatch) -> Content | None:
        """Apply ``patch`` unconditionally (last write wins). None when the id is unknown."""
        raise NotImplementedError

    @abstractmethod
    async def list_categories(self) -> list[str]:
        """Distinct non-empty category labels, unordered."""
        raise NotImplementedError


SORT_COLUMNS: dict[str, InstrumentedAttribute[Any]] = {
    "id": Content.id,
    "createdAt": Content.created_at,
    "title": Content.title,
    "category": Content.category,
    "difficulty": Content.difficulty,
}


def filter_clauses(content_filter: ContentFilter) -> list[ColumnElement[bool]]:
    clauses: list[ColumnElement[bool]] = []
    if content_filter.category is not None:
        clauses.append(Content.category == content_filter.category)
    if content_filter.type is not None:
        clauses.append(Content.type == content_filter.type)
    if content_filter.title_contains is not None:
        clauses.append(Content.title.icontains(content_filter.title_contains, autoescape=True))
    keyset = content_filter.keyset
    if keyset is not None:
        after = operator.lt if keyset.direction is SortDirection.DESC else operator.gt
        clauses.append(
            or_(
                after(Content.created_at, keyset.created_at),
                and_(Content.created_at == keyset.created_at, after(Content.id, keyset.id)),
            )
        )
    return clauses


def order_clauses(ordering: ContentOrdering) -> list[ColumnElement[Any]]:
    return [
        SORT_COLUMNS[field].desc() if direction is SortDirection.DESC else SORT_COLUMNS[field].asc()
        for field, direction in ordering.keys()
    ]


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Content store %s failed", operation)
        raise ContentStoreError() from exc


class SqlAlchemyContentStore(ContentStore):
    """Content store backed by an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def count(self, content_filter: ContentFilter) -> int:
        statement = select(func.count()).select_from(Content).where(*filter_clauses(content_filter))
        with _store_errors("count"):
            result = await self._session.execute(statement)
            return int(result.scalar_one())

    async def find_many(
        self, content_filter: ContentFilter, ordering: ContentOrdering, window: Window
    ) -> list[Content]:
        statement: Select[tuple[Content]] = (
            select(Content)
            .where(*filter_clauses(content_filter))
            .order_by(*order_clauses(ordering))
            .offset(window.offset)
            .limit(window.limit)
        )
        with _store_errors("find_many"):
            result = await self._session.execute(statement)
            return list(result.scalars().all())

    async def find_one(self, content_id: int) -> Content | None:
        with _store_errors("find_one"):
            return await self._session.get(Content, content_id)

    async def update(self, content_id: int, patch: ContentPatch) -> Content | None:
        with _store_errors("update"):
            content = await self._session.get(Content, content_id)
            if content is None:
                return None
            for field, value in patch.values().items():
                setattr(content, field, value)
            await self._session.flush()
            return content

    async def list_categories(self) -> list[str]:
        statement = (
            select(Content.category)
            .where(Content.category.is_not(None), Content.category != "")
            .distinct()
        )
        with _store_errors("list_categories"):
            result = await self._session.execute(statement)
            return list(result.scalars().all())
