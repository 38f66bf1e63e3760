"""In-memory content store with the same filtering and keyset contract as the SQL one."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from app.db.content_store import ContentPatch, ContentStore, Window
from app.db.models.content import Content, ContentType
from app.services.query_builder import ContentFilter, ContentOrdering, SortDirection

_ATTRIBUTES = {"createdAt": "created_at"}


def _matches(content: Content, content_filter: ContentFilter) -> bool:
    if content_filter.category is not None and content.category != content_filter.category:
        return False
    if content_filter.type is not None and content.type != content_filter.type:
        return False
    if content_filter.title_contains is not None:
        if content_filter.title_contains.lower() not in content.title.lower():
            return False
    keyset = content_filter.keyset
    if keyset is not None:
        key = (content.created_at, content.id)
        bound = (keyset.created_at, keyset.id)
        if keyset.direction is SortDirection.DESC:
            return key < bound
        return key > bound
    return True


class InMemoryContentStore(ContentStore):
    """List-backed store used to exercise pagination without a database."""

    def __init__(self, contents: Iterable[Content] = ()) -> None:
        self.contents = list(contents)
        self.find_many_calls: list[tuple[ContentFilter, ContentOrdering, Window]] = []
        self.updates: list[tuple[int, ContentPatch]] = []

    async def count(self, content_filter: ContentFilter) -> int:
        return sum(1 for c in self.contents if _matches(c, content_filter))

    async def find_many(
        self, content_filter: ContentFilter, ordering: ContentOrdering, window: Window
    ) -> list[Content]:
        self.find_many_calls.append((content_filter, ordering, window))
        fields = [_ATTRIBUTES.get(field, field) for field, _ in ordering.keys()]
        rows = sorted(
            (c for c in self.contents if _matches(c, content_filter)),
            key=lambda c: tuple(getattr(c, f) for f in fields),
            reverse=ordering.direction is SortDirection.DESC,
        )
        return rows[window.offset : window.offset + window.limit]

    async def find_one(self, content_id: int) -> Content | None:
        return next((c for c in self.contents if c.id == content_id), None)

    async def update(self, content_id: int, patch: ContentPatch) -> Content | None:
        content = await self.find_one(content_id)
        if content is None:
            return None
        self.updates.append((content_id, patch))
        for field, value in patch.values().items():
            setattr(content, field, value)
        return content

    async def list_categories(self) -> list[str]:
        return list({c.category for c in self.contents if c.category})


def make_content(content_id: int, created_at: datetime, **overrides: Any) -> Content:
    values: dict[str, Any] = {
        "id": content_id,
        "type": ContentType.ARTICLE,
        "title": f"Item {content_id}",
        "category": "Knee",
        "thumbnail": None,
        "short": f"Summary {content_id}",
        "created_at": created_at,
        "difficulty": "Easy",
        "content": f"Body {content_id}",
    }
    values.update(overrides)
    return Content(**values)
