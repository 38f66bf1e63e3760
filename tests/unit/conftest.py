"""Unit-test fixtures backed by the in-memory content store."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime, timedelta

import pytest

from app.db.models.content import Content, ContentType
from tests.unit.fakes import InMemoryContentStore, make_content


@pytest.fixture
def content_factory() -> Callable[..., Content]:
    return make_content


@pytest.fixture
def store_factory() -> Callable[..., InMemoryContentStore]:
    def factory(contents: Iterable[Content] = ()) -> InMemoryContentStore:
        return InMemoryContentStore(contents)

    return factory


@pytest.fixture
def sample_store() -> InMemoryContentStore:
    """Five records dated 2025-01-01, -05, -10, -15, -20 with ids 1..5."""
    days = [1, 5, 10, 15, 20]
    return InMemoryContentStore(
        make_content(i, datetime(2025, 1, day, tzinfo=UTC), title=f"Title {chr(ord('F') - i)}")
        for i, day in enumerate(days, start=1)
    )


@pytest.fixture
def dense_store() -> InMemoryContentStore:
    """23 records where several share a timestamp, to exercise the id tie-breaker."""
    base = datetime(2025, 3, 1, tzinfo=UTC)
    contents = [
        make_content(
            i,
            base + timedelta(days=i // 3),
            type=ContentType.VIDEO if i % 4 == 0 else ContentType.ARTICLE,
            category="Ankle" if i % 2 else "Knee",
        )
        for i in range(1, 24)
    ]
    return InMemoryContentStore(contents)
