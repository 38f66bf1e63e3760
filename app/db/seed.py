"""Seed and fixture tooling for the content catalog.

Usage:
    rehab-catalog-seed init-db
    rehab-catalog-seed seed
    rehab-catalog-seed add-dummy --count 20
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from datetime import UTC, datetime, timedelta
from typing import Any, TypeVar

import typer
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import Base
from app.db.models.content import Content, ContentType
from app.db.session import get_engine, get_session_maker

T = TypeVar("T")

app = typer.Typer(name="rehab-catalog-seed", help="Content catalog seed tooling")

DUMMY_CATEGORIES = ("Knee", "Shoulder", "Lower back", "Ankle", "Full body")
DUMMY_DIFFICULTIES = ("Easy", "Medium", "Hard")


def _utc(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=UTC)


def sample_contents() -> list[Content]:
    """The five reference records, dated 2025-01-01 to 2025-01-20."""
    return [
        Content(
            type=ContentType.ARTICLE,
            title="Knee Stretching Basics",
            category="Knee",
            thumbnail="/images/knee-1.jpg",
            short="Gentle stretches for tight knees, suited to desk workers and beginners.",
            created_at=_utc(2025, 1, 1),
            difficulty="Easy",
            content=(
                "An introductory article on the basics of knee stretching.\n"
                "Add the real rehab steps and precautions here."
            ),
        ),
        Content(
            type=ContentType.VIDEO,
            title="Five-Minute Neck and Shoulder Relief",
            category="Shoulder",
            thumbnail="/images/shoulder-1.jpg",
            short="Quick neck and shoulder release for office workers.",
            created_at=_utc(2025, 1, 5),
            difficulty="Easy",
            video_url="https://example.com/shoulder-video-1",
            description="A sample video for relaxing the neck and shoulders.",
        ),
        Content(
            type=ContentType.ARTICLE,
            title="Activating the Lower Back Core",
            category="Lower back",
            thumbnail="/images/lowback-1.jpg",
            short="Simple movements that switch on the core and unload the lower back.",
            created_at=_utc(2025, 1, 10),
            difficulty="Medium",
            content="A sample article on activating the core to support the lower back.",
        ),
        Content(
            type=ContentType.VIDEO,
            title="Improving Ankle Mobility",
            category="Ankle",
            thumbnail="/images/ankle-1.jpg",
            short="Loosen stiff ankles for steadier walking and training.",
            created_at=_utc(2025, 1, 15),
            difficulty="Easy",
            video_url="https://example.com/ankle-video-1",
            description="Follow along with this ankle mobility routine.",
        ),
        Content(
            type=ContentType.ARTICLE,
            title="Full Body Warm-Up",
            category="Full body",
            thumbnail="/images/fullbody-1.jpg",
            short="A ten-minute full body warm-up before exercise.",
            created_at=_utc(2025, 1, 20),
            difficulty="Easy",
            content="A sample article with a full body warm-up routine.",
        ),
    ]


def dummy_contents(count: int, start: datetime | None = None) -> list[Content]:
    """Generated paging fixtures: one per day from ``start``, every third one a video."""
    first_day = start or _utc(2025, 2, 1)
    items: list[Content] = []
    for i in range(1, count + 1):
        category = DUMMY_CATEGORIES[i % len(DUMMY_CATEGORIES)]
        difficulty = DUMMY_DIFFICULTIES[i % len(DUMMY_DIFFICULTIES)]
        created_at = first_day + timedelta(days=i - 1)
        if i % 3 == 0:
            items.append(
                Content(
                    type=ContentType.VIDEO,
                    title=f"{category} test video {i}",
                    category=category,
                    thumbnail=f"/images/dummy-{i}.jpg",
                    short=f"Video fixture for pagination (#{i}).",
                    created_at=created_at,
                    difficulty=difficulty,
                    video_url=f"https://example.com/dummy-video-{i}",
                    description=f"Video description for fixture #{i}.",
                )
            )
        else:
            items.append(
                Content(
                    type=ContentType.ARTICLE,
                    title=f"{category} test article {i}",
                    category=category,
                    thumbnail=f"/images/dummy-{i}.jpg",
                    short=f"Article fixture for pagination (#{i}).",
                    created_at=created_at,
                    difficulty=difficulty,
                    content=f"Article body for fixture #{i}.",
                )
            )
    return items


async def create_tables() -> None:
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_database(session: AsyncSession) -> int:
    """Replace every record with the sample set. Returns the resulting row count."""
    await session.execute(delete(Content))
    session.add_all(sample_contents())
    await session.flush()
    total = await count_contents(session)
    await session.commit()
    return total


async def add_dummy_contents(session: AsyncSession, count: int) -> int:
    session.add_all(dummy_contents(count))
    await session.flush()
    total = await count_contents(session)
    await session.commit()
    return total


async def count_contents(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(Content))
    return int(result.scalar_one())


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Helper to run async functions from Typer commands."""

    async def _run() -> T:
        try:
            return await coro
        finally:
            await get_engine().dispose()

    return asyncio.run(_run())


@app.command("init-db")
def init_db() -> None:
    """Create the contents table if it does not exist."""
    run_async(create_tables())
    typer.echo("Tables created.")


@app.command("seed")
def seed() -> None:
    """Clear the table and insert the five sample records."""

    async def _seed() -> int:
        await create_tables()
        async with get_session_maker()() as session:
            return await seed_database(session)

    total = run_async(_seed())
    typer.echo(f"Seed done. Content rows = {total}")


@app.command("add-dummy")
def add_dummy(
    count: int = typer.Option(20, "--count", "-n", min=1, help="Number of records to add"),
) -> None:
    """Append generated records for exercising pagination."""

    async def _add() -> int:
        await create_tables()
        async with get_session_maker()() as session:
            return await add_dummy_contents(session, count)

    total = run_async(_add())
    typer.echo(f"Added dummy rows = {count}")
    typer.echo(f"Total Content rows = {total}")


if __name__ == "__main__":
    app()
