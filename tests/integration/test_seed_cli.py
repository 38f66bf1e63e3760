"""Integration tests for the seed CLI."""

from __future__ import annotations

import asyncio

from typer.testing import CliRunner

from app.db.seed import app, count_contents
from app.db.session import get_engine, get_session_maker

runner = CliRunner()


def _count() -> int:
    async def _run() -> int:
        try:
            async with get_session_maker()() as session:
                return await count_contents(session)
        finally:
            await get_engine().dispose()

    return asyncio.run(_run())


def test_seed_then_add_dummy() -> None:
    """Test that seeding resets the table and dummy rows are appended."""
    # Act
    seeded = runner.invoke(app, ["seed"])
    added = runner.invoke(app, ["add-dummy", "--count", "7"])

    # Assert
    assert seeded.exit_code == 0, seeded.output
    assert "Seed done. Content rows = 5" in seeded.output
    assert added.exit_code == 0, added.output
    assert "Total Content rows = 12" in added.output
    assert _count() == 12

    reseeded = runner.invoke(app, ["seed"])
    assert "Content rows = 5" in reseeded.output


def test_init_db_is_idempotent() -> None:
    first = runner.invoke(app, ["init-db"])
    second = runner.invoke(app, ["init-db"])

    assert first.exit_code == 0
    assert second.exit_code == 0
    assert "Tables created." in second.output


def test_add_dummy_rejects_non_positive_count() -> None:
    result = runner.invoke(app, ["add-dummy", "--count", "0"])

    assert result.exit_code != 0
