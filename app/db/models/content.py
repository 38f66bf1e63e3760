from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Final

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

# Signed 64-bit range of the integer columns.
BIGINT_MIN: Final[int] = -(2**63)
BIGINT_MAX: Final[int] = 2**63 - 1


class ContentType(StrEnum):
    ARTICLE = "article"
    VIDEO = "video"


class Content(Base):
    """A catalog entry: an article (``content``) or a video (``video_url``/``description``)."""

    __tablename__ = "contents"
    __table_args__ = (Index("ix_contents_created_at_id", "created_at", "id"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(16), index=True)
    title: Mapped[str] = mapped_column(String(300))
    category: Mapped[str] = mapped_column(String(100), index=True)
    thumbnail: Mapped[str | None] = mapped_column(String(2048), default=None)
    short: Mapped[str | None] = mapped_column(String(500), default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC)
    )
    difficulty: Mapped[str | None] = mapped_column(String(50), default=None)

    # Article body
    content: Mapped[str | None] = mapped_column(Text, default=None)

    # Video fields
    video_url: Mapped[str | None] = mapped_column(String(2048), default=None)
    description: Mapped[str | None] = mapped_column(Text, default=None)

    @property
    def is_article(self) -> bool:
        return self.type == ContentType.ARTICLE
