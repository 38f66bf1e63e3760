"""Response models for content API endpoints.

List rows carry summary fields only. Detail responses are a union keyed by
``type``: articles carry ``content``, videos carry ``videoUrl``/``description``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.services.pagination import as_utc


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ContentSummaryResponse(CamelModel):
    """List projection of a content record."""

    id: int
    type: str
    title: str
    category: str
    thumbnail: str | None = None
    short: str | None = None
    created_at: datetime
    difficulty: str | None = None

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, value: datetime) -> datetime:
        return as_utc(value)


class ArticleDetailResponse(ContentSummaryResponse):
    type: Literal["article"]
    content: str | None = None


class VideoDetailResponse(ContentSummaryResponse):
    type: Literal["video"]
    video_url: str | None = None
    description: str | None = None


ContentDetailResponse = Annotated[
    ArticleDetailResponse | VideoDetailResponse, Field(discriminator="type")
]


class CursorResponse(CamelModel):
    id: int
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, value: datetime) -> datetime:
        return as_utc(value)


class OffsetPageResponse(CamelModel):
    mode: Literal["offset"] = "offset"
    page: int
    limit: int
    total: int
    rows: list[ContentSummaryResponse]


class CursorPageResponse(CamelModel):
    mode: Literal["cursor"] = "cursor"
    limit: int
    total: int
    rows: list[ContentSummaryResponse]
    has_next: bool
    next_cursor: CursorResponse | None = None


ContentListResponse = Annotated[
    OffsetPageResponse | CursorPageResponse, Field(discriminator="mode")
]
