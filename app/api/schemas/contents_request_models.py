"""Request models for content API endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ContentUpdateRequest(BaseModel):
    """Partial update of an article. Omitted fields are left unchanged."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [{"title": "Knee Stretching Basics", "content": "Sit tall and..."}]
        }
    )

    title: str | None = Field(default=None, max_length=300, description="New article title")
    content: str | None = Field(default=None, description="New article body")
