"""API request and response schemas.

Import request/response models from the submodules (e.g. contents_request_models,
contents_response_models) or from this package for a single entry point.
"""

from __future__ import annotations

from app.api.schemas.contents_request_models import ContentUpdateRequest
from app.api.schemas.contents_response_models import (
    ArticleDetailResponse,
    ContentDetailResponse,
    ContentListResponse,
    ContentSummaryResponse,
    CursorPageResponse,
    CursorResponse,
    OffsetPageResponse,
    VideoDetailResponse,
)
from app.api.schemas.meta_response_models import HealthResponse

__all__ = [
    "ArticleDetailResponse",
    "ContentDetailResponse",
    "ContentListResponse",
    "ContentSummaryResponse",
    "ContentUpdateRequest",
    "CursorPageResponse",
    "CursorResponse",
    "HealthResponse",
    "OffsetPageResponse",
    "VideoDetailResponse",
]
