from fastapi import APIRouter, Depends, Query, Request, status

from app.api.dependencies import UnitOfWork, get_uow
from app.api.openapi_responses import (
    BLANK_TITLE,
    INTERNAL_ERROR,
    INVALID_CURSOR,
    INVALID_ID,
    NOT_ARTICLE,
    NOT_FOUND,
    RATE_LIMITED,
    error_responses,
)
from app.api.schemas import (
    ArticleDetailResponse,
    ContentDetailResponse,
    ContentListResponse,
    ContentSummaryResponse,
    ContentUpdateRequest,
    CursorPageResponse,
    CursorResponse,
    OffsetPageResponse,
    VideoDetailResponse,
)
from app.core.rate_limit import CONTENT_LIST_RATE_LIMIT, limit, rate_limit_ip_key
from app.db.content_store import ContentPatch
from app.db.models.content import Content, ContentType
from app.services.content_service import ContentListQuery, parse_content_id
from app.services.pagination import CursorPage, OffsetPage

router = APIRouter()


def to_list_response(page: OffsetPage | CursorPage) -> OffsetPageResponse | CursorPageResponse:
    rows = [ContentSummaryResponse.model_validate(row) for row in page.rows]
    if isinstance(page, CursorPage):
        next_cursor = None
        if page.next_cursor is not None:
            next_cursor = CursorResponse(
                id=page.next_cursor.id, created_at=page.next_cursor.created_at
            )
        return CursorPageResponse(
            limit=page.limit,
            total=page.total,
            rows=rows,
            has_next=page.has_next,
            next_cursor=next_cursor,
        )
    return OffsetPageResponse(page=page.page, limit=page.limit, total=page.total, rows=rows)


def to_detail_response(content: Content) -> ArticleDetailResponse | VideoDetailResponse:
    if content.type == ContentType.VIDEO:
        return VideoDetailResponse.model_validate(content)
    return ArticleDetailResponse.model_validate(content)


@router.get(
    "/contents",
    summary="List contents",
    description=(
        "Filter, sort and paginate the catalog. `mode=offset` pages by number; "
        "`mode=cursor` continues after `cursorId`/`cursorCreatedAt` taken from the "
        "previous response's `nextCursor`."
    ),
    response_model=ContentListResponse,
    responses=error_responses(INVALID_CURSOR, RATE_LIMITED, INTERNAL_ERROR),
)
@limit(CONTENT_LIST_RATE_LIMIT, key_func=rate_limit_ip_key)
async def list_contents(
    request: Request,
    category: str | None = Query(default=None, description="Exact category, or `all`"),
    content_type: str | None = Query(
        default=None, alias="type", description="`article`, `video`, or `all`"
    ),
    q: str | None = Query(default=None, description="Case-insensitive title substring"),
    mode: str | None = Query(default=None, description="`offset` (default) or `cursor`"),
    limit_: str | None = Query(default=None, alias="limit", description="Page size, 1..50"),
    sort: str | None = Query(
        default=None, description="`id`, `createdAt`, `title`, `category` or `difficulty`"
    ),
    order: str | None = Query(default=None, description="`asc` or `desc` (default)"),
    page: str | None = Query(default=None, description="Offset mode page number, from 1"),
    cursor_id: str | None = Query(default=None, alias="cursorId"),
    cursor_created_at: str | None = Query(default=None, alias="cursorCreatedAt"),
    uow: UnitOfWork = Depends(get_uow),
) -> OffsetPageResponse | CursorPageResponse:
    """List content summaries; body fields are never included."""
    query = ContentListQuery(
        category=category,
        type=content_type,
        q=q,
        mode=mode,
        limit=limit_,
        sort=sort,
        order=order,
        page=page,
        cursor_id=cursor_id,
        cursor_created_at=cursor_created_at,
    )
    result = await uow.content_service.list_contents(query)
    return to_list_response(result)


@router.get(
    "/contents/{content_id}",
    summary="Get content detail",
    response_model=ContentDetailResponse,
    responses=error_responses(INVALID_ID, NOT_FOUND, INTERNAL_ERROR),
)
async def get_content(
    content_id: str, uow: UnitOfWork = Depends(get_uow)
) -> ArticleDetailResponse | VideoDetailResponse:
    """Full record, including the article body or the video fields."""
    content = await uow.content_service.get_content(parse_content_id(content_id))
    return to_detail_response(content)


@router.put(
    "/contents/{content_id}",
    summary="Edit an article",
    description="Update `title` and/or `content` of an article. Videos cannot be edited.",
    response_model=ContentDetailResponse,
    responses=error_responses(INVALID_ID, NOT_ARTICLE, BLANK_TITLE, NOT_FOUND, INTERNAL_ERROR),
)
async def update_content(
    content_id: str,
    request_data: ContentUpdateRequest,
    uow: UnitOfWork = Depends(get_uow),
) -> ArticleDetailResponse | VideoDetailResponse:
    """Apply an article edit and return the updated record."""
    patch = ContentPatch(title=request_data.title, content=request_data.content)
    content = await uow.content_service.update_article(parse_content_id(content_id), patch)
    return to_detail_response(content)


@router.get(
    "/categories",
    summary="List categories",
    response_model=list[str],
    status_code=status.HTTP_200_OK,
    responses=error_responses(INTERNAL_ERROR),
)
async def list_categories(uow: UnitOfWork = Depends(get_uow)) -> list[str]:
    """Distinct non-empty category labels sorted case- and accent-insensitively."""
    return await uow.content_service.list_categories()
