"""Unit tests for the HTTP client, against a stubbed transport."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, datetime

import httpx
import pytest

from app.api.schemas import (
    ArticleDetailResponse,
    CursorPageResponse,
    CursorResponse,
    OffsetPageResponse,
    VideoDetailResponse,
)
from app.client import ContentsClient, ContentsClientError, ListParams

Handler = Callable[[httpx.Request], httpx.Response]


def _row(content_id: int, day: int = 1) -> dict[str, object]:
    return {
        "id": content_id,
        "type": "article",
        "title": f"Item {content_id}",
        "category": "Knee",
        "thumbnail": None,
        "short": "Summary",
        "createdAt": f"2025-01-{day:02d}T00:00:00Z",
        "difficulty": "Easy",
    }


def _client(handler: Handler) -> ContentsClient:
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://catalog.test"
    )
    return ContentsClient(http_client=http_client)


class TestListContents:
    @pytest.mark.asyncio
    async def test_first_cursor_page_sends_filters_without_cursor(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "mode": "cursor",
                    "limit": 2,
                    "total": 5,
                    "rows": [_row(5, 20), _row(4, 15)],
                    "hasNext": True,
                    "nextCursor": {"id": 4, "createdAt": "2025-01-15T00:00:00Z"},
                },
            )

        async with _client(handler) as client:
            page = await client.list_contents(ListParams(category="Knee", q="stretch", limit=2))

        params = seen[0].url.params
        assert seen[0].url.path == "/api/contents"
        assert params["mode"] == "cursor"
        assert params["category"] == "Knee"
        assert params["q"] == "stretch"
        assert params["limit"] == "2"
        assert "cursorId" not in params
        assert "cursorCreatedAt" not in params
        assert isinstance(page, CursorPageResponse)
        assert page.next_cursor == CursorResponse(
            id=4, created_at=datetime(2025, 1, 15, tzinfo=UTC)
        )

    @pytest.mark.asyncio
    async def test_cursor_is_sent_as_pair(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"mode": "cursor", "limit": 2, "total": 5, "rows": [], "hasNext": False},
            )

        cursor = CursorResponse(id=4, created_at=datetime(2025, 1, 15, tzinfo=UTC))
        async with _client(handler) as client:
            await client.list_contents(ListParams(limit=2), cursor=cursor)

        params = seen[0].url.params
        assert params["cursorId"] == "4"
        assert datetime.fromisoformat(params["cursorCreatedAt"]) == cursor.created_at

    @pytest.mark.asyncio
    async def test_offset_mode_when_page_given(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"mode": "offset", "page": 2, "limit": 10, "total": 12, "rows": [_row(2)]},
            )

        async with _client(handler) as client:
            page = await client.list_contents(page=2)

        assert seen[0].url.params["mode"] == "offset"
        assert seen[0].url.params["page"] == "2"
        assert isinstance(page, OffsetPageResponse)
        assert page.total == 12


class TestErrors:
    @pytest.mark.asyncio
    async def test_error_payload_is_surfaced(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                404, json={"error": "not_found", "message": "Content 9 not found"}
            )

        async with _client(handler) as client:
            with pytest.raises(ContentsClientError) as exc_info:
                await client.get_content(9)

        assert exc_info.value.status_code == 404
        assert exc_info.value.error_code == "not_found"
        assert str(exc_info.value) == "Content 9 not found"

    @pytest.mark.asyncio
    async def test_non_json_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>Bad gateway</html>")

        async with _client(handler) as client:
            with pytest.raises(ContentsClientError, match=r"Unexpected response \(502\)"):
                await client.list_categories()

    @pytest.mark.asyncio
    async def test_transport_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(ContentsClientError) as exc_info:
                await client.list_categories()

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_unexpected_shape(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"rows": "nope"})

        async with _client(handler) as client:
            with pytest.raises(ContentsClientError, match="expected format"):
                await client.list_contents()


class TestDetailAndEdit:
    @pytest.mark.asyncio
    async def test_get_video(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            body = _row(2) | {
                "type": "video",
                "videoUrl": "https://example.com/v",
                "description": "Watch",
            }
            return httpx.Response(200, json=body)

        async with _client(handler) as client:
            content = await client.get_content(2)

        assert isinstance(content, VideoDetailResponse)
        assert content.video_url == "https://example.com/v"

    @pytest.mark.asyncio
    async def test_update_trims_fields(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            body = json.loads(request.content)
            return httpx.Response(200, json=_row(1) | body)

        async with _client(handler) as client:
            content = await client.update_article(1, title="  Title  ", content="  Body \n")

        assert seen[0].method == "PUT"
        assert seen[0].url.path == "/api/contents/1"
        assert json.loads(seen[0].content) == {"title": "Title", "content": "Body"}
        assert isinstance(content, ArticleDetailResponse)
        assert content.title == "Title"

    @pytest.mark.asyncio
    async def test_blank_title_is_refused_without_a_request(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_row(1))

        async with _client(handler) as client:
            with pytest.raises(ContentsClientError) as exc_info:
                await client.update_article(1, title="   ", content="Body")

        assert exc_info.value.error_code == "blank_title"
        assert seen == []

    @pytest.mark.asyncio
    async def test_list_categories(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/categories"
            return httpx.Response(200, json=["Ankle", "Knee"])

        async with _client(handler) as client:
            assert await client.list_categories() == ["Ankle", "Knee"]
