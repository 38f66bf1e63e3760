"""Async HTTP client for the content catalog API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from app.api.schemas import (
    ArticleDetailResponse,
    ContentDetailResponse,
    ContentListResponse,
    CursorPageResponse,
    CursorResponse,
    OffsetPageResponse,
    VideoDetailResponse,
)

logger = logging.getLogger(__name__)

_detail_adapter: TypeAdapter[ArticleDetailResponse | VideoDetailResponse] = TypeAdapter(
    ContentDetailResponse
)
_list_adapter: TypeAdapter[OffsetPageResponse | CursorPageResponse] = TypeAdapter(
    ContentListResponse
)
_categories_adapter: TypeAdapter[list[str]] = TypeAdapter(list[str])


class ContentsClientError(Exception):
    """Any failed call: transport error, non-success status or non-JSON body."""

    def __init__(
        self, message: str, status_code: int | None = None, error_code: str | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code


@dataclass(frozen=True)
class ListParams:
    """Filter and sort shape of a list request. Changing any of it starts a new sequence."""

    category: str = "all"
    type: str = "all"
    q: str = ""
    sort: str = "createdAt"
    order: str = "desc"
    limit: int = 10

    def to_query(self) -> dict[str, str]:
        return {
            "category": self.category,
            "type": self.type,
            "q": self.q,
            "sort": self.sort,
            "order": self.order,
            "limit": str(self.limit),
        }


class ContentsClient:
    """Thin wrapper over :class:`httpx.AsyncClient` that speaks the catalog's JSON."""

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> ContentsClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Request %s %s failed: %s", method, path, exc)
            raise ContentsClientError("Could not reach the content service") from exc

        try:
            payload = response.json()
        except ValueError:
            raise ContentsClientError(
                f"Unexpected response ({response.status_code})", response.status_code
            ) from None

        if response.is_error:
            message = f"Request failed ({response.status_code})"
            error_code = None
            if isinstance(payload, dict):
                message = str(payload.get("message") or message)
                error_code = payload.get("error")
            raise ContentsClientError(message, response.status_code, error_code)
        return payload

    @staticmethod
    def _parse(adapter: TypeAdapter[Any], payload: Any) -> Any:
        try:
            return adapter.validate_python(payload)
        except ValidationError as exc:
            raise ContentsClientError("Response did not match the expected format") from exc

    async def list_contents(
        self,
        params: ListParams | None = None,
        *,
        cursor: CursorResponse | None = None,
        page: int | None = None,
    ) -> OffsetPageResponse | CursorPageResponse:
        """Cursor mode when ``cursor`` is given or ``page`` is not; offset mode otherwise."""
        query = (params or ListParams()).to_query()
        if page is not None and cursor is None:
            query.update(mode="offset", page=str(page))
        else:
            query["mode"] = "cursor"
            if cursor is not None:
                query["cursorId"] = str(cursor.id)
                query["cursorCreatedAt"] = cursor.created_at.isoformat()
        payload = await self._request("GET", "/api/contents", params=query)
        result: OffsetPageResponse | CursorPageResponse = self._parse(_list_adapter, payload)
        return result

    async def get_content(self, content_id: int) -> ArticleDetailResponse | VideoDetailResponse:
        payload = await self._request("GET", f"/api/contents/{content_id}")
        result: ArticleDetailResponse | VideoDetailResponse = self._parse(_detail_adapter, payload)
        return result

    async def update_article(
        self, content_id: int, *, title: str, content: str
    ) -> ArticleDetailResponse | VideoDetailResponse:
        """Save an article edit. Both fields are trimmed; a blank title is refused locally."""
        new_title = title.strip()
        if not new_title:
            raise ContentsClientError("title must not be blank", error_code="blank_title")
        payload = await self._request(
            "PUT",
            f"/api/contents/{content_id}",
            json={"title": new_title, "content": content.strip()},
        )
        result: ArticleDetailResponse | VideoDetailResponse = self._parse(_detail_adapter, payload)
        return result

    async def list_categories(self) -> list[str]:
        payload = await self._request("GET", "/api/categories")
        result: list[str] = self._parse(_categories_adapter, payload)
        return result
