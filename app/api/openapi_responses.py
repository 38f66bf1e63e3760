from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fastapi import status

from app.core.errors import ErrorResponse


@dataclass(frozen=True)
class ErrorExample:
    status_code: int
    error: str
    message: str
    description: str
    summary: str | None = None
    details: Any | None = None
    example_name: str | None = None


def error_responses(*examples: ErrorExample) -> dict[int | str, dict[str, Any]]:
    responses: dict[int | str, dict[str, Any]] = {}
    for example in examples:
        response: dict[str, Any] | None = responses.get(example.status_code)
        if response is None:
            examples_payload: dict[str, dict[str, Any]] = {}
            content: dict[str, dict[str, dict[str, Any]]] = {
                "application/json": {"examples": examples_payload}
            }
            response = {
                "model": ErrorResponse,
                "description": example.description,
                "content": content,
            }
            responses[example.status_code] = response

        example_name = example.example_name or example.error
        payload: dict[str, Any] = {
            "error": example.error,
            "message": example.message,
        }
        if example.details is not None:
            payload["details"] = example.details

        example_entry: dict[str, Any] = {
            "summary": example.summary or example.description,
            "value": payload,
        }
        response_content: dict[str, dict[str, dict[str, Any]]] = response["content"]
        response_content["application/json"]["examples"][example_name] = example_entry

    return responses


RATE_LIMITED = ErrorExample(
    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
    error="rate_limited",
    message="Too many requests",
    description="Rate limit exceeded",
    summary="Too many requests",
)

INTERNAL_ERROR = ErrorExample(
    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    error="internal_error",
    message="Internal Server Error",
    description="Content store failure",
    summary="Store failure",
)

INVALID_ID = ErrorExample(
    status_code=status.HTTP_400_BAD_REQUEST,
    error="invalid_id",
    message="ID must be a number",
    description="Invalid request",
    summary="Non-numeric id",
)

INVALID_CURSOR = ErrorExample(
    status_code=status.HTTP_400_BAD_REQUEST,
    error="invalid_cursor",
    message="cursorId must be an integer",
    description="Malformed cursor",
    summary="Malformed cursor",
)

NOT_FOUND = ErrorExample(
    status_code=status.HTTP_404_NOT_FOUND,
    error="not_found",
    message="Content 42 not found",
    description="Content not found",
    summary="Unknown id",
)

NOT_ARTICLE = ErrorExample(
    status_code=status.HTTP_400_BAD_REQUEST,
    error="not_article",
    message="Only articles can be edited",
    description="Invalid request",
    summary="Target is a video",
)

BLANK_TITLE = ErrorExample(
    status_code=status.HTTP_400_BAD_REQUEST,
    error="blank_title",
    message="title must not be blank",
    description="Invalid request",
    summary="Blank title",
)
