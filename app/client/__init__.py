"""Python client for the content catalog API."""

from app.client.contents_client import ContentsClient, ContentsClientError, ListParams
from app.client.paginator import ContentPaginator, CursorStack

__all__ = [
    "ContentPaginator",
    "ContentsClient",
    "ContentsClientError",
    "CursorStack",
    "ListParams",
]
