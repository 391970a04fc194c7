"""Content store client for document bytes."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from share_viewer.domain.content import FetchedContent
from share_viewer.errors import ContentUnavailableError

_DEFAULT_MEDIA_TYPE = "application/octet-stream"


class ContentClient(Protocol):
    """Interface for downloading document content."""

    async def fetch(self, url: str) -> FetchedContent:
        """Download content bytes and their declared media type."""


@dataclass
class HttpxContentClient(ContentClient):
    """Content client using httpx."""

    http_client: httpx.AsyncClient
    timeout_seconds: float = 30

    @classmethod
    def create(cls, timeout_seconds: float = 30) -> "HttpxContentClient":
        """Create a content client with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(), timeout_seconds=timeout_seconds)

    async def fetch(self, url: str) -> FetchedContent:
        """Download content; every failure is reported as unavailable content."""
        try:
            response = await self.http_client.get(
                url, timeout=self.timeout_seconds, follow_redirects=True
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ContentUnavailableError() from exc
        media_type = response.headers.get("content-type", _DEFAULT_MEDIA_TYPE)
        return FetchedContent(
            data=response.content,
            media_type=media_type.split(";")[0].strip().lower(),
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
