"""Document directory lookup client."""

import dataclasses
from dataclasses import dataclass
from typing import Protocol

import httpx

from share_viewer.errors import (
    AccessDeniedError,
    AlreadyViewedError,
    DirectoryTimeoutError,
    UnknownFailureError,
)

_DENIED_STATUSES = {403, 404}
_GONE_STATUS = 410


class DocumentDirectory(Protocol):
    """Interface for resolving share ids into document records."""

    async def fetch_shared(self, share_id: str) -> dict[str, object]:
        """Return the raw record payload for a share id."""


@dataclass
class HttpxDocumentDirectory(DocumentDirectory):
    """HTTPX-backed document directory client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10

    @classmethod
    def create(
        cls, base_url: str | None, timeout_seconds: float = 10
    ) -> "HttpxDocumentDirectory":
        """Create a directory client with a managed httpx session."""
        return cls(
            base_url=base_url or "",
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    def with_base_url(self, base_url: str) -> "HttpxDocumentDirectory":
        """Return a client bound to another origin, sharing the HTTP session."""
        return dataclasses.replace(self, base_url=base_url.rstrip("/"))

    async def fetch_shared(self, share_id: str) -> dict[str, object]:
        """Fetch the record behind a share id, mapping failures to access errors."""
        url = f"{self.base_url}/documents/shared"
        try:
            response = await self.http_client.get(
                url,
                params={"share_id": share_id},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as exc:
            raise DirectoryTimeoutError() from exc
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            if status_code in _DENIED_STATUSES:
                raise AccessDeniedError() from exc
            if status_code == _GONE_STATUS:
                raise AlreadyViewedError() from exc
            raise UnknownFailureError() from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise UnknownFailureError() from exc
        if not isinstance(payload, dict):
            raise UnknownFailureError()
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
