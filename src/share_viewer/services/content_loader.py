"""Fetches document content and tags it with a category."""

import logging
from dataclasses import dataclass

from share_viewer.adapters.content_client import ContentClient
from share_viewer.domain.content import LoadedContent
from share_viewer.domain.records import DocumentRecord
from share_viewer.errors import ContentUnavailableError
from share_viewer.services.content_types import classify

_logger = logging.getLogger(__name__)


@dataclass
class ContentLoader:
    """Loads the content behind a ready document record."""

    client: ContentClient

    async def load(self, record: DocumentRecord) -> LoadedContent:
        """Fetch the record's content and classify it."""
        try:
            fetched = await self.client.fetch(record.content_url)
        except ContentUnavailableError:
            raise
        except Exception as exc:
            _logger.warning("Content fetch failed for share %s: %s", record.share_id, exc)
            raise ContentUnavailableError() from exc
        category = classify(record.content_url, fetched.media_type)
        _logger.info(
            "Loaded content for share %s: category=%s bytes=%s",
            record.share_id,
            category,
            len(fetched.data),
        )
        return LoadedContent(
            category=category,
            data=fetched.data,
            media_type=fetched.media_type,
            url=record.content_url,
        )
