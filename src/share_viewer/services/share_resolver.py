"""Share token extraction and record lookup."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from pydantic import ValidationError

from share_viewer.adapters.document_directory import DocumentDirectory
from share_viewer.domain.records import DirectoryRecordPayload, DocumentRecord
from share_viewer.errors import MissingReferenceError, UnknownFailureError

SHARE_TOKEN_PARAM = "share_id"

_logger = logging.getLogger(__name__)


def extract_share_token(params: Mapping[str, str]) -> str:
    """Return the share token from entry parameters or raise MissingReferenceError."""
    value = params.get(SHARE_TOKEN_PARAM)
    if value is None or not value.strip():
        raise MissingReferenceError()
    return value.strip()


@dataclass
class ShareResolver:
    """Resolves share tokens into document records via the directory."""

    directory: DocumentDirectory

    async def resolve(self, share_id: str) -> DocumentRecord:
        """Fetch and validate the record for a share token."""
        payload = await self.directory.fetch_shared(share_id)
        try:
            return DirectoryRecordPayload.model_validate(payload).to_record(share_id)
        except ValidationError as exc:
            _logger.warning("Invalid directory record for share %s: %s", share_id, exc)
            raise UnknownFailureError() from exc
