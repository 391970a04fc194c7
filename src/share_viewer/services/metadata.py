"""Display metadata for a shared document."""

import re
from datetime import UTC
from urllib.parse import unquote

from share_viewer.domain.records import DocumentRecord

DEFAULT_TITLE = "Shared Document"

_UUID_SUFFIX_PATTERNS = (
    re.compile(
        r"[_\-\s]*[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
        re.IGNORECASE,
    ),
    re.compile(r"[_\-\s]*[0-9a-f]{32}$", re.IGNORECASE),
)
_EXTENSION_PATTERN = re.compile(r"\.[^/.]+$")


def clean_document_title(raw_title: str | None) -> str:
    """Strip the extension and any trailing UUID from a file name."""
    if not raw_title:
        return DEFAULT_TITLE
    decoded = unquote(raw_title)
    without_extension = _EXTENSION_PATTERN.sub("", decoded)
    stripped = without_extension
    for pattern in _UUID_SUFFIX_PATTERNS:
        stripped = pattern.sub("", stripped)
    return stripped.strip() or without_extension.strip() or DEFAULT_TITLE


def document_title(record: DocumentRecord) -> str:
    """Return a human title from the document name or content URL."""
    if record.document_name:
        return clean_document_title(record.document_name)
    if record.content_url:
        file_name = record.content_url.split("/")[-1].split("?")[0]
        return clean_document_title(file_name)
    return DEFAULT_TITLE


def display_document_id(record: DocumentRecord) -> str:
    if record.document_id:
        return record.document_id
    if record.share_id:
        return f"DOC-{record.share_id[:8].upper()}"
    return "N/A"


def format_expiry(record: DocumentRecord) -> str:
    if record.expiry_instant is None:
        return "Never"
    return record.expiry_instant.astimezone(UTC).strftime("%b %d, %Y, %I:%M %p")


def document_metadata(record: DocumentRecord) -> dict[str, str]:
    """Return the metadata panel fields for a record."""
    return {
        "title": document_title(record),
        "document_id": display_document_id(record),
        "shared_by": record.shared_by or "Anonymous",
        "expires": format_expiry(record),
        "access_type": "View Once" if record.view_once else "Multiple Views",
    }
