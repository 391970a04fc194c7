"""Content categories and fetched content."""

from dataclasses import dataclass
from enum import StrEnum


class Category(StrEnum):
    """Rendering category of a fetched document."""

    IMAGE = "image"
    PAGED_DOCUMENT = "paged_document"
    TABULAR = "tabular"
    PLAIN_TEXT = "plain_text"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class FetchedContent:
    """Raw bytes returned by the content store."""

    data: bytes
    media_type: str


@dataclass(frozen=True)
class LoadedContent:
    """Fetched content together with its detected category."""

    category: Category
    data: bytes
    media_type: str
    url: str
