"""Content category detection."""

from urllib.parse import unquote, urlsplit

from share_viewer.domain.content import Category
from share_viewer.domain.records import DocumentRecord

_SUFFIX_CATEGORIES: dict[str, Category] = {
    "pdf": Category.PAGED_DOCUMENT,
    "jpg": Category.IMAGE,
    "jpeg": Category.IMAGE,
    "png": Category.IMAGE,
    "gif": Category.IMAGE,
    "webp": Category.IMAGE,
    "bmp": Category.IMAGE,
    "csv": Category.TABULAR,
    "xlsx": Category.TABULAR,
    "xls": Category.TABULAR,
    "txt": Category.PLAIN_TEXT,
}


def classify(url: str, declared_media_type: str | None) -> Category:
    """Classify content by file suffix, then by declared media type."""
    suffix = _file_suffix(url)
    if suffix in _SUFFIX_CATEGORIES:
        return _SUFFIX_CATEGORIES[suffix]
    return _classify_media_type(declared_media_type or "")


def download_permitted(category: Category, record: DocumentRecord) -> bool:
    """Return True if the raw-download affordance may be offered."""
    return category is Category.UNSUPPORTED and not record.no_download


def _file_suffix(url: str) -> str:
    path = urlsplit(url).path if "://" in url else url.split("?")[0].split("#")[0]
    file_name = unquote(path.rsplit("/", 1)[-1]).lower()
    if "." not in file_name:
        return ""
    return file_name.rsplit(".", 1)[-1]


def _classify_media_type(media_type: str) -> Category:
    cleaned = media_type.split(";")[0].strip().lower()
    if cleaned == "application/pdf":
        return Category.PAGED_DOCUMENT
    if cleaned.startswith("image/"):
        return Category.IMAGE
    if cleaned == "text/csv" or "spreadsheet" in cleaned or "excel" in cleaned:
        return Category.TABULAR
    if cleaned == "text/plain":
        return Category.PLAIN_TEXT
    return Category.UNSUPPORTED
