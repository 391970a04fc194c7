"""Viewer selection by content category."""

from dataclasses import dataclass
from typing import assert_never

from share_viewer.domain.content import Category, LoadedContent
from share_viewer.domain.records import DocumentRecord
from share_viewer.domain.transforms import FitToWidth, FixedZoom
from share_viewer.services.content_types import download_permitted
from share_viewer.viewers.image import ImageViewerEngine
from share_viewer.viewers.paged import PagedDocumentViewerEngine


@dataclass
class TabularView:
    """Spreadsheet or CSV bytes; grid mapping happens in the host UI."""

    data: bytes
    media_type: str


@dataclass
class TextView:
    text: str


@dataclass
class DownloadView:
    """Unsupported content, optionally offered as a raw download."""

    media_type: str
    download_allowed: bool


ContentView = (
    ImageViewerEngine | PagedDocumentViewerEngine | TabularView | TextView | DownloadView
)


def build_view(content: LoadedContent, record: DocumentRecord) -> ContentView:
    """Create the view for a loaded document."""
    match content.category:
        case Category.IMAGE:
            return ImageViewerEngine()
        case Category.PAGED_DOCUMENT:
            return PagedDocumentViewerEngine()
        case Category.TABULAR:
            return TabularView(data=content.data, media_type=content.media_type)
        case Category.PLAIN_TEXT:
            return TextView(text=content.data.decode("utf-8", errors="replace"))
        case Category.UNSUPPORTED:
            return DownloadView(
                media_type=content.media_type,
                download_allowed=download_permitted(content.category, record),
            )
        case _:
            assert_never(content.category)


def describe_view(view: ContentView) -> dict[str, object]:
    """Return the display state of a view."""
    if isinstance(view, ImageViewerEngine):
        transform = view.transform
        return {
            "kind": "image",
            "loaded": view.loaded,
            "error": view.load_error,
            "scale": transform.scale,
            "offset": [transform.offset_x, transform.offset_y],
            "rotation": transform.rotation,
            "zoom_label": view.zoom_label,
            "can_zoom_in": view.can_zoom_in,
            "can_zoom_out": view.can_zoom_out,
        }
    if isinstance(view, PagedDocumentViewerEngine):
        zoom = view.transform.zoom
        return {
            "kind": "paged_document",
            "loaded": view.loaded,
            "error": view.load_error,
            "page": view.current_page,
            "page_count": view.page_count,
            "zoom_mode": "fit_to_width" if isinstance(zoom, FitToWidth) else "fixed",
            "scale": zoom.scale if isinstance(zoom, FixedZoom) else None,
            "rendered_width": (
                zoom.rendered_width if isinstance(zoom, FitToWidth) else None
            ),
            "zoom_label": view.zoom_label,
            "can_zoom_in": view.can_zoom_in,
            "can_zoom_out": view.can_zoom_out,
            "can_go_next": view.can_go_next,
            "can_go_prev": view.can_go_prev,
            "failed_pages": sorted(view.failed_pages),
        }
    if isinstance(view, TabularView):
        return {"kind": "tabular", "media_type": view.media_type}
    if isinstance(view, TextView):
        return {"kind": "plain_text", "text": view.text}
    return {
        "kind": "unsupported",
        "media_type": view.media_type,
        "download_allowed": view.download_allowed,
    }
