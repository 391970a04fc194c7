"""Interactive paged document viewer engine."""

import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from share_viewer.domain.input_events import KeyEvent
from share_viewer.domain.transforms import FitToWidth, FixedZoom, PagedTransform
from share_viewer.viewers.base import Zoomable, clamp, percent_label

MIN_SCALE = 0.5
MAX_SCALE = 3.0
SCALE_STEP = 0.25
FIT_WIDTH_PADDING = 48

_logger = logging.getLogger(__name__)


@dataclass
class PagedDocumentViewerEngine(Zoomable):
    """Owns page navigation and zoom mode for a paged document.

    Navigation can be discrete (``go_to_page``/``next_page``/``prev_page``) or
    driven by continuous scroll through ``update_visibility``. Zoom is either a
    fixed scale or tracks the viewport width.
    """

    transform: PagedTransform = field(default_factory=PagedTransform)
    page_count: int = 0
    loaded: bool = False
    load_error: str | None = None
    failed_pages: set[int] = field(default_factory=set)
    viewport_width: float | None = None

    @property
    def current_page(self) -> int:
        return self.transform.current_page

    @property
    def zoom_label(self) -> str:
        zoom = self.transform.zoom
        if isinstance(zoom, FitToWidth):
            return "Fit"
        return percent_label(zoom.scale)

    @property
    def can_zoom_in(self) -> bool:
        zoom = self.transform.zoom
        return isinstance(zoom, FitToWidth) or zoom.scale < MAX_SCALE

    @property
    def can_zoom_out(self) -> bool:
        zoom = self.transform.zoom
        return isinstance(zoom, FitToWidth) or zoom.scale > MIN_SCALE

    @property
    def can_go_next(self) -> bool:
        return self.loaded and self.current_page < self.page_count

    @property
    def can_go_prev(self) -> bool:
        return self.loaded and self.current_page > 1

    @property
    def reload_available(self) -> bool:
        return self.load_error is not None

    def document_loaded(self, page_count: int) -> None:
        """Record the page count reported by the renderer."""
        self.page_count = max(1, int(page_count))
        self.loaded = True
        self.load_error = None
        self.failed_pages.clear()
        self._set_page(self.current_page)

    def document_failed(self, reason: str = "Failed to load PDF document") -> None:
        self.loaded = False
        self.load_error = reason
        _logger.warning("Paged document load failed: %s", reason)

    def page_failed(self, page: int) -> None:
        """Record a page that failed to render; the rest of the document stays up."""
        if self.loaded and 1 <= page <= self.page_count:
            self.failed_pages.add(page)
            _logger.info("Page %s failed to render", page)

    def go_to_page(self, value: int | str) -> None:
        """Jump to a page; non-numeric input keeps the current page."""
        page = _parse_page(value)
        if page is None or not self.loaded:
            return
        self._set_page(page)

    def next_page(self) -> None:
        if self.loaded:
            self._set_page(self.current_page + 1)

    def prev_page(self) -> None:
        if self.loaded:
            self._set_page(self.current_page - 1)

    def zoom_in(self) -> None:
        self._set_scale(self._fixed_scale() + SCALE_STEP)

    def zoom_out(self) -> None:
        self._set_scale(self._fixed_scale() - SCALE_STEP)

    def reset_zoom(self) -> None:
        self._set_zoom(FixedZoom(1.0))

    def fit_to_width(self, viewport_width: float | None = None) -> None:
        """Track the viewport width, less a fixed padding allowance."""
        if viewport_width is not None:
            self.viewport_width = viewport_width
        if self.viewport_width is None:
            return
        self._set_zoom(FitToWidth(_rendered_width(self.viewport_width)))

    def viewport_resized(self, viewport_width: float) -> None:
        self.viewport_width = viewport_width
        if isinstance(self.transform.zoom, FitToWidth):
            self._set_zoom(FitToWidth(_rendered_width(viewport_width)))

    def update_visibility(self, ratios: Mapping[int, float]) -> None:
        """Derive the current page from per-page visible intersection ratios.

        The highest ratio wins; ties go to the lowest page number.
        """
        if not self.loaded:
            return
        candidates = [
            (ratio, page)
            for page, ratio in ratios.items()
            if 1 <= page <= self.page_count and ratio > 0
        ]
        if not candidates:
            return
        _, page = min(candidates, key=lambda item: (-item[0], item[1]))
        self.transform = dataclasses.replace(
            self.transform, current_page=page, visible_page=page
        )

    def key_down(self, event: KeyEvent) -> bool:
        """Handle navigation and zoom shortcuts; returns True if handled."""
        if event.command:
            if event.key in {"=", "+"}:
                self.zoom_in()
            elif event.key == "-":
                self.zoom_out()
            elif event.key == "0":
                self.reset_zoom()
            else:
                return False
            return True
        if event.key in {"ArrowRight", "PageDown"}:
            self.next_page()
        elif event.key in {"ArrowLeft", "PageUp"}:
            self.prev_page()
        elif event.key == "Home":
            self.go_to_page(1)
        elif event.key == "End":
            self.go_to_page(self.page_count)
        else:
            return False
        return True

    def _fixed_scale(self) -> float:
        zoom = self.transform.zoom
        if isinstance(zoom, FixedZoom):
            return zoom.scale
        return 1.0

    def _set_scale(self, scale: float) -> None:
        self._set_zoom(FixedZoom(clamp(scale, MIN_SCALE, MAX_SCALE)))

    def _set_zoom(self, zoom: FixedZoom | FitToWidth) -> None:
        self.transform = dataclasses.replace(self.transform, zoom=zoom)

    def _set_page(self, page: int) -> None:
        last_page = max(1, self.page_count)
        clamped = max(1, min(page, last_page))
        self.transform = dataclasses.replace(
            self.transform, current_page=clamped, visible_page=clamped
        )


def _parse_page(value: int | str) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _rendered_width(viewport_width: float) -> float:
    return max(1.0, viewport_width - FIT_WIDTH_PADDING)
