"""Interactive image viewer engine."""

import dataclasses
import logging
from dataclasses import dataclass, field

from share_viewer.domain.input_events import (
    LEFT_BUTTON,
    KeyEvent,
    PointerEvent,
    TouchEvent,
    WheelEvent,
)
from share_viewer.domain.transforms import ImageTransform
from share_viewer.viewers.base import Zoomable, clamp, percent_label

MIN_SCALE = 0.1
MAX_SCALE = 5.0
SCALE_STEP = 0.2

_logger = logging.getLogger(__name__)


@dataclass
class ImageViewerEngine(Zoomable):
    """Owns zoom, pan and rotation for a single image.

    Transform operations are ignored until ``image_loaded`` has been called.
    """

    transform: ImageTransform = field(default_factory=ImageTransform)
    loaded: bool = False
    load_error: str | None = None
    dragging: bool = False
    _drag_anchor: tuple[float, float] = field(
        default=(0.0, 0.0), init=False, repr=False
    )

    @property
    def zoom_label(self) -> str:
        return percent_label(self.transform.scale)

    @property
    def can_zoom_in(self) -> bool:
        return self.loaded and self.transform.scale < MAX_SCALE

    @property
    def can_zoom_out(self) -> bool:
        return self.loaded and self.transform.scale > MIN_SCALE

    @property
    def reload_available(self) -> bool:
        return self.load_error is not None

    def image_loaded(self) -> None:
        """Mark the image decoded and reset the view."""
        self.loaded = True
        self.load_error = None
        self.reset_view()

    def image_failed(self, reason: str = "Failed to load image") -> None:
        self.loaded = False
        self.dragging = False
        self.load_error = reason
        _logger.warning("Image load failed: %s", reason)

    def zoom_in(self) -> None:
        self._set_scale(self.transform.scale + SCALE_STEP)

    def zoom_out(self) -> None:
        self._set_scale(self.transform.scale - SCALE_STEP)

    def rotate_clockwise(self) -> None:
        """Rotate 90 degrees and drop the pan offset."""
        if not self.loaded:
            return
        self.transform = dataclasses.replace(
            self.transform,
            rotation=(self.transform.rotation + 90) % 360,
            offset_x=0.0,
            offset_y=0.0,
        )

    def reset_view(self) -> None:
        if not self.loaded:
            return
        self.transform = ImageTransform()

    def wheel(self, event: WheelEvent) -> bool:
        """Zoom one step per wheel event; scrolling up zooms in."""
        if not self.loaded or event.delta_y == 0:
            return False
        if event.delta_y > 0:
            self.zoom_out()
        else:
            self.zoom_in()
        return True

    def pointer_down(self, event: PointerEvent) -> None:
        if event.button == LEFT_BUTTON:
            self._begin_drag(event.x, event.y)

    def pointer_move(self, event: PointerEvent) -> None:
        self._drag_to(event.x, event.y)

    def pointer_up(self) -> None:
        self.dragging = False

    def pointer_leave(self) -> None:
        self.dragging = False

    def touch_start(self, event: TouchEvent) -> None:
        if len(event.touches) == 1:
            touch = event.touches[0]
            self._begin_drag(touch.x, touch.y)

    def touch_move(self, event: TouchEvent) -> bool:
        """Pan with a single finger; returns True when the move was consumed."""
        if not self.dragging or len(event.touches) != 1:
            return False
        touch = event.touches[0]
        self._drag_to(touch.x, touch.y)
        return True

    def touch_end(self) -> None:
        self.dragging = False

    def key_down(self, event: KeyEvent) -> bool:
        """Handle Ctrl/Cmd zoom shortcuts; returns True if handled."""
        if not event.command:
            return False
        if event.key in {"=", "+"}:
            self.zoom_in()
        elif event.key == "-":
            self.zoom_out()
        elif event.key == "0":
            self.reset_view()
        else:
            return False
        return True

    def _set_scale(self, scale: float) -> None:
        if not self.loaded:
            return
        self.transform = dataclasses.replace(
            self.transform, scale=clamp(scale, MIN_SCALE, MAX_SCALE)
        )

    def _begin_drag(self, x: float, y: float) -> None:
        if not self.loaded:
            return
        self.dragging = True
        self._drag_anchor = (x - self.transform.offset_x, y - self.transform.offset_y)

    def _drag_to(self, x: float, y: float) -> None:
        if not self.dragging:
            return
        anchor_x, anchor_y = self._drag_anchor
        self.transform = dataclasses.replace(
            self.transform, offset_x=x - anchor_x, offset_y=y - anchor_y
        )
