"""Request models for the viewer API."""

from typing import Literal

from pydantic import BaseModel, Field

from share_viewer.domain.input_events import (
    LEFT_BUTTON,
    KeyEvent,
    PointerEvent,
    TouchEvent,
    TouchPoint,
)
from share_viewer.viewers.screenshot_guard import GuardSignal


class KeyPayload(BaseModel):
    """Keyboard event as reported by the host UI."""

    key: str
    ctrl: bool = False
    meta: bool = False
    shift: bool = False
    alt: bool = False

    def to_event(self) -> KeyEvent:
        return KeyEvent(
            key=self.key,
            ctrl=self.ctrl,
            meta=self.meta,
            shift=self.shift,
            alt=self.alt,
        )


class TouchPointPayload(BaseModel):
    x: float
    y: float


ViewerAction = Literal[
    "zoom_in",
    "zoom_out",
    "reset",
    "rotate",
    "fit_to_width",
    "resize",
    "next_page",
    "prev_page",
    "go_to_page",
    "visibility",
    "loaded",
    "load_failed",
    "page_failed",
    "wheel",
    "key",
    "pointer_down",
    "pointer_move",
    "pointer_up",
    "pointer_leave",
    "touch_start",
    "touch_move",
    "touch_end",
    "reload",
]


class ViewerCommand(BaseModel):
    """A single interaction forwarded to the session's viewer engine."""

    action: ViewerAction
    page: int | str | None = None
    page_count: int | None = Field(default=None, ge=0)
    viewport_width: float | None = Field(default=None, gt=0)
    delta_y: float | None = None
    visibility: dict[int, float] | None = None
    reason: str | None = None
    key: KeyPayload | None = None
    x: float | None = None
    y: float | None = None
    button: int = LEFT_BUTTON
    touches: list[TouchPointPayload] = Field(default_factory=list)

    def pointer_event(self) -> PointerEvent | None:
        """Return the pointer position, or None when a coordinate is missing."""
        if self.x is None or self.y is None:
            return None
        return PointerEvent(x=self.x, y=self.y, button=self.button)

    def touch_event(self) -> TouchEvent:
        return TouchEvent(
            touches=tuple(TouchPoint(x=touch.x, y=touch.y) for touch in self.touches)
        )


class GuardSignalRequest(BaseModel):
    """A screenshot guard signal from the host UI."""

    signal: GuardSignal
    key: KeyPayload | None = None
