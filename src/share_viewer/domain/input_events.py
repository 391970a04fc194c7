"""Input events delivered to viewer engines by the host UI."""

from dataclasses import dataclass, field

LEFT_BUTTON = 0


@dataclass(frozen=True)
class PointerEvent:
    """Mouse pointer position in client coordinates."""

    x: float
    y: float
    button: int = LEFT_BUTTON


@dataclass(frozen=True)
class TouchPoint:
    x: float
    y: float


@dataclass(frozen=True)
class TouchEvent:
    """Active touch points."""

    touches: tuple[TouchPoint, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class WheelEvent:
    """Scroll wheel input; positive ``delta_y`` scrolls down."""

    delta_y: float


@dataclass(frozen=True)
class KeyEvent:
    """Keyboard input with modifier state."""

    key: str
    ctrl: bool = False
    meta: bool = False
    shift: bool = False
    alt: bool = False

    @property
    def command(self) -> bool:
        """Ctrl on most platforms, Cmd on macOS."""
        return self.ctrl or self.meta
