"""Shared viewer engine interface."""

from typing import Protocol


class Zoomable(Protocol):
    """Zoom controls a session controller can drive on any viewer engine."""

    def zoom_in(self) -> None:
        """Zoom in by one step."""

    def zoom_out(self) -> None:
        """Zoom out by one step."""

    @property
    def zoom_label(self) -> str:
        """Current zoom level formatted for display."""


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp ``value`` to ``[lower, upper]``, rounding away float drift."""
    return round(max(lower, min(value, upper)), 4)


def percent_label(scale: float) -> str:
    return f"{round(scale * 100)}%"
