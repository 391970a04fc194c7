"""Viewer transform state."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageTransform:
    """Zoom, pan and rotation of an image."""

    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    rotation: int = 0


@dataclass(frozen=True)
class FixedZoom:
    """Render pages at a fixed scale factor."""

    scale: float = 1.0


@dataclass(frozen=True)
class FitToWidth:
    """Render pages at the viewport width."""

    rendered_width: float


PageZoom = FixedZoom | FitToWidth


@dataclass(frozen=True)
class PagedTransform:
    """Navigation and zoom state of a paged document."""

    current_page: int = 1
    zoom: PageZoom = FixedZoom()
    visible_page: int = 1
