"""Tests for the image viewer engine."""

import pytest

from share_viewer.domain.input_events import (
    KeyEvent,
    PointerEvent,
    TouchEvent,
    TouchPoint,
    WheelEvent,
)
from share_viewer.domain.transforms import ImageTransform
from share_viewer.viewers.image import MAX_SCALE, MIN_SCALE, ImageViewerEngine


@pytest.fixture
def engine() -> ImageViewerEngine:
    viewer = ImageViewerEngine()
    viewer.image_loaded()
    return viewer


def test_loaded_image_starts_reset(engine: ImageViewerEngine) -> None:
    assert engine.transform == ImageTransform()
    assert engine.zoom_label == "100%"


def test_operations_ignored_before_load() -> None:
    viewer = ImageViewerEngine()

    viewer.zoom_in()
    viewer.rotate_clockwise()
    viewer.pointer_down(PointerEvent(10, 10))
    viewer.pointer_move(PointerEvent(50, 50))

    assert viewer.transform == ImageTransform()
    assert viewer.dragging is False


def test_zoom_steps_and_label(engine: ImageViewerEngine) -> None:
    engine.zoom_in()
    engine.zoom_in()

    assert engine.transform.scale == pytest.approx(1.4)
    assert engine.zoom_label == "140%"

    engine.zoom_out()
    assert engine.zoom_label == "120%"


def test_zoom_in_clamps_at_max(engine: ImageViewerEngine) -> None:
    for _ in range(50):
        engine.zoom_in()
        assert engine.transform.scale <= MAX_SCALE

    assert engine.transform.scale == MAX_SCALE
    engine.zoom_in()
    assert engine.transform.scale == MAX_SCALE
    assert engine.can_zoom_in is False
    assert engine.zoom_label == "500%"


def test_zoom_out_clamps_at_min(engine: ImageViewerEngine) -> None:
    for _ in range(50):
        engine.zoom_out()
        assert engine.transform.scale >= MIN_SCALE

    assert engine.transform.scale == MIN_SCALE
    assert engine.can_zoom_out is False


def test_wheel_maps_to_single_step(engine: ImageViewerEngine) -> None:
    assert engine.wheel(WheelEvent(delta_y=-120)) is True
    assert engine.transform.scale == pytest.approx(1.2)

    engine.wheel(WheelEvent(delta_y=300))
    engine.wheel(WheelEvent(delta_y=1))
    assert engine.transform.scale == pytest.approx(0.8)

    assert engine.wheel(WheelEvent(delta_y=0)) is False


def test_drag_is_anchored_at_gesture_start(engine: ImageViewerEngine) -> None:
    engine.pointer_down(PointerEvent(100, 100))
    engine.pointer_move(PointerEvent(130, 90))
    assert (engine.transform.offset_x, engine.transform.offset_y) == (30, -10)
    engine.pointer_up()

    engine.pointer_move(PointerEvent(500, 500))
    assert (engine.transform.offset_x, engine.transform.offset_y) == (30, -10)

    engine.pointer_down(PointerEvent(200, 200))
    engine.pointer_move(PointerEvent(210, 200))
    assert (engine.transform.offset_x, engine.transform.offset_y) == (40, -10)


def test_right_button_does_not_drag(engine: ImageViewerEngine) -> None:
    engine.pointer_down(PointerEvent(0, 0, button=2))
    engine.pointer_move(PointerEvent(40, 40))

    assert engine.transform.offset_x == 0


def test_pointer_leave_ends_drag(engine: ImageViewerEngine) -> None:
    engine.pointer_down(PointerEvent(0, 0))
    engine.pointer_leave()
    engine.pointer_move(PointerEvent(40, 40))

    assert engine.transform.offset_x == 0


def test_single_finger_touch_pans(engine: ImageViewerEngine) -> None:
    engine.touch_start(TouchEvent(touches=(TouchPoint(10, 10),)))

    assert engine.touch_move(TouchEvent(touches=(TouchPoint(25, 5),))) is True
    assert (engine.transform.offset_x, engine.transform.offset_y) == (15, -5)

    two_fingers = TouchEvent(touches=(TouchPoint(0, 0), TouchPoint(5, 5)))
    assert engine.touch_move(two_fingers) is False
    engine.touch_end()
    assert engine.dragging is False


def test_rotation_cycles_and_resets_offset(engine: ImageViewerEngine) -> None:
    engine.pointer_down(PointerEvent(0, 0))
    engine.pointer_move(PointerEvent(20, 20))
    engine.pointer_up()

    engine.rotate_clockwise()
    assert engine.transform.rotation == 90
    assert (engine.transform.offset_x, engine.transform.offset_y) == (0, 0)

    for _ in range(3):
        engine.rotate_clockwise()
    assert engine.transform.rotation == 0


def test_reset_view_restores_defaults(engine: ImageViewerEngine) -> None:
    engine.zoom_in()
    engine.rotate_clockwise()

    engine.reset_view()

    assert engine.transform == ImageTransform()


def test_keyboard_shortcuts(engine: ImageViewerEngine) -> None:
    assert engine.key_down(KeyEvent("=", ctrl=True)) is True
    assert engine.key_down(KeyEvent("+", meta=True)) is True
    assert engine.zoom_label == "140%"
    assert engine.key_down(KeyEvent("-", ctrl=True)) is True
    assert engine.key_down(KeyEvent("0", ctrl=True)) is True
    assert engine.zoom_label == "100%"
    assert engine.key_down(KeyEvent("=")) is False


def test_load_failure_offers_reload() -> None:
    viewer = ImageViewerEngine()

    viewer.image_failed()

    assert viewer.reload_available
    assert viewer.load_error == "Failed to load image"
    viewer.zoom_in()
    assert viewer.transform.scale == 1.0

    viewer.image_loaded()
    assert not viewer.reload_available
