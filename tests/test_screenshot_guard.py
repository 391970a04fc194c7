"""Tests for the screenshot guard."""

from dataclasses import dataclass

import pytest

from share_viewer.domain.input_events import KeyEvent
from share_viewer.viewers.screenshot_guard import (
    DEFAULT_BLANK_SECONDS,
    GuardReaction,
    GuardSignal,
    ScreenshotGuard,
    is_devtools_shortcut,
    is_screenshot_shortcut,
)
from tests.conftest import make_record


@dataclass
class ManualClock:
    value: float = 100.0

    def __call__(self) -> float:
        return self.value


def _guard(clock: ManualClock) -> ScreenshotGuard:
    return ScreenshotGuard(enabled=True, clock=clock)


def test_disabled_guard_never_reacts() -> None:
    guard = ScreenshotGuard.for_record(make_record(no_screenshots=False))

    reaction = guard.handle(GuardSignal.KEY_DOWN, KeyEvent("F12"))

    assert reaction == GuardReaction()
    assert guard.handle(GuardSignal.CONTEXT_MENU) == GuardReaction()
    assert guard.suppresses_context_menu is False


def test_blur_blanks_for_interval() -> None:
    clock = ManualClock()
    guard = _guard(clock)

    reaction = guard.handle(GuardSignal.WINDOW_BLUR)

    assert reaction == GuardReaction(blanked=True)
    assert guard.blanked
    clock.value += DEFAULT_BLANK_SECONDS[GuardSignal.WINDOW_BLUR] + 0.01
    assert not guard.blanked


def test_pointer_leave_uses_short_interval() -> None:
    clock = ManualClock()
    guard = _guard(clock)

    guard.handle(GuardSignal.POINTER_LEAVE)
    clock.value += 0.2

    assert not guard.blanked


@pytest.mark.parametrize(
    "key",
    [
        KeyEvent("F12"),
        KeyEvent("I", ctrl=True, shift=True),
        KeyEvent("j", meta=True, alt=True),
        KeyEvent("u", ctrl=True),
    ],
)
def test_devtools_shortcuts_are_prevented(key: KeyEvent) -> None:
    guard = _guard(ManualClock())

    assert is_devtools_shortcut(key)
    assert guard.handle(GuardSignal.KEY_DOWN, key) == GuardReaction(
        blanked=True, prevent_default=True
    )


@pytest.mark.parametrize(
    "key",
    [
        KeyEvent("PrintScreen"),
        KeyEvent("4", meta=True, shift=True),
        KeyEvent("S", meta=True, shift=True),
    ],
)
def test_screenshot_shortcuts_blank(key: KeyEvent) -> None:
    guard = _guard(ManualClock())

    assert is_screenshot_shortcut(key)
    assert guard.handle(GuardSignal.KEY_DOWN, key) == GuardReaction(blanked=True)
    assert guard.blanked


def test_ordinary_keys_are_ignored() -> None:
    guard = _guard(ManualClock())

    assert guard.handle(GuardSignal.KEY_DOWN, KeyEvent("a")) == GuardReaction()
    assert guard.handle(GuardSignal.KEY_DOWN) == GuardReaction()
    assert not guard.blanked


def test_context_menu_is_suppressed() -> None:
    guard = ScreenshotGuard.for_record(make_record(no_screenshots=True))

    assert guard.handle(GuardSignal.CONTEXT_MENU) == GuardReaction(
        prevent_default=True
    )
    assert guard.suppresses_context_menu


def test_closed_guard_is_inert() -> None:
    guard = _guard(ManualClock())
    guard.handle(GuardSignal.WINDOW_BLUR)

    guard.close()

    assert not guard.blanked
    assert guard.handle(GuardSignal.VISIBILITY_HIDDEN) == GuardReaction()


def test_internal_failures_degrade_to_noop() -> None:
    guard = ScreenshotGuard(enabled=True, blank_seconds={}, clock=ManualClock())

    assert guard.handle(GuardSignal.WINDOW_BLUR) == GuardReaction()


def test_overlapping_blanks_keep_the_longest_interval() -> None:
    clock = ManualClock()
    guard = _guard(clock)

    guard.handle(GuardSignal.VISIBILITY_HIDDEN)
    clock.value += 0.05
    guard.handle(GuardSignal.POINTER_LEAVE)
    clock.value += 0.2

    assert guard.blanked
    clock.value += 0.3
    assert not guard.blanked
