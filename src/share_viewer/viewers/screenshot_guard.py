"""Best-effort screenshot deterrent.

This is a UX deterrent, not a security control: no client-side technique can
reliably prevent capture. The guard blanks content for a short interval when a
capture looks likely and never raises into its caller. Blanking lapses by
clock; hosts read ``blanked`` when they render.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

from share_viewer.domain.input_events import KeyEvent
from share_viewer.domain.records import DocumentRecord

_logger = logging.getLogger(__name__)


class GuardSignal(StrEnum):
    """Host UI signals the guard reacts to."""

    WINDOW_BLUR = "window_blur"
    VISIBILITY_HIDDEN = "visibility_hidden"
    POINTER_LEAVE = "pointer_leave"
    KEY_DOWN = "key_down"
    CONTEXT_MENU = "context_menu"


DEFAULT_BLANK_SECONDS: dict[GuardSignal, float] = {
    GuardSignal.WINDOW_BLUR: 0.5,
    GuardSignal.VISIBILITY_HIDDEN: 0.5,
    GuardSignal.POINTER_LEAVE: 0.1,
    GuardSignal.KEY_DOWN: 0.3,
}

_SCREENSHOT_MAC_KEYS = {"3", "4", "5"}
_DEVTOOLS_LETTERS = {"i", "j", "c"}


@dataclass(frozen=True)
class GuardReaction:
    """What the host should do with the event."""

    blanked: bool = False
    prevent_default: bool = False


NO_REACTION = GuardReaction()


def is_screenshot_shortcut(event: KeyEvent) -> bool:
    """PrintScreen, macOS Cmd+Shift+3/4/5 and Win+Shift+S."""
    key = event.key.lower()
    if key == "printscreen":
        return True
    if event.meta and event.shift:
        return key in _SCREENSHOT_MAC_KEYS or key == "s"
    return False


def is_devtools_shortcut(event: KeyEvent) -> bool:
    """F12, Ctrl/Cmd+Shift+I/J/C, Cmd+Option+I/J/C and Ctrl+U."""
    key = event.key.lower()
    if key == "f12":
        return True
    if event.command and event.shift and key in _DEVTOOLS_LETTERS:
        return True
    if event.meta and event.alt and key in _DEVTOOLS_LETTERS:
        return True
    return event.ctrl and key == "u"


@dataclass
class ScreenshotGuard:
    """Blanks rendered content on suspected capture signals."""

    enabled: bool
    blank_seconds: dict[GuardSignal, float] = field(
        default_factory=lambda: dict(DEFAULT_BLANK_SECONDS)
    )
    clock: Callable[[], float] = field(default=time.monotonic)
    _blanked_until: float = field(default=0.0, init=False, repr=False)
    _closed: bool = field(default=False, init=False, repr=False)

    @classmethod
    def for_record(cls, record: DocumentRecord) -> "ScreenshotGuard":
        """Create a guard that is enabled when the record forbids screenshots."""
        return cls(enabled=record.no_screenshots)

    @property
    def blanked(self) -> bool:
        if not self.enabled or self._closed:
            return False
        return self.clock() < self._blanked_until

    @property
    def suppresses_context_menu(self) -> bool:
        return self.enabled and not self._closed

    def handle(self, signal: GuardSignal, key: KeyEvent | None = None) -> GuardReaction:
        """React to a host signal; failures degrade to no reaction."""
        if not self.enabled or self._closed:
            return NO_REACTION
        try:
            return self._react(signal, key)
        except Exception:
            _logger.exception("Screenshot guard failed handling %s", signal)
            return NO_REACTION

    def close(self) -> None:
        """Stop reacting; a closed guard never reports blanked."""
        self._closed = True

    def _react(self, signal: GuardSignal, key: KeyEvent | None) -> GuardReaction:
        if signal is GuardSignal.CONTEXT_MENU:
            return GuardReaction(prevent_default=True)
        if signal is GuardSignal.KEY_DOWN:
            if key is None:
                return NO_REACTION
            if is_devtools_shortcut(key):
                self._blank(self.blank_seconds[GuardSignal.KEY_DOWN])
                return GuardReaction(blanked=True, prevent_default=True)
            if is_screenshot_shortcut(key):
                self._blank(self.blank_seconds[GuardSignal.KEY_DOWN])
                return GuardReaction(blanked=True)
            return NO_REACTION
        self._blank(self.blank_seconds[signal])
        return GuardReaction(blanked=True)

    def _blank(self, seconds: float) -> None:
        self._blanked_until = max(self._blanked_until, self.clock() + seconds)
