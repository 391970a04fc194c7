"""Viewer session controller: owns the access state of one open share."""

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

from share_viewer.domain.access import (
    AccessState,
    AlreadyViewed,
    Denied,
    Expired,
    Loading,
    Ready,
)
from share_viewer.domain.content import LoadedContent
from share_viewer.domain.records import DocumentRecord
from share_viewer.errors import (
    AccessDeniedError,
    AlreadyViewedError,
    DocumentExpiredError,
    ShareAccessError,
    UnknownFailureError,
)
from share_viewer.services.access_policy import AccessPolicy
from share_viewer.services.content_loader import ContentLoader
from share_viewer.services.countdown import format_time_left
from share_viewer.services.expiry_monitor import (
    ExpiryMonitor,
    MonitorHandle,
    utc_now,
)
from share_viewer.services.metadata import document_metadata
from share_viewer.services.share_resolver import extract_share_token
from share_viewer.services.view_guard import SessionViewGuard
from share_viewer.viewers.dispatch import ContentView, build_view, describe_view
from share_viewer.viewers.screenshot_guard import ScreenshotGuard

_logger = logging.getLogger(__name__)


@dataclass
class ViewerSession:
    """Runs the access sequence for a share and owns everything it opens.

    Every failure is converted into an ``AccessState``; nothing raised by the
    policy, the directory or the content store escapes ``open``/``retry``.
    Watchers started while Ready are released on every exit from Ready.
    """

    policy: AccessPolicy
    content_loader: ContentLoader
    expiry_monitor: ExpiryMonitor
    clock: Callable[[], datetime] = field(default=utc_now)
    guard: SessionViewGuard = field(default_factory=SessionViewGuard)
    session_id: str = field(default_factory=lambda: uuid4().hex)
    state: AccessState = field(default_factory=Loading)
    content: LoadedContent | None = None
    view: ContentView | None = None
    screenshot_guard: ScreenshotGuard | None = None
    _params: dict[str, str] = field(default_factory=dict, repr=False)
    _monitor: MonitorHandle | None = field(default=None, repr=False)
    _request_token: int = field(default=0, repr=False)
    _closed: bool = field(default=False, repr=False)

    @property
    def record(self) -> DocumentRecord | None:
        if isinstance(self.state, Ready):
            return self.state.record
        return None

    @property
    def closed(self) -> bool:
        return self._closed

    async def open(self, params: Mapping[str, str]) -> AccessState:
        """Start the access sequence from the entry parameters."""
        if self._closed:
            return self.state
        self._params = dict(params)
        return await self._run()

    async def retry(self) -> AccessState:
        """Re-run the whole sequence; only allowed from a retryable state."""
        if self._closed or not self.state.retryable:
            return self.state
        _logger.info("Retrying session %s", self.session_id)
        return await self._run()

    def expire(self, reason: str = DocumentExpiredError.default_message) -> None:
        """Collapse an open document to the expired state."""
        if not isinstance(self.state, Ready):
            return
        _logger.info("Session %s expired while open", self.session_id)
        self._request_token += 1
        self._teardown()
        self.state = Expired(reason)

    def reload_view(self) -> None:
        """Recreate the viewer from the already loaded content."""
        record = self.record
        if record is None or self.content is None:
            return
        self.view = build_view(self.content, record)

    def close(self) -> None:
        """Release every watcher; the session cannot be reopened."""
        if self._closed:
            return
        self._closed = True
        self._request_token += 1
        self._teardown()
        _logger.info("Session %s closed", self.session_id)

    def snapshot(self) -> dict[str, object]:
        """Return a plain view of the session for the HTTP surface."""
        state = self.state
        data: dict[str, object] = {
            "session_id": self.session_id,
            "state": state.kind,
            "retryable": state.retryable,
        }
        if isinstance(state, Denied):
            data["error_kind"] = state.error_kind
        if isinstance(state, Denied | Expired | AlreadyViewed):
            data["reason"] = state.reason
        record = self.record
        if record is None:
            return data
        data["metadata"] = document_metadata(record)
        data["watermark"] = record.watermark_enabled
        data["no_download"] = record.no_download
        if record.expiry_instant is not None:
            data["expires_in"] = format_time_left(record.expiry_instant, self.clock())
        if self.content is not None:
            data["category"] = str(self.content.category)
        if self.view is not None:
            data["view"] = describe_view(self.view)
        if self.screenshot_guard is not None:
            data["blanked"] = self.screenshot_guard.blanked
        return data

    async def _run(self) -> AccessState:
        self._teardown()
        self._request_token += 1
        token = self._request_token
        self.state = Loading()
        try:
            share_token = extract_share_token(self._params)
            decision = await self.policy.evaluate(share_token, self.guard, self.clock())
        except ShareAccessError as exc:
            return self._fail(exc, token)
        except Exception:
            _logger.exception("Unexpected failure evaluating session %s", self.session_id)
            return self._fail(UnknownFailureError(), token)

        if token != self._request_token:
            _logger.info("Discarding superseded evaluation for %s", self.session_id)
            return self.state
        self.state = Ready(decision.record)
        self._monitor = self.expiry_monitor.start(decision.record, self.expire)
        await self._load_content(decision.record, token)
        return self.state

    async def _load_content(self, record: DocumentRecord, token: int) -> None:
        try:
            content = await self.content_loader.load(record)
        except ShareAccessError as exc:
            self._fail(exc, token)
            return
        except Exception:
            _logger.exception("Unexpected failure loading content for %s", self.session_id)
            self._fail(UnknownFailureError(), token)
            return
        if token != self._request_token or self.record is not record:
            _logger.info("Discarding superseded content for %s", self.session_id)
            return
        self.content = content
        self.view = build_view(content, record)
        self.screenshot_guard = ScreenshotGuard.for_record(record)

    def _fail(self, exc: ShareAccessError, token: int) -> AccessState:
        if token != self._request_token:
            _logger.info("Ignoring stale failure for %s: %r", self.session_id, exc)
            return self.state
        self._teardown()
        self.state = self._state_for(exc)
        _logger.info("Session %s -> %s (%s)", self.session_id, self.state.kind, exc.kind)
        return self.state

    def _state_for(self, exc: ShareAccessError) -> AccessState:
        if isinstance(exc, AlreadyViewedError):
            return AlreadyViewed(exc.message)
        if isinstance(exc, DocumentExpiredError):
            return Expired(exc.message)
        retryable = exc.retryable
        if isinstance(exc, AccessDeniedError):
            retryable = not self.guard.has_consumed_view_once
        return Denied(reason=exc.message, error_kind=exc.kind, retryable=retryable)

    def _teardown(self) -> None:
        if self._monitor is not None:
            self._monitor.release()
            self._monitor = None
        if self.screenshot_guard is not None:
            self.screenshot_guard.close()
            self.screenshot_guard = None
        self.content = None
        self.view = None


@dataclass
class SessionRegistry:
    """In-memory registry of open viewer sessions.

    Sessions idle for ``idle_seconds`` are closed and dropped, and creating a
    session beyond ``max_sessions`` closes the least recently used one.
    """

    factory: Callable[[str], ViewerSession]
    max_sessions: int = 1000
    idle_seconds: float = 1800
    clock: Callable[[], float] = field(default=time.monotonic)
    sessions: dict[str, ViewerSession] = field(default_factory=dict)
    _last_seen: dict[str, float] = field(default_factory=dict, init=False, repr=False)

    def create(self, origin: str) -> ViewerSession:
        """Create a session whose directory lookups default to ``origin``."""
        self.evict_idle()
        while self.sessions and len(self.sessions) >= self.max_sessions:
            oldest = min(self._last_seen, key=self._last_seen.__getitem__)
            _logger.info("Session limit reached; evicting %s", oldest)
            self.close(oldest)
        session = self.factory(origin)
        self.sessions[session.session_id] = session
        self._last_seen[session.session_id] = self.clock()
        return session

    def get(self, session_id: str) -> ViewerSession | None:
        self.evict_idle()
        session = self.sessions.get(session_id)
        if session is not None:
            self._last_seen[session_id] = self.clock()
        return session

    def evict_idle(self) -> int:
        """Close sessions not touched within ``idle_seconds``."""
        cutoff = self.clock() - self.idle_seconds
        stale = [
            session_id
            for session_id, seen in self._last_seen.items()
            if seen <= cutoff
        ]
        for session_id in stale:
            _logger.info("Evicting idle session %s", session_id)
            self.close(session_id)
        return len(stale)

    def close(self, session_id: str) -> bool:
        self._last_seen.pop(session_id, None)
        session = self.sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        return True

    def close_all(self) -> None:
        for session_id in list(self.sessions):
            self.close(session_id)
