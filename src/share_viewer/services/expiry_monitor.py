"""Background expiry re-check for open documents."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from share_viewer.domain.expiry import is_expired
from share_viewer.domain.records import DocumentRecord
from share_viewer.errors import DocumentExpiredError

_logger = logging.getLogger(__name__)

EXPIRED_REASON = DocumentExpiredError.default_message


def utc_now() -> datetime:
    """Return the current UTC time."""
    return datetime.now(tz=UTC)


@dataclass
class MonitorHandle:
    """Running expiry poll; ``release`` stops it."""

    task: asyncio.Task[None]

    @property
    def active(self) -> bool:
        """Return True while the poll is still scheduled."""
        return not self.task.done()

    def release(self) -> None:
        """Cancel the poll. Safe to call more than once."""
        if not self.task.done():
            self.task.cancel()


@dataclass
class ExpiryMonitor:
    """Polls a record's expiry instant while the document is open."""

    interval_seconds: float = 60
    clock: Callable[[], datetime] = field(default=utc_now)

    def start(
        self,
        record: DocumentRecord,
        on_expired: Callable[[str], None],
    ) -> MonitorHandle | None:
        """Start polling; returns None when the record never expires."""
        if record.expiry_instant is None:
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            _logger.warning("Expiry monitor needs a running event loop; not started")
            return None
        task = loop.create_task(self._poll(record.expiry_instant, on_expired))
        return MonitorHandle(task=task)

    async def _poll(
        self, expiry_instant: datetime, on_expired: Callable[[str], None]
    ) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                expired = is_expired(expiry_instant, self.clock())
            except Exception:
                _logger.exception("Expiry check failed; monitor stopped")
                return
            if not expired:
                continue
            _logger.info("Open document expired at %s", expiry_instant)
            try:
                on_expired(EXPIRED_REASON)
            except Exception:
                _logger.exception("Expiry callback failed")
            return
