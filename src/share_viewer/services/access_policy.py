"""Access policy for shared documents."""

import logging
from dataclasses import dataclass
from datetime import datetime

from share_viewer.domain.expiry import is_expired
from share_viewer.domain.records import DocumentRecord
from share_viewer.errors import (
    AlreadyViewedError,
    DocumentExpiredError,
    MissingReferenceError,
)
from share_viewer.services.share_resolver import ShareResolver
from share_viewer.services.view_guard import SessionViewGuard

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessDecision:
    """A successful evaluation: the record may be shown."""

    record: DocumentRecord
    consumed_view_once: bool = False


@dataclass
class AccessPolicy:
    """Decides whether a shared document may be shown.

    Failures are raised as ``ShareAccessError`` subclasses; the viewer session
    turns them into access states.
    """

    resolver: ShareResolver

    async def evaluate(
        self,
        share_token: str | None,
        guard: SessionViewGuard,
        now: datetime,
    ) -> AccessDecision:
        """Evaluate access for a share token at ``now``."""
        if not share_token:
            raise MissingReferenceError()
        if guard.has_consumed_view_once:
            raise AlreadyViewedError()

        record = await self.resolver.resolve(share_token)

        # No await between here and the guard write.
        if is_expired(record.expiry_instant, now):
            _logger.info("Share %s expired at %s", share_token, record.expiry_instant)
            raise DocumentExpiredError()
        consumed = guard.consume() if record.view_once else False
        return AccessDecision(record=record, consumed_view_once=consumed)
