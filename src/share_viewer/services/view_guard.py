"""Session-scoped view-once consumption state."""

import logging
from dataclasses import dataclass, field

_logger = logging.getLogger(__name__)


@dataclass
class SessionViewGuard:
    """Tracks whether this session already consumed a view-once document.

    Created with the viewer session and discarded with it. The flag only ever
    moves from False to True.
    """

    _consumed: bool = field(default=False, init=False)

    @property
    def has_consumed_view_once(self) -> bool:
        """Return True once a view-once document was retrieved."""
        return self._consumed

    def consume(self) -> bool:
        """Mark the single view as used; return True if this call flipped it."""
        if self._consumed:
            return False
        self._consumed = True
        _logger.info("View-once document consumed for this session")
        return True
