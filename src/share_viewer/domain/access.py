"""Access states for a viewer session."""

from dataclasses import dataclass

from share_viewer.domain.records import DocumentRecord


@dataclass(frozen=True)
class Loading:
    """The access evaluation is in flight."""

    kind = "loading"
    retryable = False


@dataclass(frozen=True)
class Ready:
    """The document may be shown."""

    record: DocumentRecord
    kind = "ready"
    retryable = False


@dataclass(frozen=True)
class Denied:
    """The document cannot be shown; ``reason`` is user-facing."""

    reason: str
    error_kind: str = "unknown_failure"
    retryable: bool = True
    kind = "denied"


@dataclass(frozen=True)
class Expired:
    """The document passed its expiry instant."""

    reason: str = "This document has expired and is no longer available."
    kind = "expired"
    retryable = False


@dataclass(frozen=True)
class AlreadyViewed:
    """A view-once document was already consumed in this session."""

    reason: str = (
        "This document can only be viewed once and has already been accessed."
    )
    kind = "already_viewed"
    retryable = False


AccessState = Loading | Ready | Denied | Expired | AlreadyViewed
