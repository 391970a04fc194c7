"""Error taxonomy for share access and content loading."""


class ShareAccessError(Exception):
    """Base error for anything that stops a shared document from being shown."""

    kind: str = "share_access_error"
    retryable: bool = True
    default_message: str = "Failed to load document. Please try again later."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class MissingReferenceError(ShareAccessError):
    """The entry context carried no share token."""

    kind = "missing_reference"
    retryable = False
    default_message = (
        "Share ID is required. "
        "Please provide a valid share_id in the URL parameters."
    )


class AlreadyViewedError(ShareAccessError):
    """A view-once document was already consumed."""

    kind = "already_viewed"
    retryable = False
    default_message = (
        "This document can only be viewed once and has already been accessed."
    )


class DocumentExpiredError(ShareAccessError):
    """The document passed its expiry instant."""

    kind = "expired"
    retryable = False
    default_message = "This document has expired and is no longer available."


class AccessDeniedError(ShareAccessError):
    """The directory rejected the share (not found or forbidden)."""

    kind = "access_denied"
    default_message = (
        "Document not found or access denied. "
        "This document may have been viewed already or the link has expired."
    )


class DirectoryTimeoutError(ShareAccessError):
    """The directory lookup timed out."""

    kind = "timeout"
    default_message = (
        "Request timeout. Please check your internet connection and try again."
    )


class ContentUnavailableError(ShareAccessError):
    """The document content could not be fetched."""

    kind = "content_unavailable"
    default_message = (
        "Failed to load document content. "
        "The file may be corrupted or inaccessible."
    )


class UnknownFailureError(ShareAccessError):
    """Fallback for failures outside the known buckets."""

    kind = "unknown_failure"
