"""Expiry instants for shared documents.

The directory always emits UTC, so a timestamp without an explicit zone or
offset is read as UTC rather than local time.
"""

from datetime import UTC, datetime


def parse_expiry(value: str | datetime | None) -> datetime | None:
    """Parse an expiry timestamp into an aware UTC datetime.

    Returns ``None`` when no expiry is set. Raises ``ValueError`` for values
    that are not ISO-8601.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    cleaned = value.strip()
    if not cleaned:
        return None
    return _as_utc(datetime.fromisoformat(cleaned))


def is_expired(expiry_instant: datetime | None, now: datetime) -> bool:
    """Return True once ``now`` has reached the expiry instant."""
    if expiry_instant is None:
        return False
    return _as_utc(now) >= _as_utc(expiry_instant)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
