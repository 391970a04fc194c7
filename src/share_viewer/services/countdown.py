"""Countdown to a document's expiry."""

from dataclasses import dataclass
from datetime import datetime

from share_viewer.domain.expiry import is_expired

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE
_MS_PER_DAY = 24 * _MS_PER_HOUR

EXPIRED_LABEL = "EXPIRED"


@dataclass(frozen=True)
class TimeLeft:
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    total_ms: int = 0

    @property
    def expired(self) -> bool:
        return self.total_ms <= 0


def time_left(expiry_instant: datetime, now: datetime) -> TimeLeft:
    """Split the remaining time into display units; all zero once expired."""
    if is_expired(expiry_instant, now):
        return TimeLeft()
    if now.tzinfo is None:
        now = now.replace(tzinfo=expiry_instant.tzinfo)
    total_ms = int((expiry_instant - now).total_seconds() * _MS_PER_SECOND)
    return TimeLeft(
        days=total_ms // _MS_PER_DAY,
        hours=(total_ms % _MS_PER_DAY) // _MS_PER_HOUR,
        minutes=(total_ms % _MS_PER_HOUR) // _MS_PER_MINUTE,
        seconds=(total_ms % _MS_PER_MINUTE) // _MS_PER_SECOND,
        total_ms=total_ms,
    )


def format_time_left(expiry_instant: datetime, now: datetime) -> str:
    """Format the countdown as ``Nd HH:MM:SS``, ``HH:MM:SS`` or EXPIRED."""
    remaining = time_left(expiry_instant, now)
    if remaining.expired:
        return EXPIRED_LABEL
    clock = f"{remaining.hours:02d}:{remaining.minutes:02d}:{remaining.seconds:02d}"
    if remaining.days > 0:
        return f"{remaining.days}d {clock}"
    return clock
