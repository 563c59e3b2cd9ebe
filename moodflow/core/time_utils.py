"""
Time helpers.

Timestamps are stored as timezone-aware UTC datetimes; statistics bucket them
into calendar days of a configured time zone.
"""
from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from moodflow.core.logging_config import log_warning


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def get_zone(name: Optional[str]) -> tzinfo:
    """Resolve an IANA zone name, falling back to UTC."""
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        log_warning(f"Unknown time zone '{name}', using UTC")
        return timezone.utc


def local_today(tz: Optional[tzinfo] = None) -> date:
    """Today's date in ``tz`` (the machine's local zone when omitted)."""
    if tz is None:
        return datetime.now().astimezone().date()
    return datetime.now(tz).date()
