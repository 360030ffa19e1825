"""
Centralized Utilities for Time Handling in Quizzy.
Goal: timezone-aware UTC in memory, epoch milliseconds in stored documents.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

MS_PER_DAY = 86_400_000


def utcnow() -> datetime:
    """
    Get the current timezone-aware UTC datetime.
    Always use this instead of datetime.utcnow() or datetime.now().
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_epoch_ms(dt: Optional[datetime]) -> Optional[int]:
    if dt is None:
        return None
    return int(round(ensure_utc(dt).timestamp() * 1000))


def from_epoch_ms(value) -> Optional[datetime]:
    """
    Parse a stored timestamp.

    Accepts epoch milliseconds (the persisted document format), an ISO-8601
    string, or a datetime.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str):
        try:
            return ensure_utc(datetime.fromisoformat(value.replace('Z', '+00:00')))
        except ValueError:
            value = float(value)
    return datetime.fromtimestamp(float(value) / 1000.0, tz=timezone.utc)


def add_days(dt: datetime, days: int) -> datetime:
    """Offset ``dt`` by whole days (``days * MS_PER_DAY`` milliseconds)."""
    return ensure_utc(dt) + timedelta(milliseconds=days * MS_PER_DAY)
