from datetime import datetime, timezone
from typing import Optional

import pytz


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes (SQLite drops the offset) as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_local_time(value: datetime, tz_name: str) -> str:
    """Render an instant as HH:MM:SS in the given IANA timezone."""
    try:
        tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        tz = pytz.utc
    return as_utc(value).astimezone(tz).strftime("%H:%M:%S")
