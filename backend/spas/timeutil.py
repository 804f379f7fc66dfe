from datetime import datetime, timedelta, timezone
from typing import Literal

Period = Literal["1h", "6h", "24h", "7d"]

PERIOD_WINDOWS: dict[str, timedelta] = {
    "1h": timedelta(hours=1),
    "6h": timedelta(hours=6),
    "24h": timedelta(hours=24),
    "7d": timedelta(days=7),
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC so stored values always compare."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_datetime(val) -> datetime | None:
    if val is None:
        return None
    if isinstance(val, datetime):
        return as_utc(val)
    try:
        return as_utc(datetime.fromisoformat(str(val).strip().replace("Z", "+00:00")))
    except (ValueError, TypeError):
        return None


def period_cutoff(period: str, now: datetime) -> datetime:
    return now - PERIOD_WINDOWS[period]
