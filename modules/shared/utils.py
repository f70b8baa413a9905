from datetime import datetime, timezone
from typing import Optional

SEVERITY_COLORS = {
    "low": "blue",
    "medium": "yellow",
    "high": "orange",
    "critical": "red",
}

STATUS_COLORS = {
    "active": "red",
    "investigating": "yellow",
    "resolved": "green",
}


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_relative_time(created_at: datetime, now: Optional[datetime] = None) -> str:
    """
    Short age of a timestamp: minutes under an hour, hours under a day, days otherwise.
    e.g. "5m ago", "3h ago", "2d ago"
    """
    now = _as_utc(now) if now else datetime.now(timezone.utc)
    diff_seconds = (now - _as_utc(created_at)).total_seconds()
    diff_mins = int(diff_seconds // 60)
    diff_hours = int(diff_seconds // 3600)
    diff_days = int(diff_seconds // 86400)

    if diff_mins < 60:
        return f"{diff_mins}m ago"
    if diff_hours < 24:
        return f"{diff_hours}h ago"
    return f"{diff_days}d ago"


def format_date(value: datetime) -> str:
    """M/D/YYYY"""
    return f"{value.month}/{value.day}/{value.year}"


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"
