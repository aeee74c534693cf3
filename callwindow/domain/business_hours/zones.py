from __future__ import annotations
from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .models import TraceEntry

DEFAULT_TIMEZONE = "Europe/London"


def as_utc(when: datetime) -> datetime:
    """Absolute instant in UTC. Naive datetimes are taken to be UTC already."""
    if when.tzinfo is None:
        return when.replace(tzinfo=timezone.utc)
    return when.astimezone(timezone.utc)


def load_zone(name: Optional[str]) -> tuple[ZoneInfo, list[TraceEntry]]:
    if not name:
        return ZoneInfo(DEFAULT_TIMEZONE), []
    try:
        return ZoneInfo(name), []
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        entry = TraceEntry(
            level="warning",
            event="timezone_fallback",
            detail=f"unknown timezone {name!r} ({e.__class__.__name__}); using {DEFAULT_TIMEZONE}",
        )
        return ZoneInfo(DEFAULT_TIMEZONE), [entry]


def day_of_week(local: date) -> int:
    # isoweekday: Monday=1..Sunday=7
    return local.isoweekday() % 7
