from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from .diagnostics import emit
from .models import DAY_NAMES, BusinessHoursConfig, TraceEntry
from .resolver import resolve_window_traced
from .zones import as_utc, day_of_week, load_zone

SEARCH_HORIZON_DAYS = 7
SENTINEL_DEFERRAL = timedelta(days=30)


def search_next_slot(
    candidate: datetime,
    hours_config: Optional[BusinessHoursConfig],
    zone: ZoneInfo,
) -> tuple[datetime, list[TraceEntry]]:
    """Earliest enabled window start strictly after candidate, within the horizon.

    Days are walked on the tenant's local calendar starting with the candidate's
    own date. A window start inside a DST gap resolves with fold=0, i.e. it is
    pushed forward by the length of the gap.
    """
    candidate = as_utc(candidate)
    first_date = candidate.astimezone(zone).date()
    trace: list[TraceEntry] = []

    for offset in range(SEARCH_HORIZON_DAYS):
        day = first_date + timedelta(days=offset)
        dow = day_of_week(day)
        raw = hours_config.day_field(dow) if hours_config is not None else None
        window, entries = resolve_window_traced(dow, raw)
        trace.extend(e for e in entries if e not in trace)
        if not window.enabled:
            continue
        hh, mm = window.start.split(":")
        opens = datetime(day.year, day.month, day.day, int(hh), int(mm), tzinfo=zone).astimezone(timezone.utc)
        if opens > candidate:
            trace.append(TraceEntry(level="info", event="next_slot", detail=f"{DAY_NAMES[dow]} {day.isoformat()} {window.start}"))
            return opens, trace

    trace.append(
        TraceEntry(
            level="warning",
            event="search_exhausted",
            detail=f"no enabled window within {SEARCH_HORIZON_DAYS} days; deferring {SENTINEL_DEFERRAL.days} days",
        )
    )
    return candidate + SENTINEL_DEFERRAL, trace


def next_allowed_time(
    candidate: datetime,
    hours_config: Optional[BusinessHoursConfig],
    timezone_name: Optional[str] = None,
) -> datetime:
    """Next instant (UTC) at which a business window opens; always > candidate.

    hours_config.timezone wins over timezone_name, as in evaluation.
    """
    configured = hours_config.timezone if hours_config is not None else None
    zone, trace = load_zone(configured or timezone_name)
    when, search_trace = search_next_slot(candidate, hours_config, zone)
    emit(trace + search_trace, timezone=zone.key)
    return when


def is_sentinel_deferral(candidate: datetime, next_time: datetime) -> bool:
    """True when next_time is the fixed misconfiguration deferral, not a real window."""
    return as_utc(next_time) - as_utc(candidate) == SENTINEL_DEFERRAL
