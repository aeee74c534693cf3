from __future__ import annotations
from datetime import datetime
from typing import Optional
import structlog

from .default_policy import evaluate_default
from .diagnostics import emit
from .models import DAY_NAMES, BusinessHoursConfig, EvaluationResult, TraceEntry
from .next_slot import search_next_slot
from .resolver import resolve_window_traced
from .zones import as_utc, day_of_week, load_zone

log = structlog.get_logger()


def evaluate_traced(
    candidate: datetime,
    tenant_timezone: Optional[str] = None,
    hours_config: Optional[BusinessHoursConfig] = None,
) -> EvaluationResult:
    """Pure evaluation; diagnostics are carried on result.trace instead of logged."""
    if hours_config is None:
        return evaluate_default(candidate)

    zone, trace = load_zone(hours_config.timezone or tenant_timezone)
    candidate = as_utc(candidate)
    local = candidate.astimezone(zone)
    dow = day_of_week(local)
    day_name = DAY_NAMES[dow]
    time_string = local.strftime("%H:%M")

    window, entries = resolve_window_traced(dow, hours_config.day_field(dow))
    trace.extend(entries)

    if not window.enabled:
        reason = f"{day_name} is not a business day"
    elif window.start <= time_string <= window.end:
        # zero-padded HH:MM compares lexicographically in chronological order
        return EvaluationResult(
            allowed=True,
            evaluated_window=window,
            evaluated_day=day_name,
            evaluated_time=time_string,
            timezone=zone.key,
            trace=tuple(trace),
        )
    else:
        reason = f"Outside business hours ({window.start} - {window.end}) on {day_name}"

    trace.append(TraceEntry(level="info", event="denied", detail=reason))
    next_time, search_trace = search_next_slot(candidate, hours_config, zone)
    trace.extend(e for e in search_trace if e not in trace)
    return EvaluationResult(
        allowed=False,
        reason=reason,
        next_allowed_time=next_time,
        evaluated_window=window,
        evaluated_day=day_name,
        evaluated_time=time_string,
        timezone=zone.key,
        trace=tuple(trace),
    )


def evaluate(
    candidate: datetime,
    tenant_timezone: Optional[str] = None,
    hours_config: Optional[BusinessHoursConfig] = None,
) -> EvaluationResult:
    """Decide whether an outbound call may start at candidate.

    Timezone precedence: hours_config.timezone, then tenant_timezone, then
    Europe/London. Without hours_config the default weekday policy applies.
    """
    result = evaluate_traced(candidate, tenant_timezone, hours_config)
    emit((t for t in result.trace if t.level == "warning"), timezone=result.timezone)
    log.info(
        "business_hours_evaluated",
        allowed=result.allowed,
        day=result.evaluated_day,
        local_time=result.evaluated_time,
        timezone=result.timezone,
        reason=result.reason,
    )
    return result
