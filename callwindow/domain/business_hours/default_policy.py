from __future__ import annotations
from datetime import datetime

from .models import DAY_NAMES, DayWindow, EvaluationResult, TraceEntry
from .zones import day_of_week

DEFAULT_POLICY_START_HOUR = 8
DEFAULT_POLICY_END_HOUR = 20  # exclusive
DEFAULT_POLICY_WINDOW = DayWindow(start="08:00", end="20:00", enabled=True)


def evaluate_default(candidate: datetime) -> EvaluationResult:
    """Fallback for tenants with no business-hours record: weekdays 08:00-20:00.

    The candidate's wall-clock fields are used as-is, no timezone conversion.
    Hours are [8, 20): 08:00 is allowed, 20:00 is not. No next allowed time is
    computed on this path.
    """
    dow = day_of_week(candidate)
    day_name = DAY_NAMES[dow]
    time_string = candidate.strftime("%H:%M")
    trace = (TraceEntry(level="info", event="default_policy", detail="no business hours configured"),)

    if dow in (0, 6):
        return EvaluationResult(
            allowed=False,
            reason=f"Default policy: Weekend calling not allowed on {day_name}",
            evaluated_day=day_name,
            evaluated_time=time_string,
            trace=trace,
        )

    if DEFAULT_POLICY_START_HOUR <= candidate.hour < DEFAULT_POLICY_END_HOUR:
        return EvaluationResult(
            allowed=True,
            evaluated_window=DEFAULT_POLICY_WINDOW,
            evaluated_day=day_name,
            evaluated_time=time_string,
            trace=trace,
        )

    return EvaluationResult(
        allowed=False,
        reason=(
            f"Default policy: Outside business hours "
            f"({DEFAULT_POLICY_WINDOW.start} - {DEFAULT_POLICY_WINDOW.end}) on {day_name}"
        ),
        evaluated_day=day_name,
        evaluated_time=time_string,
        trace=trace,
    )
