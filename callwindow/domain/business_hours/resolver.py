from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union
from pydantic import ValidationError

from .diagnostics import emit
from .models import DAY_NAMES, DayWindow, TraceEntry

DEFAULT_WINDOW = DayWindow(start="09:00", end="17:00", enabled=True)


@dataclass(frozen=True)
class DecodeError:
    message: str


def decode_window(raw: Any) -> Union[DayWindow, DecodeError]:
    """Decode a stored day field into a DayWindow, or describe why it can't be."""
    if raw is None:
        return DecodeError("missing")
    if isinstance(raw, DayWindow):
        return raw
    try:
        if isinstance(raw, (str, bytes)):
            return DayWindow.model_validate_json(raw)
        if isinstance(raw, Mapping):
            return DayWindow.model_validate(dict(raw))
    except ValidationError as e:
        return DecodeError(f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}")
    return DecodeError(f"unsupported type {type(raw).__name__}")


def resolve_window_traced(day_of_week: int, raw: Any) -> tuple[DayWindow, list[TraceEntry]]:
    decoded = decode_window(raw)
    if isinstance(decoded, DayWindow):
        return decoded, []
    entry = TraceEntry(
        level="info" if decoded.message == "missing" else "warning",
        event="window_fallback",
        detail=f"{DAY_NAMES[day_of_week]}: {decoded.message}; using {DEFAULT_WINDOW.start}-{DEFAULT_WINDOW.end}",
    )
    return DEFAULT_WINDOW, [entry]


def resolve_window(day_of_week: int, raw: Any) -> DayWindow:
    """Normalized window for a day (0=Sunday). Never raises: bad data yields DEFAULT_WINDOW."""
    window, trace = resolve_window_traced(day_of_week, raw)
    emit(trace, day_of_week=day_of_week)
    return window
