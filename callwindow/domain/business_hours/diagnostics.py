from __future__ import annotations
from collections.abc import Iterable
import structlog

from .models import TraceEntry

log = structlog.get_logger()


def emit(trace: Iterable[TraceEntry], **context) -> None:
    """Forward trace entries to the process log as business_hours_<event>."""
    for entry in trace:
        method = log.warning if entry.level == "warning" else log.info
        method(f"business_hours_{entry.event}", detail=entry.detail, **context)
