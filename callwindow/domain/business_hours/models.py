from __future__ import annotations
from datetime import datetime
from typing import Any, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

HHMM_PATTERN = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
DAY_FIELDS = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")


class DayWindow(BaseModel):
    """Local business window for one day of the week (zero-padded HH:MM)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    start: str = Field(pattern=HHMM_PATTERN)
    end: str = Field(pattern=HHMM_PATTERN)
    enabled: bool = True


class TenantTimeConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    timezone: Optional[str] = None


class BusinessHoursConfig(BaseModel):
    """Per-day raw window fields as stored by the tenant.

    Each field may hold a JSON-encoded string, a mapping, a DayWindow, None
    or anything else; decoding happens in the resolver, never here.
    """

    model_config = ConfigDict(frozen=True)

    timezone: Optional[str] = None
    sunday: Any = None
    monday: Any = None
    tuesday: Any = None
    wednesday: Any = None
    thursday: Any = None
    friday: Any = None
    saturday: Any = None

    def day_field(self, day_of_week: int) -> Any:
        """Raw field for 0=Sunday..6=Saturday."""
        return getattr(self, DAY_FIELDS[day_of_week])


class TraceEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: Literal["info", "warning"]
    event: str
    detail: str


class EvaluationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: Optional[str] = None
    next_allowed_time: Optional[datetime] = None
    evaluated_window: Optional[DayWindow] = None
    evaluated_day: Optional[str] = None
    evaluated_time: Optional[str] = None
    timezone: Optional[str] = None
    trace: tuple[TraceEntry, ...] = ()

    @property
    def warnings(self) -> list[TraceEntry]:
        return [t for t in self.trace if t.level == "warning"]
