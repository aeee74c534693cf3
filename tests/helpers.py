import json
from datetime import datetime, timezone

from callwindow.repositories import models
from callwindow.repositories.db import SessionLocal

WEEKDAYS_9_TO_5 = {
    "sunday": {"start": "09:00", "end": "17:00", "enabled": False},
    "monday": {"start": "09:00", "end": "17:00", "enabled": True},
    "tuesday": {"start": "09:00", "end": "17:00", "enabled": True},
    "wednesday": {"start": "09:00", "end": "17:00", "enabled": True},
    "thursday": {"start": "09:00", "end": "17:00", "enabled": True},
    "friday": {"start": "09:00", "end": "17:00", "enabled": True},
    "saturday": {"start": "09:00", "end": "17:00", "enabled": False},
}

ALL_DISABLED = {day: {"start": "09:00", "end": "17:00", "enabled": False} for day in WEEKDAYS_9_TO_5}


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def seed_tenant(name: str, timezone_name="Europe/London", days=None, hours_timezone=None, paused=False) -> None:
    """Insert (or replace) a tenant; days are stored as JSON text like the production rows."""
    with SessionLocal() as db:
        tenant = db.query(models.Tenant).filter(models.Tenant.name == name).first()
        if tenant is not None:
            if tenant.business_hours is not None:
                db.delete(tenant.business_hours)
            db.delete(tenant)
            db.flush()
        tenant = models.Tenant(name=name, timezone=timezone_name, is_paused=paused)
        db.add(tenant)
        db.flush()
        if days is not None:
            row = models.BusinessHours(
                tenant_id=tenant.id,
                timezone=hours_timezone,
                **{day: (json.dumps(v) if isinstance(v, dict) else v) for day, v in days.items()},
            )
            db.add(row)
        db.commit()
