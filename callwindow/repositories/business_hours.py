from __future__ import annotations
from sqlalchemy.orm import Session

from callwindow.domain.business_hours.models import DAY_FIELDS, BusinessHoursConfig, TenantTimeConfig
from callwindow.repositories import models


def get_tenant(db: Session, tenant_name: str) -> models.Tenant | None:
    return db.query(models.Tenant).filter(models.Tenant.name == tenant_name).first()


def to_hours_config(row: models.BusinessHours | None) -> BusinessHoursConfig | None:
    if row is None:
        return None
    return BusinessHoursConfig(timezone=row.timezone, **{day: getattr(row, day) for day in DAY_FIELDS})


def load_tenant_hours(db: Session, tenant_name: str) -> tuple[TenantTimeConfig, BusinessHoursConfig | None]:
    """Snapshot a tenant's time settings. Raises LookupError for unknown tenants."""
    tenant = get_tenant(db, tenant_name)
    if tenant is None:
        raise LookupError(tenant_name)
    return TenantTimeConfig(timezone=tenant.timezone), to_hours_config(tenant.business_hours)
