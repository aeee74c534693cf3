from __future__ import annotations
from fastapi import APIRouter
from callwindow.core.config import settings
from callwindow.domain.business_hours.default_policy import DEFAULT_POLICY_WINDOW
from callwindow.domain.business_hours.next_slot import SEARCH_HORIZON_DAYS, SENTINEL_DEFERRAL
from callwindow.domain.business_hours.resolver import DEFAULT_WINDOW
from callwindow.domain.business_hours.zones import DEFAULT_TIMEZONE

router = APIRouter()


@router.get("/config", summary="Non-sensitive settings and engine constants")
async def config_info():
    return {
        "app_env": settings.APP_ENV,
        "call_provider": (settings.CALL_PROVIDER or "noop").lower(),
        "default_tenant": settings.DEFAULT_TENANT_ID,
        "default_timezone": DEFAULT_TIMEZONE,
        "fallback_window": DEFAULT_WINDOW.model_dump(),
        "default_policy_window": DEFAULT_POLICY_WINDOW.model_dump(),
        "search_horizon_days": SEARCH_HORIZON_DAYS,
        "sentinel_deferral_days": SENTINEL_DEFERRAL.days,
        "version": "0.1.0",
    }
