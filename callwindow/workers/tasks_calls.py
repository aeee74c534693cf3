from __future__ import annotations
import random
from datetime import datetime, timezone
from typing import Any
import structlog
from celery import Task
from callwindow.calling.provider import get_provider
from callwindow.core.config import settings
from callwindow.domain.business_hours.evaluator import evaluate
from callwindow.domain.business_hours.next_slot import is_sentinel_deferral
from callwindow.repositories.business_hours import get_tenant, to_hours_config
from callwindow.repositories.db import SessionLocal
from .celery_app import celery

log = structlog.get_logger()


class TransientCallError(Exception):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _backoff(retry_count: int) -> float:
    base = 2 ** max(0, retry_count)
    jitter = random.uniform(0, 0.2 * base)
    return min(30.0, base + jitter)


def _defer(args: tuple, kwargs: dict[str, Any], eta: datetime) -> None:
    dispatch_call.apply_async(args=args, kwargs=kwargs, eta=eta)


@celery.task(name="calls.dispatch", bind=True, max_retries=settings.CALL_DISPATCH_MAX_RETRIES)
def dispatch_call(
    self: Task,
    tenant_id: str,
    to_number: str,
    contact_id: str | None = None,
    metadata: dict | None = None,
) -> dict:
    """Place an outbound call now if the tenant's business hours allow it, else defer it."""
    now = _utcnow()
    with SessionLocal() as db:
        tenant = get_tenant(db, tenant_id)
        if tenant is None:
            log.warning("dispatch_unknown_tenant", tenant_id=tenant_id)
            return {"status": "unknown_tenant"}
        if tenant.is_paused:
            log.info("dispatch_tenant_paused", tenant_id=tenant_id, contact_id=contact_id)
            return {"status": "paused"}
        tenant_tz = tenant.timezone
        hours = to_hours_config(tenant.business_hours)

    result = evaluate(now, tenant_tz, hours)
    if not result.allowed:
        if result.next_allowed_time is None:
            # default policy path: the caller decides when to try again
            log.info("dispatch_blocked", tenant_id=tenant_id, contact_id=contact_id, reason=result.reason)
            return {"status": "blocked", "reason": result.reason}

        sentinel = is_sentinel_deferral(now, result.next_allowed_time)
        if sentinel:
            log.error(
                "business_hours_misconfigured",
                tenant_id=tenant_id,
                next_allowed_time=result.next_allowed_time.isoformat(),
            )
        _defer(
            (tenant_id, to_number),
            {"contact_id": contact_id, "metadata": metadata},
            result.next_allowed_time,
        )
        log.info(
            "dispatch_deferred",
            tenant_id=tenant_id,
            contact_id=contact_id,
            reason=result.reason,
            eta=result.next_allowed_time.isoformat(),
        )
        return {
            "status": "deferred",
            "reason": result.reason,
            "next_allowed_time": result.next_allowed_time.isoformat(),
            "sentinel": sentinel,
        }

    provider = get_provider()
    try:
        resp = provider.start_call(
            to=to_number,
            tenant_id=tenant_id,
            metadata={**(metadata or {}), "contact_id": contact_id},
        )
    except Exception as e:  # provider errors are treated as transient
        retry_no = self.request.retries
        delay = _backoff(retry_no)
        log.warning("dispatch_retry", tenant_id=tenant_id, retries=retry_no + 1, delay=delay, error=str(e))
        raise self.retry(exc=TransientCallError(str(e)), countdown=delay)

    log.info("dispatch_started", tenant_id=tenant_id, contact_id=contact_id, day=result.evaluated_day)
    return {"status": "dispatched", "response": resp}
