from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from callwindow.api.deps import get_db
from callwindow.domain.business_hours.evaluator import evaluate
from callwindow.domain.business_hours.models import BusinessHoursConfig, EvaluationResult
from callwindow.domain.business_hours.next_slot import is_sentinel_deferral, next_allowed_time
from callwindow.domain.business_hours.zones import as_utc
from callwindow.repositories.business_hours import load_tenant_hours

router = APIRouter()


class EvaluateRequest(BaseModel):
    candidate: Optional[datetime] = None  # defaults to now (UTC)
    tenant_timezone: Optional[str] = None
    business_hours: Optional[BusinessHoursConfig] = None


class EvaluationOut(EvaluationResult):
    candidate: datetime
    sentinel: bool = False


class NextSlotOut(BaseModel):
    candidate: datetime
    next_allowed_time: datetime
    sentinel: bool


def _candidate(at: Optional[datetime]) -> datetime:
    return as_utc(at) if at is not None else datetime.now(timezone.utc)


def _to_out(candidate: datetime, result: EvaluationResult) -> EvaluationOut:
    sentinel = result.next_allowed_time is not None and is_sentinel_deferral(candidate, result.next_allowed_time)
    return EvaluationOut(candidate=candidate, sentinel=sentinel, **result.model_dump())


def _load(db: Session, tenant: str):
    try:
        return load_tenant_hours(db, tenant)
    except LookupError:
        raise HTTPException(status_code=404, detail="tenant_not_found")


@router.post("/evaluate", response_model=EvaluationOut, summary="Evaluate an inline business-hours config")
def evaluate_inline(body: EvaluateRequest):
    candidate = _candidate(body.candidate)
    result = evaluate(candidate, body.tenant_timezone, body.business_hours)
    return _to_out(candidate, result)


@router.get("/tenants/{tenant}/evaluate", response_model=EvaluationOut, summary="Evaluate a tenant's stored business hours")
def evaluate_tenant(
    tenant: str,
    at: Optional[datetime] = Query(None, description="Candidate instant (ISO 8601); defaults to now"),
    db: Session = Depends(get_db),
):
    tenant_cfg, hours = _load(db, tenant)
    candidate = _candidate(at)
    result = evaluate(candidate, tenant_cfg.timezone, hours)
    return _to_out(candidate, result)


@router.get("/tenants/{tenant}/next-slot", response_model=NextSlotOut, summary="Next instant a business window opens")
def tenant_next_slot(
    tenant: str,
    at: Optional[datetime] = Query(None, description="Candidate instant (ISO 8601); defaults to now"),
    db: Session = Depends(get_db),
):
    tenant_cfg, hours = _load(db, tenant)
    candidate = _candidate(at)
    when = next_allowed_time(candidate, hours, tenant_cfg.timezone)
    return NextSlotOut(candidate=candidate, next_allowed_time=when, sentinel=is_sentinel_deferral(candidate, when))
