from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import structlog

from callwindow.api.deps import get_db

router = APIRouter()
log = structlog.get_logger()


@router.get("/live")
async def live():
    return {"status": "live"}


@router.get("/ready")
def ready(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        log.error("readiness_db_error", error=str(e))
        raise HTTPException(status_code=503, detail="database_unavailable")
    return {"status": "ready"}
