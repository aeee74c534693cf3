from contextlib import asynccontextmanager
import traceback
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog
from callwindow.api.errors import http_exception_handler, validation_exception_handler, generic_exception_handler
from callwindow.core.config import settings
from callwindow.core.logging import configure_logging
from callwindow.api.routes.health import router as health_router
from callwindow.api.routes.ops import router as ops_router
from callwindow.api.routes.business_hours import router as business_hours_router
from callwindow.repositories.db import init_db

configure_logging()
log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.APP_ENV != "test":  # tests manage their own schema
        init_db()
        log.info("schema_ready", app_env=settings.APP_ENV)
    yield


tags_metadata = [
    {"name": "health", "description": "Liveness/readiness healthchecks."},
    {"name": "ops", "description": "Non-sensitive runtime configuration."},
    {"name": "business-hours", "description": "Outbound call admission and next allowed call time."},
]

app = FastAPI(
    title="Callwindow Business Hours API",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)


@app.middleware("http")
async def _http_logger(request, call_next):
    try:
        log.info(
            "http_request_start",
            method=request.method,
            path=request.url.path,
            content_type=request.headers.get("content-type"),
        )
        response = await call_next(request)
        log.info(
            "http_request_end",
            method=request.method,
            path=request.url.path,
            status=getattr(response, "status_code", None),
        )
        return response
    except Exception as e:
        log.error(
            "http_request_exception",
            method=request.method,
            path=request.url.path,
            error=str(e),
            traceback=traceback.format_exc(),
        )
        return JSONResponse(status_code=500, content={"error": {"code": "internal_error", "message": "unexpected error"}})

app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(ops_router, prefix="/ops", tags=["ops"])
app.include_router(business_hours_router, prefix="/business-hours", tags=["business-hours"])

# Global error handlers (uniform error payloads)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


@app.get("/")
async def root():
    return {"service": "callwindow", "status": "ok"}
