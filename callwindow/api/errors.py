from __future__ import annotations
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
import structlog

log = structlog.get_logger()


class ErrorPayload(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorPayload


def _http_detail_to_code_and_message(exc: HTTPException) -> tuple[str, str]:
    # A string detail is the error code; the message comes from the table below
    if isinstance(exc.detail, str):
        code = exc.detail
        defaults: dict[str, str] = {
            "tenant_not_found": "Tenant not found.",
            "database_unavailable": "Database is not reachable.",
        }
        msg = defaults.get(code, code.replace("_", " "))
        return code, msg
    if isinstance(exc.detail, dict):
        code = str(exc.detail.get("code", "bad_request"))
        msg = str(exc.detail.get("message", "Invalid request."))
        return code, msg
    return "bad_request", "Invalid request."


async def http_exception_handler(request: Request, exc: HTTPException):
    code, message = _http_detail_to_code_and_message(exc)
    log.warning("http_error", code=code, status=exc.status_code, path=str(request.url))
    return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error=ErrorPayload(code=code, message=message)).model_dump())


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errs = exc.errors()
    fields = [".".join(str(p) for p in e.get("loc", [])) for e in errs]
    message = "Validation error: " + ", ".join(fields) if fields else "Invalid request payload."
    log.warning("validation_error", fields=fields, path=str(request.url))
    return JSONResponse(status_code=422, content=ErrorResponse(error=ErrorPayload(code="validation_error", message=message)).model_dump())


async def generic_exception_handler(request: Request, exc: Exception):
    log.error("unhandled_exception", error=str(exc), error_type=type(exc).__name__, path=str(request.url))
    payload = ErrorPayload(code="internal_error", message="Unexpected error. Please try again later.")
    return JSONResponse(status_code=500, content=ErrorResponse(error=payload).model_dump())
