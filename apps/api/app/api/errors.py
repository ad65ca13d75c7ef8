from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.context import get_correlation_id
from app.core.errors import InfrastructureError, LifecycleError
from app.platform.records.schemas import ErrorEnvelope


logger = logging.getLogger("app.lifecycle")


def error_response(
    request: Request,
    *,
    status_code: int,
    code: str,
    message: str,
    details: Any = None,
) -> JSONResponse:
    correlation_id = get_correlation_id() or getattr(request.state, "correlation_id", None)
    payload = ErrorEnvelope(error=message, code=code, details=details, correlation_id=correlation_id)
    return JSONResponse(status_code=status_code, content=payload.model_dump(mode="json"))


def _field_name(location: tuple[Any, ...] | list[Any]) -> str:
    parts = [str(part) for part in location if part not in ("body", "query", "path")]
    return ".".join(parts) or "request"


def _validation_details(exc: RequestValidationError) -> list[dict[str, str]]:
    details = []
    for error in exc.errors():
        ctx_error = (error.get("ctx") or {}).get("error")
        message = str(ctx_error) if isinstance(ctx_error, ValueError) else error.get("msg", "Invalid value")
        details.append({"field": _field_name(error.get("loc", ())), "message": message})
    return details


async def lifecycle_error_handler(request: Request, exc: LifecycleError) -> JSONResponse:
    return error_response(
        request,
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        details=exc.details,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = _validation_details(exc)
    message = details[0]["message"] if details else "Invalid request"
    return error_response(request, status_code=400, code="validation_error", message=message, details=details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(request, status_code=exc.status_code, code="http_error", message=str(exc.detail))


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("storage.failure", exc_info=exc, extra={"path": request.url.path, "error": str(exc)})
    error = InfrastructureError()
    return error_response(request, status_code=error.status_code, code=error.code, message=error.message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled.failure", exc_info=exc, extra={"path": request.url.path, "error": str(exc)})
    error = InfrastructureError()
    return error_response(request, status_code=error.status_code, code=error.code, message=error.message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LifecycleError, lifecycle_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, database_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
