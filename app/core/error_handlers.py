"""
Translate every error that reaches the HTTP boundary into the JSON error body
{"message": detail, "path": request_path} (field -> message entries for request validation).
"""

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import ServiceError, StoreError

logger = logging.getLogger(__name__)


def _error_body(request: Request, message: Any) -> Dict[str, Any]:
    return {"message": message, "path": request.url.path}


def _field_name(loc) -> str:
    # loc looks like ("body", "email") or ("query", "page"); model-level errors only carry ("body",)
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) if parts else "message"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=_error_body(request, exc.detail), headers=exc.headers)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=_error_body(request, exc.message))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    body: Dict[str, Any] = {}
    for err in exc.errors():
        msg = err.get("msg", "Invalid value")
        # pydantic prefixes errors raised from validators with "Value error, "
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        body[_field_name(err.get("loc", ()))] = msg
    body["path"] = request.url.path
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    cause = getattr(exc, "orig", None) or exc
    error = StoreError(f"Database error: {cause}")
    return JSONResponse(status_code=error.status_code, content=_error_body(request, error.message))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(request, f"Unexpected error: {exc}"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
