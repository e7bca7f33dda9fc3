"""Translate domain errors into HTTP responses."""
from __future__ import annotations

import logging
import traceback
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from errors import AppError
from observability import log_event

logger = logging.getLogger(__name__)

AUTH_PREFIX = "/api/auth"
INTERNAL_MESSAGE = "Something went wrong. Please try again later."


def error_body(path: str, message: str) -> Dict[str, Any]:
    """Auth routes answer with an envelope, the rest with a bare message."""

    if path.startswith(AUTH_PREFIX):
        return {"success": False, "error": {"message": message}}
    return {"message": message}


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    detail = first.get("msg", "invalid value")
    return f"{location}: {detail}" if location else detail


def install_error_handlers(app: FastAPI, *, expose_stack: bool) -> None:
    @app.exception_handler(AppError)
    async def _app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            log_event("request.error", request.url.path, status=exc.status_code, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_body(request.url.path, exc.message))

    @app.exception_handler(RequestValidationError)
    async def _bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=error_body(request.url.path, _validation_message(exc)),
        )

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        body = error_body(request.url.path, INTERNAL_MESSAGE)
        if expose_stack:
            body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(status_code=500, content=body)


__all__ = ["install_error_handlers", "error_body"]
