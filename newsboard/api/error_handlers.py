"""Global exception handlers: the one place failures become `{"msg": ...}` responses."""

from __future__ import annotations

import logging

import asyncpg
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from newsboard.core.errors import PATH_NOT_FOUND, ApiError, from_store_error, translate

logger = logging.getLogger("newsboard.errors")


def _respond(request: Request, status_code: int, message: str, event: str) -> JSONResponse:
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "%s %s -> %s %s",
        request.method,
        request.url.path,
        status_code,
        message,
        extra={"event": event, "status_code": status_code},
    )
    return JSONResponse(status_code=status_code, content={"msg": message})


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        status_code, message = translate(exc)
        return _respond(request, status_code, message, f"api_error_{exc.kind.value}")

    @app.exception_handler(asyncpg.PostgresError)
    async def store_error_handler(request: Request, exc: asyncpg.PostgresError) -> JSONResponse:
        error = from_store_error(exc)
        logger.warning(
            "Store error reclassified as %s",
            error.kind.value,
            extra={"event": "store_error", "sqlstate": getattr(exc, "sqlstate", None)},
        )
        status_code, message = translate(error)
        return _respond(request, status_code, message, f"api_error_{error.kind.value}")

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        status_code, message = translate(ApiError.invalid_input())
        return _respond(request, status_code, message, "request_validation_error")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            status_code, message = PATH_NOT_FOUND
            return _respond(request, status_code, message, "path_not_found")
        return _respond(request, exc.status_code, str(exc.detail), "http_error")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled exception on %s",
            request.url.path,
            exc_info=exc,
            extra={"event": "unhandled_exception"},
        )
        status_code, message = translate(ApiError.unhandled())
        return JSONResponse(status_code=status_code, content={"msg": message})
