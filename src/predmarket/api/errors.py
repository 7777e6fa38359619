"""Exception handlers shared by the app and the API tests."""

from __future__ import annotations

import asyncpg
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from predmarket.core.exceptions import StorageError
from predmarket.core.logging import get_logger

logger = get_logger(__name__)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed input with 400, the status the frontend checks for."""
    logger.info(
        "Request rejected",
        method=request.method,
        path=request.url.path,
        errors=len(exc.errors()),
    )
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log storage failures and hide their details from clients."""
    logger.error(
        "Storage error",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(asyncpg.PostgresError, storage_error_handler)
    app.add_exception_handler(asyncpg.InterfaceError, storage_error_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
