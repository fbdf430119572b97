"""FastAPI exception handlers producing plain-text error responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hooklog.errors.exceptions import HookLogError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers on the FastAPI app."""

    @app.exception_handler(HookLogError)
    async def hooklog_error_handler(request: Request, exc: HookLogError):
        logger.info(
            "request_rejected",
            extra={
                "path": request.url.path,
                "method": request.method,
                "code": exc.code,
                "status_code": exc.status_code,
            },
        )
        return PlainTextResponse(exc.message, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Covers router-level 404/405; the Allow header rides on exc.headers.
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            "unhandled_error",
            exc_info=exc,
            extra={"path": request.url.path, "method": request.method},
        )
        return PlainTextResponse("Internal Server Error", status_code=500)
