"""
Exception handlers producing the JSON error body used by every endpoint:
``{"error": <message>, "timestamp": <iso8601>}``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from errors import STATUS_CODES, ErrorKind, TaskManagerError
from models import utcnow

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal server error occurred."


def error_body(message: str, **extra) -> dict:
    body = {"error": message, "timestamp": utcnow().isoformat()}
    body.update(extra)
    return body


def _property_name(loc) -> str:
    # loc starts with where the value came from ("body", "path", ...)
    parts = [str(part) for part in loc[1:]] or [str(part) for part in loc]
    return ".".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    """Map every failure onto a status code and the shared error body."""

    @app.exception_handler(TaskManagerError)
    async def handle_task_manager_error(request: Request, exc: TaskManagerError):
        logger.warning(
            "%s %s failed (%s): %s",
            request.method, request.url.path, exc.kind.value, exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        errors = [
            {"property": _property_name(err.get("loc", ())), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        logger.warning("Validation failed: %s", ", ".join(e["message"] for e in errors))
        return JSONResponse(
            status_code=STATUS_CODES[ErrorKind.VALIDATION],
            content=jsonable_encoder(error_body("Validation failed", errors=errors)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("An unhandled exception occurred: %s", exc)
        return JSONResponse(
            status_code=STATUS_CODES[ErrorKind.INTERNAL],
            content=error_body(INTERNAL_ERROR_MESSAGE),
        )
