"""
Exception handlers.

Translate the error taxonomy into HTTP responses. Every NoodleError is
rendered with its own status code; anything else is logged and rendered
as an internal error so no untyped failure reaches the client.
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.exceptions import (
    ErrorKind,
    STATUS_BY_KIND,
    NoodleError,
    RateLimitError,
    ValidationError,
    InternalError,
)

logger = logging.getLogger(__name__)

KIND_BY_STATUS: dict[int, ErrorKind] = {status: kind for kind, status in STATUS_BY_KIND.items()}


def error_response(exc: NoodleError) -> JSONResponse:
    """Render a NoodleError as JSON with its mapped status."""
    headers: dict[str, str] = {}
    if isinstance(exc, RateLimitError) and exc.retry_after is not None:
        headers["Retry-After"] = str(exc.retry_after)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers or None,
    )


async def handle_noodle_error(request: Request, exc: NoodleError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc)


async def handle_request_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    fields: dict[str, str] = {}
    for err in exc.errors():
        # Drop the location prefix ("body", "query", "path")
        loc = [str(part) for part in err.get("loc", ())[1:]]
        fields[".".join(loc) or "request"] = err.get("msg", "invalid")
    return error_response(ValidationError("Invalid request", fields=fields))


async def handle_http_exception(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Render framework errors (unknown route, wrong method) in the taxonomy shape."""
    kind = KIND_BY_STATUS.get(exc.status_code)
    if kind is not None:
        code = kind.value
    else:
        # Statuses outside the taxonomy, e.g. 405, keep their standard name
        code = HTTPStatus(exc.status_code).name
    message = exc.detail if isinstance(exc.detail, str) else HTTPStatus(exc.status_code).phrase
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": code, "message": message, "details": {}},
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(InternalError())


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all taxonomy handlers to the app."""
    app.add_exception_handler(NoodleError, handle_noodle_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
