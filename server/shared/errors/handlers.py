"""
Centralized error handlers.

Every error, whatever its shape, ends as one JSON response:
``{"statusCode": int, "error": str, "message": str}``.
No stack traces or internal details are exposed to clients.

Two entry points share the same formatting:
- handle_exception: Starlette exception handler ``(request, exc)``,
  registered on the FastAPI app for every exception class.
- error_handler: terminal stage of a Pipeline
  ``(error, request, response, next_)``.
"""

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from server.core.config import settings
from server.shared.errors.classify import normalize
from server.shared.errors.formatted import ErrorOutput, FormattedError

logger = logging.getLogger(__name__)


def format_error(error: Any, debug: bool | None = None) -> ErrorOutput:
    """Normalize an error and render its envelope.

    Args:
        error: The error value, of any shape.
        debug: Expose 500 messages. Defaults to ``settings.debug``.

    Returns:
        The rendered status code, payload and headers.
    """
    if debug is None:
        debug = settings.debug

    formatted = normalize(error)
    output = formatted.to_output(debug=debug)

    if output.status_code >= 500:
        logger.error(
            "Request failed with %d: %s",
            output.status_code,
            type(error).__name__,
            exc_info=error if isinstance(error, BaseException) else None,
        )
    else:
        logger.warning("Request rejected with %d: %s", output.status_code, type(error).__name__)
    return output


def _fallback_output() -> ErrorOutput:
    return FormattedError.internal().to_output()


def build_error_response(error: Any, debug: bool | None = None) -> JSONResponse:
    """Build the JSON response for an error.

    Falls back to the generic 500 envelope when the payload cannot
    be serialized.
    """
    output = format_error(error, debug=debug)
    try:
        return JSONResponse(
            status_code=output.status_code,
            content=output.payload,
            headers=output.headers or None,
        )
    except (TypeError, ValueError):
        logger.exception("Error payload for %d is not serializable", output.status_code)
        fallback = _fallback_output()
        return JSONResponse(status_code=fallback.status_code, content=fallback.payload)


async def handle_exception(_request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler for FastAPI routes."""
    return build_error_response(exc)


def error_handler(error: Any, request: Request, response: Any, next_: Any = None) -> None:
    """Terminal error stage of a Pipeline.

    Writes the formatted error to ``response``. If the response was
    already sent the first response is kept and the error is only
    logged. ``next_`` is never called.

    Args:
        error: The error passed to ``next_`` by an earlier handler.
        request: The incoming HTTP request.
        response: The pipeline's ResponseWriter.
        next_: Unused.
    """
    if response.sent:
        logger.error(
            "Error after response was sent for %s %s: %s",
            request.method,
            request.url.path,
            type(error).__name__,
            exc_info=error if isinstance(error, BaseException) else None,
        )
        return

    output = format_error(error)
    try:
        response.status(output.status_code).set_all(output.headers).json(output.payload)
    except (TypeError, ValueError):
        logger.exception("Error payload for %d is not serializable", output.status_code)
        fallback = _fallback_output()
        response.status(fallback.status_code).json(fallback.payload)


def register_error_handlers(app: FastAPI) -> None:
    """Register the catch-all error handler on the FastAPI application.

    FastAPI ships its own handlers for HTTP and validation errors,
    so those classes are registered explicitly to share the envelope.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(HTTPException, handle_exception)
    app.add_exception_handler(RequestValidationError, handle_exception)
    app.add_exception_handler(RateLimitExceeded, handle_exception)
    app.add_exception_handler(Exception, handle_exception)
