"""
Formatted HTTP errors.

A FormattedError already knows how it is rendered: a status code,
the standard reason phrase and a client-facing message. Any other
error is converted with boomify() before it reaches a client.

No request or response objects are touched here.
"""

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

DEFAULT_STATUS_CODE = 500
GENERIC_SERVER_MESSAGE = "An internal server error occurred"
VALIDATION_MESSAGE = "Request validation failed"
UNKNOWN_REASON = "Unknown"


def reason_phrase(status_code: int) -> str:
    """Return the standard reason phrase for a status code."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return UNKNOWN_REASON


def is_error_status(status_code: Any) -> bool:
    """Return True when the value is an integer HTTP error status (400-599)."""
    if isinstance(status_code, bool) or not isinstance(status_code, int):
        return False
    return 400 <= status_code <= 599


@dataclass(frozen=True)
class ErrorOutput:
    """Status code, JSON payload and headers of a rendered error."""

    status_code: int
    payload: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)


class FormattedError(HTTPException):
    """An HTTP error with a resolved status code and client message.

    The class attribute ``is_formatted`` marks instances as already
    normalized, so formatting one again returns it unchanged.

    Attributes:
        message: Client-facing message. Hidden behind a generic message
            for 500 responses unless rendered in debug mode.
        data: Optional context kept server-side, never rendered.
    """

    is_formatted = True

    def __init__(
        self,
        message: Any = None,
        status_code: int = DEFAULT_STATUS_CODE,
        headers: dict[str, str] | None = None,
        data: Any = None,
    ) -> None:
        if not is_error_status(status_code):
            raise ValueError(f"Error status code must be in 400-599, got {status_code!r}")
        super().__init__(
            status_code=status_code,
            detail=message if message is not None else reason_phrase(status_code),
            headers=headers,
        )
        self.message = message
        self.data = data

    def to_output(self, debug: bool = False) -> ErrorOutput:
        """Render the error into its response envelope.

        Args:
            debug: Expose the real message on 500 responses.

        Returns:
            The status code, ``{statusCode, error, message}`` payload and headers.
        """
        if self.status_code == DEFAULT_STATUS_CODE and not debug:
            message = GENERIC_SERVER_MESSAGE
        elif self.message:
            message = self.message
        else:
            message = reason_phrase(self.status_code)

        return ErrorOutput(
            status_code=self.status_code,
            payload={
                "statusCode": self.status_code,
                "error": reason_phrase(self.status_code),
                "message": message,
            },
            headers=dict(self.headers or {}),
        )

    @property
    def output(self) -> ErrorOutput:
        return self.to_output()

    @classmethod
    def bad_request(cls, message: Any = None, data: Any = None) -> "FormattedError":
        return cls(message, 400, data=data)

    @classmethod
    def unauthorized(cls, message: Any = None, data: Any = None) -> "FormattedError":
        return cls(message, 401, data=data)

    @classmethod
    def forbidden(cls, message: Any = None, data: Any = None) -> "FormattedError":
        return cls(message, 403, data=data)

    @classmethod
    def not_found(cls, message: Any = None, data: Any = None) -> "FormattedError":
        return cls(message, 404, data=data)

    @classmethod
    def conflict(cls, message: Any = None, data: Any = None) -> "FormattedError":
        return cls(message, 409, data=data)

    @classmethod
    def too_many_requests(cls, message: Any = None, data: Any = None) -> "FormattedError":
        return cls(message, 429, data=data)

    @classmethod
    def internal(cls, message: Any = None, data: Any = None) -> "FormattedError":
        return cls(message, 500, data=data)

    @classmethod
    def bad_gateway(cls, message: Any = None, data: Any = None) -> "FormattedError":
        return cls(message, 502, data=data)


def _message_of(error: Any) -> Any:
    if isinstance(error, BaseException):
        return str(error) or None
    if isinstance(error, dict):
        return error.get("message")
    if isinstance(error, str):
        return error
    return getattr(error, "message", None)


def boomify(error: Any, status_code: int = DEFAULT_STATUS_CODE) -> FormattedError:
    """Convert any error value into a FormattedError.

    Built-in rules:
    - FormattedError instances are returned unchanged.
    - Starlette/FastAPI HTTPException keeps its status code, detail and
      headers. Structured detail is rendered as the message as-is.
    - Request validation errors become 422.
    - Everything else gets ``status_code`` (500 by default).

    Args:
        error: The error value, of any shape.
        status_code: Status for errors no rule matches.

    Returns:
        A FormattedError wrapping the original error in ``data``.
    """
    if isinstance(error, FormattedError):
        return error

    if isinstance(error, HTTPException):
        status = error.status_code if is_error_status(error.status_code) else DEFAULT_STATUS_CODE
        formatted = FormattedError(error.detail, status, headers=error.headers, data=error)
    elif isinstance(error, RequestValidationError):
        formatted = FormattedError(VALIDATION_MESSAGE, 422, data=error.errors())
    else:
        if not is_error_status(status_code):
            status_code = DEFAULT_STATUS_CODE
        formatted = FormattedError(_message_of(error), status_code, data=error)

    if isinstance(error, BaseException):
        formatted.__cause__ = error
    return formatted
