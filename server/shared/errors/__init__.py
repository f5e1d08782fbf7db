"""
Shared error handling package.

Centralizes error-to-HTTP mapping so that every failure, including
upstream Plaid errors, is translated into the same JSON envelope.
"""

from server.shared.errors.classify import (
    ClassifiedError,
    NormalizedError,
    RawError,
    UpstreamIntegrationError,
    classify,
    normalize,
)
from server.shared.errors.formatted import ErrorOutput, FormattedError, boomify
from server.shared.errors.handlers import (
    build_error_response,
    error_handler,
    format_error,
    handle_exception,
    register_error_handlers,
)

__all__ = [
    "ClassifiedError",
    "ErrorOutput",
    "FormattedError",
    "NormalizedError",
    "RawError",
    "UpstreamIntegrationError",
    "boomify",
    "build_error_response",
    "classify",
    "error_handler",
    "format_error",
    "handle_exception",
    "normalize",
    "register_error_handlers",
]
