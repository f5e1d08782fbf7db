"""
Error classification.

Maps any incoming error value to exactly one variant. This is the
only place that probes error fields; everything downstream works
on the variant.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from server.integrations.plaid import PLAID_ERROR_NAME
from server.shared.errors.formatted import FormattedError, boomify, is_error_status


@dataclass(frozen=True)
class UpstreamIntegrationError:
    """Error reported by an upstream API, with its own message and status."""

    message: Any
    status_code: Any
    source: Any


@dataclass(frozen=True)
class NormalizedError:
    """Error that already carries the ``is_formatted`` marker."""

    error: Any


@dataclass(frozen=True)
class RawError:
    """Any other error value."""

    error: Any


ClassifiedError = Union[UpstreamIntegrationError, NormalizedError, RawError]


def _field(error: Any, name: str) -> Any:
    if isinstance(error, Mapping):
        return error.get(name)
    return getattr(error, name, None)


def classify(error: Any) -> ClassifiedError:
    """Classify an error value.

    Order matters: a Plaid-tagged error is upstream even if it also
    looks formatted.
    """
    if _field(error, "name") == PLAID_ERROR_NAME:
        return UpstreamIntegrationError(
            message=_field(error, "error_message"),
            status_code=_field(error, "status_code"),
            source=error,
        )
    if _field(error, "is_formatted") is True:
        return NormalizedError(error)
    return RawError(error)


def _from_marked(error: Any) -> FormattedError:
    status_code = _field(error, "status_code")
    if not is_error_status(status_code):
        status_code = 500
    return FormattedError(_field(error, "message"), status_code, data=error)


def normalize(error: Any) -> FormattedError:
    """Return the FormattedError an error value should be rendered as.

    An upstream status outside 400-599 is replaced by 500. Objects that
    carry the ``is_formatted`` marker without being a FormattedError are
    rebuilt from their ``message`` and ``status_code``.
    """
    classified = classify(error)

    if isinstance(classified, UpstreamIntegrationError):
        status_code = classified.status_code if is_error_status(classified.status_code) else 500
        formatted = FormattedError(classified.message, status_code, data=classified.source)
        if isinstance(classified.source, BaseException):
            formatted.__cause__ = classified.source
        return formatted

    if isinstance(classified, NormalizedError):
        if isinstance(classified.error, FormattedError):
            return classified.error
        return _from_marked(classified.error)

    return boomify(classified.error)
