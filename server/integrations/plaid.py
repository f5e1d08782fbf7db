"""
Plaid API error shape.

Plaid reports failures as a JSON body with ``error_type``,
``error_code``, ``error_message``, ``display_message`` and
``request_id``, alongside the HTTP status of the upstream call.
Errors raised from Plaid calls carry ``name = "PlaidError"`` so the
error handler can recognize them without importing this module's class.
"""

from typing import Any, Mapping

PLAID_ERROR_NAME = "PlaidError"


class PlaidError(Exception):
    """Raised when a Plaid API call fails.

    Attributes:
        name: Always ``PLAID_ERROR_NAME``.
        error_message: Developer-facing message from Plaid.
        status_code: HTTP status of the failed Plaid call.
        error_type: Broad error category, e.g. ``ITEM_ERROR``.
        error_code: Specific error code, e.g. ``ITEM_LOGIN_REQUIRED``.
        display_message: End-user message, when Plaid supplies one.
        request_id: Plaid request identifier for support tickets.
    """

    name = PLAID_ERROR_NAME

    def __init__(
        self,
        error_message: str,
        status_code: int,
        error_type: str | None = None,
        error_code: str | None = None,
        display_message: str | None = None,
        request_id: str | None = None,
    ) -> None:
        self.error_message = error_message
        self.status_code = status_code
        self.error_type = error_type
        self.error_code = error_code
        self.display_message = display_message
        self.request_id = request_id
        super().__init__(self.error_message)

    @classmethod
    def from_response(cls, body: Mapping[str, Any], status_code: int) -> "PlaidError":
        """Build an error from a Plaid error response body.

        Args:
            body: Decoded JSON body of the failed call.
            status_code: HTTP status of the failed call.

        Returns:
            A PlaidError carrying the body's fields.
        """
        return cls(
            error_message=body.get("error_message") or body.get("error_code") or "Plaid request failed",
            status_code=status_code,
            error_type=body.get("error_type"),
            error_code=body.get("error_code"),
            display_message=body.get("display_message"),
            request_id=body.get("request_id"),
        )


def raise_for_plaid_status(body: Mapping[str, Any], status_code: int) -> None:
    """Raise PlaidError when a Plaid call did not succeed.

    Raises:
        PlaidError: If ``status_code`` is 400 or above.
    """
    if status_code >= 400:
        raise PlaidError.from_response(body, status_code)
