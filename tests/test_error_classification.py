"""
Tests for error classification and normalization.

Covers the three variants, the Plaid error shape in both its
exception and mapping forms, and idempotence of normalization.
"""

import pytest

from server.integrations.plaid import PlaidError
from server.shared.errors.classify import (
    NormalizedError,
    RawError,
    UpstreamIntegrationError,
    classify,
    normalize,
)
from server.shared.errors.formatted import FormattedError


class TestClassify:
    def test_plaid_exception_is_upstream(self) -> None:
        error = PlaidError("ITEM_LOGIN_REQUIRED", 400)
        classified = classify(error)
        assert isinstance(classified, UpstreamIntegrationError)
        assert classified.message == "ITEM_LOGIN_REQUIRED"
        assert classified.status_code == 400
        assert classified.source is error

    def test_plaid_mapping_is_upstream(self) -> None:
        error = {"name": "PlaidError", "error_message": "ITEM_LOGIN_REQUIRED", "status_code": 400}
        classified = classify(error)
        assert classified == UpstreamIntegrationError("ITEM_LOGIN_REQUIRED", 400, error)

    def test_duck_typed_plaid_object_is_upstream(self) -> None:
        class ClientFailure(Exception):
            name = "PlaidError"
            error_message = "RATE_LIMIT_EXCEEDED"
            status_code = 429

        assert isinstance(classify(ClientFailure()), UpstreamIntegrationError)

    def test_formatted_error_is_normalized(self) -> None:
        error = FormattedError("nope", 403)
        assert classify(error) == NormalizedError(error)

    def test_foreign_marked_object_is_normalized(self) -> None:
        class LegacyHttpError(Exception):
            is_formatted = True
            status_code = 409
            message = "Item already linked"

        error = LegacyHttpError()
        assert classify(error) == NormalizedError(error)

    def test_marker_must_be_true(self) -> None:
        error = {"is_formatted": "yes", "message": "x"}
        assert isinstance(classify(error), RawError)

    def test_plain_exception_is_raw(self) -> None:
        error = RuntimeError("unexpected token")
        assert classify(error) == RawError(error)

    def test_other_name_is_raw(self) -> None:
        error = {"name": "StripeError", "error_message": "card declined", "status_code": 402}
        assert isinstance(classify(error), RawError)

    def test_none_is_raw(self) -> None:
        assert classify(None) == RawError(None)


class TestNormalize:
    def test_plaid_error_keeps_upstream_status(self) -> None:
        error = {"name": "PlaidError", "error_message": "ITEM_LOGIN_REQUIRED", "status_code": 400}
        output = normalize(error).output
        assert output.status_code == 400
        assert output.payload == {
            "statusCode": 400,
            "error": "Bad Request",
            "message": "ITEM_LOGIN_REQUIRED",
        }

    def test_plaid_exception_is_chained(self) -> None:
        error = PlaidError("INVALID_ACCESS_TOKEN", 400)
        formatted = normalize(error)
        assert formatted.__cause__ is error
        assert formatted.data is error

    @pytest.mark.parametrize("status_code", [None, 200, "400", 700])
    def test_plaid_error_with_invalid_status_becomes_500(self, status_code: object) -> None:
        error = {"name": "PlaidError", "error_message": "broken", "status_code": status_code}
        assert normalize(error).status_code == 500

    def test_plaid_500_hides_message(self) -> None:
        error = PlaidError("INTERNAL_SERVER_ERROR", 500)
        assert normalize(error).output.payload["message"] == "An internal server error occurred"

    def test_foreign_marked_object_keeps_status_and_message(self) -> None:
        error = {"is_formatted": True, "status_code": 409, "message": "Item already linked"}
        formatted = normalize(error)
        assert formatted.data is error
        assert formatted.output.payload == {
            "statusCode": 409,
            "error": "Conflict",
            "message": "Item already linked",
        }

    def test_foreign_marked_object_with_bad_status_becomes_500(self) -> None:
        assert normalize({"is_formatted": True, "status_code": 200}).status_code == 500

    def test_plain_error_becomes_500(self) -> None:
        output = normalize(ValueError("unexpected token")).output
        assert output.status_code == 500
        assert output.payload == {
            "statusCode": 500,
            "error": "Internal Server Error",
            "message": "An internal server error occurred",
        }

    def test_pre_formatted_error_unchanged(self) -> None:
        error = FormattedError("Access denied", 403)
        assert normalize(error) is error
        assert normalize(error).output.status_code == 403

    @pytest.mark.parametrize(
        "error",
        [
            PlaidError("ITEM_LOGIN_REQUIRED", 400),
            RuntimeError("db down"),
            FormattedError("gone", 404),
        ],
    )
    def test_normalize_is_idempotent(self, error: Exception) -> None:
        once = normalize(error)
        twice = normalize(once)
        assert twice is once
        assert twice.output == once.output
