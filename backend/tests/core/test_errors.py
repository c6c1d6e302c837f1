"""Error taxonomy — kind traits and the uniform envelope.

Tests cover:
    - Every ErrorKind has code / status / severity traits
    - to_response() envelope shape, details omitted when empty
    - database_error keeps the cause out of client-facing details
    - StoreError chaining
"""

import pytest

from lotr_api.core.errors import (
    ErrorKind, ErrorSeverity, LotrApiError, StoreError,
    database_error, invalid_argument_error, not_found_error,
    rate_limit_error, traits_for, upstream_error, validation_error,
)


def test_every_kind_has_traits():
    for kind in ErrorKind:
        traits = traits_for(kind)
        assert traits.code
        assert 400 <= traits.http_status < 600


@pytest.mark.parametrize("kind,code,status", [
    (ErrorKind.VALIDATION, "VALIDATION_ERROR", 400),
    (ErrorKind.INVALID_ARGUMENT, "INVALID_ARGUMENT", 400),
    (ErrorKind.NOT_FOUND, "NOT_FOUND", 404),
    (ErrorKind.RATE_LIMIT, "RATE_LIMIT_EXCEEDED", 429),
    (ErrorKind.UPSTREAM, "API_ERROR", 502),
    (ErrorKind.DATABASE, "DATABASE_ERROR", 500),
    (ErrorKind.INTERNAL, "INTERNAL_ERROR", 500),
])
def test_kind_codes_and_statuses(kind, code, status):
    err = LotrApiError(kind, "msg")
    assert err.code == code
    assert err.http_status == status


def test_not_found_is_info_severity():
    assert not_found_error("Review", 1).severity == ErrorSeverity.INFO


def test_to_response_envelope_shape():
    err = validation_error("Invalid input data", {"rating": "too big"})
    assert err.to_response() == {
        "success": False,
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid input data",
            "details": {"rating": "too big"},
        },
    }


def test_to_response_omits_empty_details():
    body = invalid_argument_error("No fields to update").to_response()
    assert "details" not in body["error"]


def test_not_found_details_carry_id():
    err = not_found_error("Review", 42)
    assert err.kind == ErrorKind.NOT_FOUND
    assert err.message == "Review not found"
    assert err.details == {"id": 42}


def test_upstream_error_keeps_details():
    err = upstream_error("boom", {"status": 404, "endpoint": "/movie/x"})
    assert err.kind == ErrorKind.UPSTREAM
    assert err.details["endpoint"] == "/movie/x"


def test_database_error_hides_cause_from_client():
    try:
        try:
            raise RuntimeError("password=secret in DSN")
        except RuntimeError as e:
            raise StoreError("Connection or operational error", "insert") from e
    except StoreError as store_err:
        err = database_error("Failed to create review", store_err)

    body = err.to_response()
    assert body["error"]["code"] == "DATABASE_ERROR"
    assert body["error"]["details"] == {"operation": "insert"}
    assert "secret" not in str(body)
    assert "secret" in err.context.debug_info["error"]
    assert err.context.operation == "insert"


def test_store_error_message_includes_operation():
    err = StoreError("Integrity constraint violated", "update")
    assert err.operation == "update"
    assert "update" in str(err)


def test_rate_limit_error_details():
    err = rate_limit_error("10 per 15 minute", "15 minute")
    assert err.http_status == 429
    assert err.details == {"retryAfter": "15 minute", "limit": "10 per 15 minute"}
