"""Tests for settee.core.errors module."""

import pytest

from settee.core.errors import (
    AuthenticationError,
    ConflictError,
    ErrorCategory,
    ErrorContext,
    InvalidDocumentIdError,
    NetworkError,
    NotFoundError,
    PreconditionFailedError,
    RequestError,
    SetteeError,
    TransientError,
    ValidationError,
    categorize_error,
    error_for_status,
    is_retryable,
)


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_create_empty_context(self):
        ctx = ErrorContext()
        assert ctx.path is None
        assert ctx.metadata == {}
        assert ctx.to_dict() == {}

    def test_to_dict_includes_set_fields(self):
        ctx = ErrorContext(method="GET", path="recipes/d1", metadata={"attempt": 1})
        assert ctx.to_dict() == {"method": "GET", "path": "recipes/d1", "attempt": 1}


class TestSetteeError:
    def test_defaults(self):
        error = SetteeError("boom")
        assert error.message == "boom"
        assert error.category == ErrorCategory.INTERNAL
        assert error.retryable is False

    def test_with_context_known_and_extra_fields(self):
        error = SetteeError("boom").with_context(database="recipes", attempt=2)
        assert error.context.database == "recipes"
        assert error.context.metadata == {"attempt": 2}

    def test_cause_is_chained(self):
        cause = ConnectionError("refused")
        error = NetworkError("unreachable", cause=cause)
        assert error.__cause__ is cause
        assert "refused" in error.to_dict()["cause"]

    def test_to_dict(self):
        d = ValidationError("bad").to_dict()
        assert d["error_type"] == "ValidationError"
        assert d["category"] == "VALIDATION"
        assert d["retryable"] is False


class TestRequestError:
    @pytest.mark.parametrize(
        "status,cls",
        [
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, NotFoundError),
            (409, ConflictError),
            (412, PreconditionFailedError),
            (400, RequestError),
            (500, RequestError),
        ],
    )
    def test_error_for_status(self, status, cls):
        error = error_for_status(status, error="e", reason="r")
        assert type(error) is cls
        assert error.status == status
        assert error.context.http_status == status
        assert error.context.reason == "r"

    def test_message_includes_reason(self):
        error = error_for_status(409, error="conflict", reason="Document update conflict.")
        assert error.message == "409 conflict: Document update conflict."

    def test_server_errors_retryable(self):
        assert error_for_status(502).retryable is True
        assert error_for_status(404).retryable is False

    def test_auth_category(self):
        assert error_for_status(401).category == ErrorCategory.AUTH

    def test_to_dict_has_status(self):
        d = error_for_status(404, error="not_found").to_dict()
        assert d["status"] == 404
        assert d["error"] == "not_found"


class TestInvalidDocumentIdError:
    def test_records_id(self):
        error = InvalidDocumentIdError("_design/")
        assert error.context.document_id == "_design/"
        assert isinstance(error, ValidationError)
        assert "_design/" in error.message


class TestHelpers:
    def test_is_retryable(self):
        assert is_retryable(TransientError("x")) is True
        assert is_retryable(ValidationError("x")) is False
        assert is_retryable(ConnectionResetError()) is True
        assert is_retryable(ValueError()) is False

    def test_categorize_error(self):
        assert categorize_error(NotFoundError("x", status=404)) == ErrorCategory.SERVER
        assert categorize_error(OSError()) == ErrorCategory.NETWORK
        assert categorize_error(ValueError()) == ErrorCategory.VALIDATION
        assert categorize_error(RuntimeError()) == ErrorCategory.UNKNOWN
