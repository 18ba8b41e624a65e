"""Tests for validation utilities and the HTTP error decorator."""

from unittest.mock import MagicMock

import pytest
from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

from core.errors import (
    InvalidContentError,
    PermissionDeniedError,
    ResourceNotFoundError,
    SinkAuthenticationError,
    SinkError,
    TokenRefreshError,
    ValidationError,
)
from core.utils import handle_http_errors, validate_document_id, validate_index_range


def _http_error(status, reason="error"):
    mock_resp = MagicMock()
    mock_resp.status = status
    mock_resp.reason = reason
    return HttpError(mock_resp, reason.encode())


class TestValidateDocumentId:
    """Test document ID validation."""

    def test_valid_document_id(self):
        assert validate_document_id("1AbC-d_E2") == "1AbC-d_E2"

    def test_strips_whitespace(self):
        assert validate_document_id("  abc123  ") == "abc123"

    def test_empty_raises_error(self):
        with pytest.raises(ValidationError, match="required"):
            validate_document_id("")

    def test_whitespace_only_raises_error(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_document_id("   ")

    def test_invalid_chars_raises_error(self):
        with pytest.raises(ValidationError):
            validate_document_id("doc/../path")

    def test_param_name_in_message(self):
        with pytest.raises(ValidationError, match="target_id"):
            validate_document_id("", param_name="target_id")


class TestValidateIndexRange:
    def test_valid_range(self):
        assert validate_index_range(1, 5) == (1, 5)

    @pytest.mark.parametrize("start", [0, -3, True, 1.5, "1"])
    def test_bad_start(self, start):
        with pytest.raises(ValidationError, match="start_index"):
            validate_index_range(start, 10)

    def test_bad_end_type(self):
        with pytest.raises(ValidationError, match="end_index must be an integer"):
            validate_index_range(1, "5")

    @pytest.mark.parametrize("end", [1, 0])
    def test_end_not_after_start(self, end):
        with pytest.raises(ValidationError, match="greater than"):
            validate_index_range(1, end)


class TestHandleHttpErrors:
    def test_returns_result(self):
        @handle_http_errors("noop")
        def noop(value):
            return value * 2

        assert noop(21) == 42

    def test_preserves_function_metadata(self):
        @handle_http_errors("documented")
        def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."

    @pytest.mark.parametrize(
        "status,error_cls",
        [
            (401, SinkAuthenticationError),
            (403, PermissionDeniedError),
            (404, ResourceNotFoundError),
            (503, SinkError),
        ],
    )
    def test_http_error_is_translated(self, status, error_cls):
        @handle_http_errors("get_document")
        def failing():
            raise _http_error(status)

        with pytest.raises(error_cls) as exc_info:
            failing()

        assert exc_info.value.status_code == status
        assert exc_info.value.operation == "get_document"
        assert isinstance(exc_info.value.__cause__, HttpError)

    def test_auth_rejection_mentions_reconnecting(self):
        @handle_http_errors("batch_update")
        def failing():
            raise _http_error(401)

        with pytest.raises(SinkAuthenticationError, match="reconnected"):
            failing()

    def test_refresh_error_becomes_token_refresh_error(self):
        @handle_http_errors("create_document")
        def failing():
            raise RefreshError("invalid_grant")

        with pytest.raises(TokenRefreshError) as exc_info:
            failing()

        assert "invalid_grant" in exc_info.value.reason

    def test_own_errors_pass_through(self):
        @handle_http_errors("create_document")
        def failing():
            raise InvalidContentError()

        with pytest.raises(InvalidContentError):
            failing()

    def test_other_exceptions_propagate(self):
        @handle_http_errors("create_document")
        def failing():
            raise KeyError("documentId")

        with pytest.raises(KeyError):
            failing()
