"""Unit tests for the application exception hierarchy."""

import pytest

from src.utils.exceptions import (
    BadRequestError,
    DatabaseConnectionError,
    DataSaveError,
    ExternalServiceError,
    NotFoundError,
    ProfilingError,
    ResourceNotFoundError,
    UnauthorizedError,
    ValidationError,
    handle_exception_chain,
)


class TestExceptionStatusCodes:
    """Each exception carries the HTTP status it is reported with."""

    @pytest.mark.parametrize(
        "exception, status_code",
        [
            (BadRequestError("bad"), 400),
            (ValidationError("invalid", field="scores"), 400),
            (UnauthorizedError(), 401),
            (NotFoundError("missing"), 404),
            (ResourceNotFoundError("missing", resource_type="profile", resource_id="1"), 404),
            (DataSaveError("not saved"), 500),
            (ExternalServiceError("upstream down", service="openai"), 502),
            (DatabaseConnectionError(), 503),
        ],
    )
    def test_status_codes(self, exception, status_code):
        assert isinstance(exception, ProfilingError)
        assert exception.status_code == status_code

    def test_status_code_override(self):
        """A per-instance status overrides the class default."""
        error = ProfilingError("teapot", status_code=418)

        assert error.status_code == 418
        assert ProfilingError.status_code == 500

    def test_client_error_flag(self):
        assert BadRequestError("bad").is_client_error is True
        assert DatabaseConnectionError().is_client_error is False


class TestExceptionDetails:
    """Details and serialization."""

    def test_validation_error_details(self):
        error = ValidationError("Invalid scores", field="scores", validation_errors=["empty"])

        assert error.field == "scores"
        assert error.details == {"field": "scores", "validation_errors": ["empty"]}

    def test_resource_not_found_details(self):
        error = ResourceNotFoundError("Profile not found", resource_type="profile", resource_id="abc")

        assert error.details == {"resource_type": "profile", "resource_id": "abc"}

    def test_database_error_details(self):
        error = DatabaseConnectionError("failed", operation="find", collection="profiles")

        assert error.status_code == 503
        assert error.details == {"operation": "find", "collection": "profiles"}

    def test_to_dict(self):
        cause = RuntimeError("boom")
        error = ExternalServiceError("upstream down", service="openai", cause=cause)

        data = error.to_dict()

        assert data["error_type"] == "ExternalServiceError"
        assert data["message"] == "upstream down"
        assert data["status_code"] == 502
        assert data["details"] == {"service": "openai"}
        assert data["cause"] == "boom"

    def test_exception_chain(self):
        try:
            try:
                raise ValueError("root cause")
            except ValueError as e:
                raise BadRequestError("wrapped") from e
        except BadRequestError as error:
            chain = handle_exception_chain(error)

        assert [item["type"] for item in chain] == ["BadRequestError", "ValueError"]
