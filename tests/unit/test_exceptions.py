"""
Unit tests for the exception system.
"""

import logging

from connect_helper.exceptions import (
    BaseError,
    ConfigurationError,
    ErrorCode,
    RemoteCallError,
    ValidationError,
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
    validation_failed,
)


class TestBaseError:
    """Test BaseError class."""

    def test_basic_error_creation(self):
        """Test creating a basic error."""
        error = BaseError("Test error message")

        assert error.message == "Test error message"
        assert str(error) == "Test error message"
        assert error.error_code == ErrorCode.INTERNAL_ERROR
        assert error.status_code == 500
        assert error.cause is None
        assert error.context == {"error_id": error.error_id}

    def test_error_with_cause(self):
        """Test the wrapped exception is summarised in the context."""
        original_error = ValueError("Original error")
        error = BaseError("Wrapped error", cause=original_error)

        assert error.cause is original_error
        assert error.context["cause"] == {"type": "ValueError", "message": "Original error"}

    def test_error_with_correlation_id(self):
        """Test error includes correlation ID when available."""
        set_correlation_id("test-correlation-123")
        try:
            error = BaseError("Correlated")
            assert error.context["correlation_id"] == "test-correlation-123"
        finally:
            clear_correlation_id()

        assert get_correlation_id() is None
        assert "correlation_id" not in BaseError("Uncorrelated").context

    def test_error_is_logged(self, caplog):
        """Test server-side errors log at ERROR and client errors at WARNING."""
        with caplog.at_level(logging.DEBUG, logger="connect_helper"):
            BaseError("Boom", connect_id=5)
            validation_failed("config", 3, "must be a bool or a mapping")

        error_record, warning_record = caplog.records
        assert error_record.levelno == logging.ERROR
        assert "BaseError 1000: Boom" in error_record.getMessage()
        assert error_record.connect_id == 5
        assert warning_record.levelno == logging.WARNING
        assert warning_record.field == "config"


class TestDomainErrors:
    """Test the connect helper errors."""

    def test_configuration_error(self):
        """Test configuration errors record the setting."""
        error = ConfigurationError("missing", setting="remote.base_url")

        assert error.error_code == ErrorCode.CONFIGURATION_ERROR
        assert error.context["setting"] == "remote.base_url"

    def test_remote_call_error(self):
        """Test remote call errors carry the service and path."""
        error = RemoteCallError("failed", path="connects/1/generate-token")

        assert error.status_code == 502
        assert error.error_code == ErrorCode.EXTERNAL_API_ERROR
        assert error.context["service_name"] == "connect_api"
        assert error.context["path"] == "connects/1/generate-token"
        assert str(error) == "failed"

    def test_validation_failed_factory(self):
        """Test the validation factory."""
        error = validation_failed("config", "yes", "must be a bool or a mapping")

        assert isinstance(error, ValidationError)
        assert error.status_code == 400
        assert error.error_code == ErrorCode.VALIDATION_FAILED
        assert error.context["field"] == "config"
        assert error.context["value"] == "'yes'"
        assert error.message == "Validation failed for config: must be a bool or a mapping"
