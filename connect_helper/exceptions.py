"""
Exceptions raised by the connect helper.

Expected failures (missing credentials, rejected token refreshes, corrupted
storage) are reported through return values and the error log. Exceptions
are reserved for misconfiguration, transport failures at the remote client
boundary and invalid arguments.
"""

import threading
import uuid
from enum import Enum
from typing import Any, Optional

from .utils.logger import get_logger

_thread_local = threading.local()


class ErrorCode(str, Enum):
    """Error codes carried by connect helper exceptions."""

    # System errors (1xxx)
    INTERNAL_ERROR = "1000"
    CONNECTION_ERROR = "1002"
    CONFIGURATION_ERROR = "1003"

    # Validation errors (2xxx)
    VALIDATION_FAILED = "2000"

    # External service errors (5xxx)
    EXTERNAL_API_ERROR = "5002"
    INVALID_RESPONSE = "5005"


class BaseError(Exception):
    """Root of the connect helper exceptions; logs itself when created."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        cause: Optional[Exception] = None,
        **context: Any,
    ):
        """
        Args:
            message: Human-readable error message
            error_code: Code from ErrorCode
            status_code: HTTP-like status describing the failure class
            cause: Exception this error wraps
            **context: Extra fields kept on the error and written to the log
        """
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.cause = cause
        self.error_id = str(uuid.uuid4())
        self.context = dict(context, error_id=self.error_id)

        correlation_id = get_correlation_id()
        if correlation_id:
            self.context["correlation_id"] = correlation_id

        if cause is not None:
            self.context["cause"] = {"type": type(cause).__name__, "message": str(cause)}

        super().__init__(message)
        self._log()

    def _log(self) -> None:
        extra = {"error_code": self.error_code.value, "status_code": self.status_code}
        extra.update(self.context)

        logger = get_logger()
        text = f"{type(self).__name__} {self.error_code.value}: {self.message}"
        if self.status_code >= 500:
            logger.error(text, extra=extra)
        else:
            logger.warning(text, extra=extra)


class ConfigurationError(BaseError):
    """A required setting is missing or invalid."""

    def __init__(self, message: str, setting: Optional[str] = None, **context):
        if setting:
            context["setting"] = setting
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, 500, **context)


class ValidationError(BaseError):
    """An argument was rejected."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        cause: Optional[Exception] = None,
        **context,
    ):
        if field:
            context["field"] = field
        super().__init__(message, ErrorCode.VALIDATION_FAILED, 400, cause, **context)


class ExternalServiceError(BaseError):
    """A call to an external service failed."""

    def __init__(
        self,
        message: str,
        service_name: str,
        error_code: ErrorCode = ErrorCode.EXTERNAL_API_ERROR,
        cause: Optional[Exception] = None,
        **context,
    ):
        context["service_name"] = service_name
        super().__init__(message, error_code, 502, cause, **context)


class RemoteCallError(ExternalServiceError):
    """The remote management API could not be reached or answered garbage."""

    def __init__(
        self,
        message: str,
        path: str,
        error_code: ErrorCode = ErrorCode.EXTERNAL_API_ERROR,
        cause: Optional[Exception] = None,
        **context,
    ):
        context["path"] = path
        super().__init__(message, "connect_api", error_code, cause, **context)


def validation_failed(field: str, value: Any, reason: str) -> ValidationError:
    """Build a ValidationError for ``field`` holding ``value``."""
    return ValidationError(
        f"Validation failed for {field}: {reason}",
        field=field,
        value=repr(value),
        reason=reason,
    )


def set_correlation_id(correlation_id: str) -> None:
    """Tag errors and log records raised on this thread with ``correlation_id``."""
    _thread_local.correlation_id = correlation_id


def get_correlation_id() -> Optional[str]:
    return getattr(_thread_local, "correlation_id", None)


def clear_correlation_id() -> None:
    _thread_local.__dict__.pop("correlation_id", None)
