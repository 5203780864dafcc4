"""Custom exception classes for the profiling application.

This module defines a hierarchy of application exceptions. Each exception
carries the HTTP status it is surfaced with so the API error handlers can
map it without knowing every concrete class.
"""

from typing import Any, Dict, List, Optional


class ProfilingError(Exception):
    """Base exception class for all profiling application errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        status_code: Optional[int] = None,
    ):
        """Initialize profiling error.

        Args:
            message: Error message
            error_code: Application-specific error code
            details: Additional error details
            cause: Underlying exception that caused this error
            status_code: Override for the class HTTP status
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause
        if status_code is not None:
            self.status_code = status_code

    @property
    def is_client_error(self) -> bool:
        """Whether the error maps to a 4xx status."""
        return 400 <= self.status_code < 500

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary representation.

        Returns:
            Dict[str, Any]: Exception data
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            "error_code": self.error_code,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
        }

    def __str__(self) -> str:
        """String representation of the exception."""
        parts = [self.message]
        if self.error_code:
            parts.append(f"Code: {self.error_code}")
        if self.details:
            parts.append(f"Details: {self.details}")
        return " | ".join(parts)


class BadRequestError(ProfilingError):
    """Exception for malformed or unacceptable client input."""

    status_code = 400


class ValidationError(BadRequestError):
    """Exception for input validation errors."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        validation_errors: Optional[List[str]] = None,
        **kwargs
    ):
        """Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            value: Invalid value
            validation_errors: List of specific validation errors
            **kwargs: Additional arguments for parent class
        """
        details = kwargs.get("details") or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        if validation_errors:
            details["validation_errors"] = validation_errors

        kwargs["details"] = details
        super().__init__(message, **kwargs)

        self.field = field
        self.value = value
        self.validation_errors = validation_errors or []


class UnauthorizedError(ProfilingError):
    """Exception for missing, invalid or mismatched credentials."""

    status_code = 401

    def __init__(
        self,
        message: str = "Unauthorized",
        user_id: Optional[str] = None,
        **kwargs
    ):
        """Initialize unauthorized error.

        Args:
            message: Error message
            user_id: User ID if known
            **kwargs: Additional arguments for parent class
        """
        details = kwargs.get("details") or {}
        if user_id:
            details["user_id"] = user_id

        kwargs["details"] = details
        super().__init__(message, **kwargs)

        self.user_id = user_id


class NotFoundError(ProfilingError):
    """Exception for when a requested item does not exist."""

    status_code = 404


class ResourceNotFoundError(NotFoundError):
    """Exception for when a stored document is not found."""

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        **kwargs
    ):
        """Initialize resource not found error.

        Args:
            message: Error message
            resource_type: Type of resource (profile, session, etc.)
            resource_id: ID of the resource
            **kwargs: Additional arguments for parent class
        """
        details = kwargs.get("details") or {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        kwargs["details"] = details
        super().__init__(message, **kwargs)

        self.resource_type = resource_type
        self.resource_id = resource_id


class DatabaseConnectionError(ProfilingError):
    """Exception for an unreachable or failing document store."""

    status_code = 503

    def __init__(
        self,
        message: str = "Database unavailable",
        operation: Optional[str] = None,
        collection: Optional[str] = None,
        **kwargs
    ):
        """Initialize database connection error.

        Args:
            message: Error message
            operation: Database operation (find, insert, update, delete)
            collection: Collection name
            **kwargs: Additional arguments for parent class
        """
        details = kwargs.get("details") or {}
        if operation:
            details["operation"] = operation
        if collection:
            details["collection"] = collection

        kwargs["details"] = details
        super().__init__(message, **kwargs)

        self.operation = operation
        self.collection = collection


class DataSaveError(ProfilingError):
    """Exception for a write that the document store did not acknowledge."""

    status_code = 500


class ExternalServiceError(ProfilingError):
    """Exception for upstream service failures."""

    status_code = 502

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        upstream_status: Optional[int] = None,
        **kwargs
    ):
        """Initialize external service error.

        Args:
            message: Error message
            service: External service name (openai, etc.)
            upstream_status: HTTP status returned by the service
            **kwargs: Additional arguments for parent class
        """
        details = kwargs.get("details") or {}
        if service:
            details["service"] = service
        if upstream_status:
            details["upstream_status"] = upstream_status

        kwargs["details"] = details
        super().__init__(message, **kwargs)

        self.service = service
        self.upstream_status = upstream_status


def handle_exception_chain(exception: Exception) -> List[Dict[str, Any]]:
    """Flatten an exception and its causes for diagnostic logging.

    Args:
        exception: Exception to process

    Returns:
        List[Dict[str, Any]]: One entry per exception in the chain
    """
    errors = []
    current_exception: Optional[BaseException] = exception

    while current_exception:
        error_info = {
            "type": current_exception.__class__.__name__,
            "message": str(current_exception),
        }

        if isinstance(current_exception, ProfilingError):
            error_info.update({
                "error_code": current_exception.error_code,
                "details": current_exception.details,
            })

        errors.append(error_info)

        if isinstance(current_exception, ProfilingError) and current_exception.cause:
            current_exception = current_exception.cause
        else:
            current_exception = current_exception.__cause__

    return errors


__all__ = [
    "ProfilingError",
    "BadRequestError",
    "ValidationError",
    "UnauthorizedError",
    "NotFoundError",
    "ResourceNotFoundError",
    "DatabaseConnectionError",
    "DataSaveError",
    "ExternalServiceError",
    "handle_exception_chain",
]
