"""Error handling utilities.

This module provides the exception hierarchy for the Advisor Search Hub.
It defines a base AdvisorSearchError class and specialized subclasses for
filter validation, document-store queries and configuration problems.
"""

import http
import traceback
from typing import Any, TypeVar

# Type variable for self-referential return types
T = TypeVar("T", bound="AdvisorSearchError")


class AdvisorSearchError(Exception):
    """Base class for all exceptions raised by the package.

    All custom exceptions should inherit from this class to ensure consistent
    error handling throughout the application.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        status_code: int = http.HTTPStatus.INTERNAL_SERVER_ERROR,
        original_error: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize the error with context information.

        Args:
            message: Human-readable error message
            field: Name of the filter field involved, if applicable
            status_code: HTTP status code to use when converting to HTTP responses
            original_error: The original exception that caused this error, if any
            details: Additional structured details about the error
        """
        self.message = message
        self.field = field
        self.status_code = status_code
        self.original_error = original_error
        self.details = details or {}
        super().__init__(message)

    @classmethod
    def from_exception(
        cls: type[T], exc: Exception, message: str | None = None, **kwargs
    ) -> T:
        """Create an error instance from another exception.

        Args:
            exc: The exception to wrap
            message: Custom message to use (defaults to str(exc))
            **kwargs: Additional arguments to pass to the constructor

        Returns:
            A new instance of the error class
        """
        return cls(message=message or str(exc), original_error=exc, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a dictionary representation.

        Returns:
            A dictionary containing error details suitable for serialization
        """
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
        }

        if self.field:
            result["field"] = self.field

        if self.details:
            result["details"] = self.details

        return result


# Filter-related errors


class FilterError(AdvisorSearchError):
    """Base class for errors related to search filters."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        status_code: int = http.HTTPStatus.BAD_REQUEST,
        **kwargs,
    ):
        super().__init__(message, field, status_code, **kwargs)


class FilterValidationError(FilterError):
    """Error raised when a single filter value fails a rule check.

    The ``code`` is a machine-readable identifier such as ``INVALID_VALUE``
    that callers use to look up a user-facing message.
    """

    def __init__(
        self,
        message: str,
        field: str,
        code: str,
        invalid_values: list[Any] | None = None,
        **kwargs,
    ):
        """Initialize a filter validation error.

        Args:
            message: Technical error message
            field: The filter field that failed validation
            code: Machine-readable error code
            invalid_values: Offending array elements, for multi-value filters
            **kwargs: Additional arguments passed to FilterError
        """
        details = kwargs.pop("details", {})
        details["code"] = code
        if invalid_values:
            details["invalid_values"] = list(invalid_values)

        self.code = code
        self.invalid_values = list(invalid_values or [])
        super().__init__(message, field, details=details, **kwargs)


class QueryTooComplexError(FilterError):
    """Error raised when a filter set exceeds the document store's query limits.

    Raised by ensure_query_supported for query builders that refuse to run
    an over-limit query.
    """

    def __init__(
        self,
        message: str | None = None,
        issues: list[str] | None = None,
        metrics: dict[str, int] | None = None,
        **kwargs,
    ):
        """Initialize a query too complex error.

        Args:
            message: Error message (defaults to a standard message)
            issues: Human-readable limit violations
            metrics: Raw clause counts
            **kwargs: Additional arguments passed to FilterError
        """
        details = kwargs.pop("details", {})

        if issues:
            details["issues"] = issues
        if metrics:
            details["metrics"] = metrics

        message = message or "Filter combination is too complex for a single query"

        super().__init__(message, details=details, **kwargs)


# Document store errors


class StoreError(AdvisorSearchError):
    """Base class for errors raised around document-store operations."""

    def __init__(
        self,
        message: str,
        status_code: int = http.HTTPStatus.BAD_GATEWAY,
        **kwargs,
    ):
        super().__init__(message, status_code=status_code, **kwargs)


class FirebaseQueryError(StoreError):
    """Error describing a failed Firestore query.

    The monitor wrappers never raise this themselves; they re-raise the
    store's own exception unchanged. Query builders may wrap failures in it.
    """

    def __init__(
        self,
        message: str,
        query_info: dict[str, Any] | None = None,
        original_error: Exception | None = None,
        **kwargs,
    ):
        """Initialize a Firestore query error.

        Args:
            message: Error message
            query_info: Description of the query that failed
            original_error: The store exception that caused the failure
            **kwargs: Additional arguments passed to StoreError
        """
        details = kwargs.pop("details", {})

        if query_info:
            details["query_info"] = query_info

        self.query_info = query_info or {}
        super().__init__(
            message, original_error=original_error, details=details, **kwargs
        )


# Configuration errors


class ConfigurationError(AdvisorSearchError):
    """Error raised when there's an issue with the application configuration."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        status_code: int = http.HTTPStatus.INTERNAL_SERVER_ERROR,
        **kwargs,
    ):
        """Initialize a configuration error.

        Args:
            message: Error message
            config_key: The configuration key with the issue
            status_code: HTTP status code (defaults to 500 Internal Server Error)
            **kwargs: Additional arguments passed to AdvisorSearchError
        """
        details = kwargs.pop("details", {})

        if config_key:
            details["config_key"] = config_key

        super().__init__(message, status_code=status_code, details=details, **kwargs)


class MissingConfigurationError(ConfigurationError):
    """Error raised when a required configuration value is missing."""

    def __init__(self, config_key: str, message: str | None = None, **kwargs):
        message = message or f"Required configuration '{config_key}' is missing"
        super().__init__(message, config_key, **kwargs)


class InvalidConfigurationError(ConfigurationError):
    """Error raised when a configuration value is invalid."""

    def __init__(
        self, config_key: str, value: Any, message: str | None = None, **kwargs
    ):
        details = kwargs.pop("details", {})
        details["value"] = str(value)

        message = message or f"Configuration '{config_key}' has invalid value: {value}"

        super().__init__(message, config_key, details=details, **kwargs)


# Utility functions


def format_exception(e: Exception) -> dict[str, Any]:
    """Format an exception for structured logging.

    Args:
        e: The exception to format

    Returns:
        A dictionary containing error details suitable for logging
    """
    if isinstance(e, AdvisorSearchError):
        result = e.to_dict()
        result["traceback"] = traceback.format_exc()
        return result

    return {
        "error_type": e.__class__.__name__,
        "message": str(e),
        "traceback": traceback.format_exc(),
    }
