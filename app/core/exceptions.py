"""
Base exception classes for application-wide error handling.

Every failure of an inbound callback surfaces as one of these exceptions.
Nothing in the request path catches them: the REST framework exception
handler (core.exception_handler) turns them into an HTTP error response
using the class's http_status.

Exception Hierarchy:
    BaseApplicationError (base, 500)
    ├── ValidationError - Input validation failures (400)
    ├── NotFoundError - Resource not found (404)
    ├── ExternalServiceError - Third-party service failures (502)
    └── ServiceUnavailableError - Feature switched off or unavailable (503)

Usage:
    from core.exceptions import NotFoundError

    raise NotFoundError(
        f"Course {course_id} not found",
        error_code="COURSE_NOT_FOUND",
        details={"course_id": course_id},
    )

    # Convert to dict for API response
    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=e.http_status)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (ids, step names, etc.)
        http_status: Status code used when rendered as a response
    """

    default_error_code: str = "APPLICATION_ERROR"
    http_status: int = 500

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Example:
            {
                "error": "Payment record not found",
                "error_code": "PAYMENT_RECORD_NOT_FOUND",
                "details": {"user_id": 7, "course_id": 3}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for malformed identifiers and missing request parameters.
    For DRF serializer field validation, use DRF's built-in validation.
    """

    default_error_code: str = "VALIDATION_ERROR"
    http_status: int = 400


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Use for single-resource lookups where existence is expected
    (user, course, enrolment instance, payment record).
    """

    default_error_code: str = "NOT_FOUND"
    http_status: int = 404


class ExternalServiceError(BaseApplicationError):
    """
    Raised when an external service call fails.

    Use for third-party API failures, network timeouts and
    unexpected response shapes. Log the original error for
    debugging but don't expose internal details to clients.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
    http_status: int = 502


class ServiceUnavailableError(BaseApplicationError):
    """
    Raised when a feature is switched off or cannot serve requests.

    HTTP 503 Service Unavailable.
    """

    default_error_code: str = "SERVICE_UNAVAILABLE"
    http_status: int = 503
