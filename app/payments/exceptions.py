"""
Payment callback exceptions.

Every failure of the iPaymu callback is fatal to that callback: nothing
in the request path catches these. The REST framework exception handler
renders them with the status code of their class.

Exception Hierarchy:
    ValidationError (core, 400)
    ├── MalformedReferenceError - merchantOrderId is not prefix-user-course-instance
    └── MissingParameterError - merchantOrderId or trx_id absent
    BaseApplicationError (core)
    └── PaymentNotConfirmedError - Provider says the transaction is not paid (402)
    ExternalServiceError (core, 502)
    └── VerificationUnavailableError - Provider call failed or returned a bad payload
    NotFoundError (core, 404)
    └── PaymentRecordNotFoundError - No payment record for the order
    ServiceUnavailableError (core, 503)
    └── FeatureDisabledError - iPaymu enrolment switched off

Usage:
    from payments.exceptions import PaymentNotConfirmedError

    if status.paid_status != "paid":
        raise PaymentNotConfirmedError(
            "Payment not confirmed by provider",
            paid_status=status.paid_status,
            details={"transaction_id": transaction_id},
        )
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import (
    BaseApplicationError,
    ExternalServiceError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)

if TYPE_CHECKING:
    from typing import Any


# =============================================================================
# Request Errors
# =============================================================================


class MalformedReferenceError(ValidationError):
    """
    Raised when a merchant order id cannot be decoded.

    The reference must have exactly four dash-separated fields, the last
    three being positive integers.
    """

    default_error_code: str = "MALFORMED_REFERENCE"


class MissingParameterError(ValidationError):
    """
    Raised when a required callback parameter is absent.

    Attributes:
        parameter: Name of the missing parameter as sent on the wire
    """

    default_error_code: str = "MISSING_PARAMETER"

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if parameter:
            details["parameter"] = parameter
        super().__init__(message, error_code=error_code, details=details)
        self.parameter = parameter


# =============================================================================
# Verification Errors
# =============================================================================


class VerificationUnavailableError(ExternalServiceError):
    """
    Raised when the provider's transaction check cannot be trusted.

    Covers timeouts, connection failures, HTTP errors, non-JSON bodies
    and payloads missing res.Status or res.Data.PaidStatus.
    """

    default_error_code: str = "VERIFICATION_UNAVAILABLE"


class PaymentNotConfirmedError(BaseApplicationError):
    """
    Raised when the provider reports the transaction as anything but paid.

    Terminal for the callback. The provider redelivers the callback when
    the status changes, so nothing retries here.

    Attributes:
        paid_status: PaidStatus reported by the provider
    """

    default_error_code: str = "PAYMENT_NOT_CONFIRMED"
    http_status: int = 402

    def __init__(
        self,
        message: str,
        paid_status: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if paid_status is not None:
            details["paid_status"] = paid_status
        super().__init__(message, error_code=error_code, details=details)
        self.paid_status = paid_status


# =============================================================================
# Lookup and Availability Errors
# =============================================================================


class PaymentRecordNotFoundError(NotFoundError):
    """
    Raised when a callback arrives for an order that was never initiated.

    The enrolment has already been granted when this is raised.
    """

    default_error_code: str = "PAYMENT_RECORD_NOT_FOUND"


class FeatureDisabledError(ServiceUnavailableError):
    """Raised when iPaymu enrolment is switched off in settings."""

    default_error_code: str = "FEATURE_DISABLED"
