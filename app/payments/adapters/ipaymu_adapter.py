"""
iPaymu API adapter for transaction verification.

This module provides the IpaymuAdapter class which encapsulates the
iPaymu v2 REST API. The callback never trusts the status it is sent;
it asks iPaymu for the authoritative status through this adapter.

Features:
- Bounded timeout on every API call
- Request signing with the merchant VA and API key
- Error translation to VerificationUnavailableError
- Structured logging with timing metrics

Configuration (via settings):
- IPAYMU_VA: Merchant virtual account number
- IPAYMU_API_KEY: Merchant API key
- IPAYMU_SANDBOX: Use the sandbox host (default: True)
- IPAYMU_BASE_URL: Explicit host, overrides IPAYMU_SANDBOX
- IPAYMU_API_TIMEOUT_SECONDS: API call timeout (default: 10)

Usage:
    from payments.adapters import IpaymuAdapter

    status = IpaymuAdapter.check_transaction("T100")
    if status.is_paid:
        ...
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any

import requests
from django.conf import settings
from django.utils import timezone

from payments.exceptions import VerificationUnavailableError

SANDBOX_BASE_URL = "https://sandbox.ipaymu.com"
PRODUCTION_BASE_URL = "https://my.ipaymu.com"
CHECK_TRANSACTION_PATH = "/api/v2/transaction"

# res.Status values iPaymu uses for a successful call
SUCCESS_STATUS_CODES = frozenset({1, 200})

PAID = "paid"


# =============================================================================
# Data Types
# =============================================================================


@dataclass
class TransactionStatus:
    """
    Authoritative transaction status returned by iPaymu.

    Attributes:
        status: res.Status, the provider's call result code
        paid_status: res.Data.PaidStatus ("paid", "unpaid", ...)
        transaction_id: Transaction id echoed by the provider, if any
        status_description: Human-readable status, if any
        amount: Transaction amount as reported, if any
        raw_response: Full decoded response (for debugging)
    """

    status: int | str
    paid_status: str
    transaction_id: str | None = None
    status_description: str | None = None
    amount: Any = None
    raw_response: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, payload: Any) -> TransactionStatus:
        """
        Build a status from a decoded check-transaction response.

        Raises:
            VerificationUnavailableError: res.Status or res.Data.PaidStatus
                is missing
        """
        if not isinstance(payload, dict) or payload.get("Status") is None:
            raise VerificationUnavailableError(
                "Invalid transaction data: missing Status",
                details={"missing_field": "Status"},
            )

        data = payload.get("Data")
        if not isinstance(data, dict) or data.get("PaidStatus") is None:
            raise VerificationUnavailableError(
                "Invalid transaction data: missing Data.PaidStatus",
                details={"missing_field": "Data.PaidStatus"},
            )

        transaction_id = data.get("TransactionId")
        return cls(
            status=payload["Status"],
            paid_status=str(data["PaidStatus"]),
            transaction_id=str(transaction_id) if transaction_id is not None else None,
            status_description=data.get("StatusDesc"),
            amount=data.get("Amount"),
            raw_response=payload,
        )

    @property
    def call_succeeded(self) -> bool:
        """Whether res.Status is a success code (int or numeric string)."""
        try:
            return int(self.status) in SUCCESS_STATUS_CODES
        except (TypeError, ValueError):
            return False

    @property
    def is_paid(self) -> bool:
        return self.call_succeeded and self.paid_status == PAID


# =============================================================================
# Signing
# =============================================================================


def sign_request(method: str, body: str, va: str, api_key: str) -> str:
    """
    Compute the iPaymu v2 request signature.

    The string to sign is "METHOD:va:sha256(body):api_key", with the body
    hash in lowercase hex, signed with HMAC-SHA256 keyed by the API key.
    """
    body_hash = hashlib.sha256(body.encode("utf-8")).hexdigest().lower()
    string_to_sign = f"{method.upper()}:{va}:{body_hash}:{api_key}"
    return hmac.new(
        api_key.encode("utf-8"),
        string_to_sign.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


# =============================================================================
# Adapter
# =============================================================================


class IpaymuAdapter:
    """
    Adapter for iPaymu API operations.

    All methods are classmethods - no instance state is maintained.

    Usage:
        status = IpaymuAdapter.check_transaction("T100")
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get logger for this adapter."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @staticmethod
    def get_base_url() -> str:
        """Return the API host for the configured environment."""
        if settings.IPAYMU_BASE_URL:
            return settings.IPAYMU_BASE_URL.rstrip("/")
        return SANDBOX_BASE_URL if settings.IPAYMU_SANDBOX else PRODUCTION_BASE_URL

    @staticmethod
    def build_headers(body: str) -> dict[str, str]:
        """Build the signed headers for a POST with the given JSON body."""
        va = settings.IPAYMU_VA
        return {
            "Content-Type": "application/json",
            "va": va,
            "signature": sign_request("POST", body, va, settings.IPAYMU_API_KEY),
            "timestamp": timezone.now().strftime("%Y%m%d%H%M%S"),
        }

    @classmethod
    def check_transaction(cls, transaction_id: str) -> TransactionStatus:
        """
        Fetch the authoritative status of a transaction.

        Args:
            transaction_id: iPaymu transaction id (trx_id on the callback)

        Returns:
            TransactionStatus parsed from the response

        Raises:
            VerificationUnavailableError: Timeout, connection error, HTTP
                error, non-JSON body, or a payload missing the status fields
        """
        logger = cls.get_logger()

        url = f"{cls.get_base_url()}{CHECK_TRANSACTION_PATH}"
        body = json.dumps({"transactionId": transaction_id}, separators=(",", ":"))

        log_context = {
            "operation": "check_transaction",
            "transaction_id": transaction_id,
            "url": url,
        }

        start_time = time.time()
        logger.info("Starting iPaymu operation", extra=log_context)

        try:
            response = requests.post(
                url,
                data=body,
                headers=cls.build_headers(body),
                timeout=settings.IPAYMU_API_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
            payload = response.json()
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_request_error(e, log_context, duration_ms)
            raise

        status = TransactionStatus.from_response(payload)

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "iPaymu operation completed",
            extra={
                **log_context,
                "status": status.status,
                "paid_status": status.paid_status,
                "duration_ms": duration_ms,
            },
        )
        return status

    @classmethod
    def _handle_request_error(
        cls,
        error: Exception,
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """
        Translate requests exceptions to VerificationUnavailableError.

        Anything that is not a requests error is re-raised unchanged.
        """
        logger = cls.get_logger()
        log_context = {**log_context, "duration_ms": duration_ms}
        details = {"transaction_id": log_context["transaction_id"]}

        if isinstance(error, requests.Timeout):
            logger.error("iPaymu request timed out", extra=log_context)
            raise VerificationUnavailableError(
                "iPaymu did not answer in time",
                details={**details, "reason": "timeout"},
            ) from error

        if isinstance(error, requests.HTTPError):
            status_code = error.response.status_code if error.response is not None else None
            logger.error(
                "iPaymu returned an HTTP error",
                extra={**log_context, "status_code": status_code},
            )
            raise VerificationUnavailableError(
                f"iPaymu returned HTTP {status_code}",
                details={**details, "reason": "http_error", "status_code": status_code},
            ) from error

        # JSON decode errors from response.json() subclass ValueError
        if isinstance(error, ValueError):
            logger.error("iPaymu returned a non-JSON body", extra=log_context)
            raise VerificationUnavailableError(
                "iPaymu returned a non-JSON response",
                details={**details, "reason": "invalid_json"},
            ) from error

        if isinstance(error, requests.RequestException):
            logger.error(
                "Connection error to iPaymu",
                extra=log_context,
                exc_info=True,
            )
            raise VerificationUnavailableError(
                "Could not connect to iPaymu",
                details={**details, "reason": "connection_error"},
            ) from error
