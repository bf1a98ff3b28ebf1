"""
Payment services for the iPaymu enrolment callback.

This module provides:
- IpaymuVerificationService: Confirms a transaction is paid
- PaymentRecordService: Payment record lookup and Success transition
- EnrolmentFinalizer: Verify, enrol, record, audit and notify

Usage:
    from payments.services import EnrolmentFinalizer

    result = EnrolmentFinalizer().process(order, "T100", "SID-1")
"""

from payments.services.enrolment_finalizer import (
    CallbackTrace,
    EnrolmentFinalizer,
    FinalizeResult,
)
from payments.services.payment_records import PaymentRecordService
from payments.services.verification import IpaymuVerificationService

__all__ = [
    "CallbackTrace",
    "EnrolmentFinalizer",
    "FinalizeResult",
    "IpaymuVerificationService",
    "PaymentRecordService",
]
