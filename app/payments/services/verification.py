"""
Transaction verification service.

Wraps IpaymuAdapter.check_transaction with the acceptance rule of the
callback: the provider call must have succeeded and the transaction
must be reported as paid.

Usage:
    from payments.services import IpaymuVerificationService

    status = IpaymuVerificationService.verify("T100")
"""

from __future__ import annotations

from core.services import BaseService

from payments.adapters import IpaymuAdapter, TransactionStatus
from payments.adapters.ipaymu_adapter import PAID
from payments.exceptions import PaymentNotConfirmedError, VerificationUnavailableError


class IpaymuVerificationService(BaseService):
    """
    Confirms iPaymu transactions.

    All methods are classmethods; the adapter is a class attribute so
    tests and alternative providers can swap it.
    """

    adapter = IpaymuAdapter

    @classmethod
    def verify(cls, transaction_id: str) -> TransactionStatus:
        """
        Return the transaction status if iPaymu reports it as paid.

        Raises:
            VerificationUnavailableError: Provider call failed, or
                res.Status is not a success code
            PaymentNotConfirmedError: PaidStatus is anything but "paid"
        """
        logger = cls.get_logger()
        status = cls.adapter.check_transaction(transaction_id)

        if not status.call_succeeded:
            logger.warning(
                "iPaymu reported a failed status check",
                extra={"transaction_id": transaction_id, "status": status.status},
            )
            raise VerificationUnavailableError(
                f"iPaymu status check failed with status {status.status}",
                details={"transaction_id": transaction_id, "status": status.status},
            )

        if status.paid_status != PAID:
            logger.info(
                "Transaction not paid",
                extra={
                    "transaction_id": transaction_id,
                    "paid_status": status.paid_status,
                },
            )
            raise PaymentNotConfirmedError(
                "Payment Failed",
                paid_status=status.paid_status,
                details={"transaction_id": transaction_id},
            )

        logger.info(
            "Transaction verified as paid",
            extra={"transaction_id": transaction_id},
        )
        return status
