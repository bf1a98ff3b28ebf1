"""
Enrolment finalizer for verified iPaymu payments.

This module provides the EnrolmentFinalizer class which turns a paid
iPaymu transaction into a course enrolment. It runs the sequence:

1. Verify the transaction is paid (process only)
2. Resolve the order to a user, course and enabled iPaymu instance
3. Compute the enrolment window from the instance's period
4. Grant the enrolment (idempotent on the host side)
5. Mark the most recent matching payment record as Success
6. Emit the audit event
7. Notify student, teacher and admins

Each step is a precondition for the next and any failure aborts the
sequence. There is no compensation: if step 5 fails, the enrolment from
step 4 stays in place. CallbackTrace records how far the sequence got so
the caller can journal it.

Collaborators are injected through the constructor and default to the
Django-backed services.

Usage:
    from payments.order_reference import OrderReference
    from payments.services import EnrolmentFinalizer

    finalizer = EnrolmentFinalizer()
    result = finalizer.process(
        OrderReference.parse("abc-7-3-2"),
        transaction_id="T100",
        reference="SID-1",
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from django.utils import timezone

from core.services import BaseService
from enrolments.services import EnrolmentService
from notifications.services import EnrolmentNotificationService

from payments.exceptions import PaymentRecordNotFoundError
from payments.services.payment_records import PaymentRecordService
from payments.services.verification import IpaymuVerificationService
from payments.state_machines import CallbackStep

if TYPE_CHECKING:
    from enrolments.models import Course, EnrolmentInstance, UserEnrolment
    from payments.adapters import TransactionStatus
    from payments.models import PaymentRecord
    from payments.order_reference import OrderReference
    from payments.protocols import (
        EnrolmentGateway,
        EnrolmentNotifier,
        PaymentRecordStore,
        TransactionVerifier,
    )


ENROLMENT_METHOD = "ipaymu"
SUCCESS_NOTE = "Payment confirmed by iPaymu callback"

audit_logger = logging.getLogger("payments.audit")


@dataclass
class CallbackTrace:
    """
    Progress of one callback through the finalizer.

    Attributes:
        step: Step currently running (the failed step after an error)
        enrolment_applied: Whether the enrolment grant has completed
    """

    step: str = CallbackStep.VERIFY
    enrolment_applied: bool = False


@dataclass
class FinalizeResult:
    """Records touched by a finalized callback."""

    user: Any
    course: Course
    instance: EnrolmentInstance
    enrolment: UserEnrolment
    record: PaymentRecord
    time_start: int
    time_end: int


class EnrolmentFinalizer(BaseService):
    """
    Finalizes the enrolment for a verified iPaymu transaction.

    Not idempotent as a whole: a repeated callback re-grants the same
    enrolment (a refresh), updates the record again and sends the emails
    again.
    """

    def __init__(
        self,
        verifier: TransactionVerifier | None = None,
        enrolments: EnrolmentGateway | None = None,
        records: PaymentRecordStore | None = None,
        notifier: EnrolmentNotifier | None = None,
    ):
        self.verifier = verifier or IpaymuVerificationService
        self.enrolments = enrolments or EnrolmentService
        self.records = records or PaymentRecordService
        self.notifier = notifier or EnrolmentNotificationService

    def process(
        self,
        order: OrderReference,
        transaction_id: str,
        reference: str | None,
        trace: CallbackTrace | None = None,
    ) -> FinalizeResult:
        """
        Verify the transaction, then finalize the enrolment.

        Raises:
            VerificationUnavailableError: Provider check failed
            PaymentNotConfirmedError: Transaction not paid
            NotFoundError: See finalize()
        """
        trace = trace or CallbackTrace()
        trace.step = CallbackStep.VERIFY
        self.verify(transaction_id)
        return self.finalize(order, transaction_id, reference, trace)

    def verify(self, transaction_id: str) -> TransactionStatus:
        """Delegate to the verifier; raises unless the transaction is paid."""
        return self.verifier.verify(transaction_id)

    def finalize(
        self,
        order: OrderReference,
        transaction_id: str,
        reference: str | None,
        trace: CallbackTrace | None = None,
    ) -> FinalizeResult:
        """
        Enrol the paying user and mark their payment record successful.

        Args:
            order: Decoded merchant order id
            transaction_id: Verified iPaymu transaction id
            reference: iPaymu session id (sid); None matches any record
                of the order
            trace: Progress holder updated as steps complete

        Returns:
            FinalizeResult with the touched records

        Raises:
            UserNotFoundError, CourseNotFoundError,
            EnrolmentInstanceNotFoundError: Order does not resolve
            PaymentRecordNotFoundError: No record for the order (raised
                after the enrolment has been granted)
        """
        trace = trace or CallbackTrace()
        logger = self.get_logger()
        log_context = {
            "merchant_order_id": str(order),
            "transaction_id": transaction_id,
            "reference": reference,
            "user_id": order.user_id,
            "course_id": order.course_id,
            "instance_id": order.instance_id,
        }

        # Step 1: resolve
        trace.step = CallbackStep.RESOLVE
        user = self.enrolments.get_user(order.user_id)
        course = self.enrolments.get_course(order.course_id)
        instance = self.enrolments.get_enrolment_instance(
            order.instance_id,
            course,
            ENROLMENT_METHOD,
        )

        # Step 2: window
        now = timezone.now()
        time_start, time_end = instance.get_enrolment_window(int(now.timestamp()))

        # Step 3: enrol
        trace.step = CallbackStep.ENROL
        enrolment = self.enrolments.enrol_user(
            instance,
            user.pk,
            instance.role,
            time_start,
            time_end,
        )
        trace.enrolment_applied = True
        logger.info(
            "Enrolment granted",
            extra={**log_context, "time_start": time_start, "time_end": time_end},
        )

        # Step 4: payment record
        trace.step = CallbackStep.RECORD
        record = self.records.latest_for_order(
            order.user_id,
            order.course_id,
            order.instance_id,
            reference,
        )
        if record is None:
            logger.error(
                "No payment record for a paid order; enrolment was granted",
                extra=log_context,
            )
            raise PaymentRecordNotFoundError(
                "Payment record not found for order",
                details={
                    "user_id": order.user_id,
                    "course_id": order.course_id,
                    "instance_id": order.instance_id,
                    "reference": reference,
                },
            )
        self.records.mark_success(
            record,
            note=SUCCESS_NOTE,
            now_ms=int(now.timestamp() * 1000),
        )

        # Step 5: audit
        audit_logger.info(
            SUCCESS_NOTE,
            extra={
                "context": f"course:{course.pk}",
                "related_user_id": order.user_id,
                "merchant_order_id": str(order),
                "reference": reference,
            },
        )

        # Step 6: notify
        trace.step = CallbackStep.NOTIFY
        self.notifier.notify(
            student=user,
            course=course,
            amount=record.amount,
            currency=record.currency,
            teacher=self.enrolments.get_course_teacher(course),
            admins=self.enrolments.get_admins(),
        )

        logger.info("Callback finalized", extra=log_context)
        return FinalizeResult(
            user=user,
            course=course,
            instance=instance,
            enrolment=enrolment,
            record=record,
            time_start=time_start,
            time_end=time_end,
        )
