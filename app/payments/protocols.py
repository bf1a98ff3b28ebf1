"""
Protocol definitions for the collaborators of the enrolment finalizer.

EnrolmentFinalizer depends on these interfaces instead of reaching for
the adapter, the enrolment app or the mail transport directly, so each
collaborator can be replaced by a stub in tests.

Available Protocols:
    TransactionVerifier: Authoritative paid-status check
    EnrolmentGateway: Host enrolment lookups and grants
    PaymentRecordStore: Payment record lookup and update
    EnrolmentNotifier: Stakeholder emails after an enrolment

Usage:
    from payments.services import EnrolmentFinalizer

    finalizer = EnrolmentFinalizer(notifier=RecordingNotifier())
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from decimal import Decimal
    from typing import Any, Sequence

    from enrolments.models import Course, EnrolmentInstance, UserEnrolment
    from payments.adapters import TransactionStatus
    from payments.models import PaymentRecord


@runtime_checkable
class TransactionVerifier(Protocol):
    """Protocol for confirming that a transaction has been paid."""

    def verify(self, transaction_id: str) -> TransactionStatus:
        """
        Return the transaction status if it is paid.

        Raises:
            VerificationUnavailableError: The provider cannot be trusted
            PaymentNotConfirmedError: The transaction is not paid
        """
        ...


@runtime_checkable
class EnrolmentGateway(Protocol):
    """Protocol for the host enrolment subsystem."""

    def get_user(self, user_id: int) -> Any: ...

    def get_course(self, course_id: int) -> Course: ...

    def get_enrolment_instance(
        self,
        instance_id: int,
        course: Course,
        method: str,
    ) -> EnrolmentInstance: ...

    def enrol_user(
        self,
        instance: EnrolmentInstance,
        user_id: int,
        role: str,
        time_start: int = 0,
        time_end: int = 0,
    ) -> UserEnrolment:
        """Grant the role on the course for the window. Idempotent."""
        ...

    def get_course_teacher(self, course: Course) -> Any | None: ...

    def get_admins(self) -> Sequence[Any]: ...


@runtime_checkable
class PaymentRecordStore(Protocol):
    """Protocol for payment record persistence."""

    def latest_for_order(
        self,
        user_id: int,
        course_id: int,
        instance_id: int,
        reference: str | None,
    ) -> PaymentRecord | None:
        """Return the most recent matching record, or None."""
        ...

    def mark_success(self, record: PaymentRecord, note: str, now_ms: int) -> PaymentRecord:
        """Persist the Success transition of a record."""
        ...


@runtime_checkable
class EnrolmentNotifier(Protocol):
    """Protocol for notifying stakeholders of a new enrolment."""

    def notify(
        self,
        *,
        student: Any,
        course: Course,
        amount: Decimal | None,
        currency: str,
        teacher: Any | None,
        admins: Sequence[Any],
    ) -> None:
        """Send the enrolment emails. Must not raise on transport failure."""
        ...
