"""
PaymentRecord model for iPaymu checkout tracking.

The checkout flow creates one record per payment attempt before sending
the buyer to iPaymu. The callback marks the most recent matching record
as successful once iPaymu confirms the transaction is paid.

Timestamps are unix milliseconds, as the checkout flow writes them.

Usage:
    from payments.models import PaymentRecord

    record = PaymentRecord.objects.latest_for_order(
        user_id=7, course_id=3, instance_id=2, reference="SID-1",
    )
    record.mark_success(note="Enrolled via iPaymu callback", now_ms=now_ms)
    record.save()
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.db import models

from core.models import BaseModel

from payments.state_machines import PaymentStatus


class PaymentRecordQuerySet(models.QuerySet):
    """QuerySet for payment record lookups."""

    def for_order(
        self,
        user_id: int,
        course_id: int,
        instance_id: int,
        reference: str | None = None,
    ) -> PaymentRecordQuerySet:
        """
        Filter to one order's records, newest first.

        A None reference matches any reference.
        """
        qs = self.filter(
            user_id=user_id,
            course_id=course_id,
            instance_id=instance_id,
        )
        if reference is not None:
            qs = qs.filter(reference=reference)
        return qs.order_by("-timestamp", "-id")

    def latest_for_order(
        self,
        user_id: int,
        course_id: int,
        instance_id: int,
        reference: str | None = None,
    ) -> PaymentRecord | None:
        """Return the most recent record for the order, or None."""
        return self.for_order(user_id, course_id, instance_id, reference).first()


class PaymentRecord(BaseModel):
    """
    A payment attempt for a course enrolment.

    Fields:
        user: Paying user
        course: Course being bought
        instance: Enrolment instance used
        reference: iPaymu session id (sid) of the checkout
        amount: Amount charged
        currency: ISO 4217 currency code
        payment_status: Pending, Success or Failed
        pending_reason: Human-readable note on the latest status change
        timestamp: Unix ms when checkout created the record
        time_updated: Unix ms of the latest status change
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="payment_records",
    )
    course = models.ForeignKey(
        "enrolments.Course",
        on_delete=models.CASCADE,
        related_name="payment_records",
    )
    instance = models.ForeignKey(
        "enrolments.EnrolmentInstance",
        on_delete=models.CASCADE,
        related_name="payment_records",
    )
    reference = models.CharField(
        max_length=255,
        blank=True,
        default="",
        db_index=True,
        help_text="iPaymu session id (sid) of the checkout",
    )

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0"),
    )
    currency = models.CharField(max_length=3, default="IDR")

    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
        db_index=True,
    )
    pending_reason = models.CharField(max_length=255, blank=True, default="")

    timestamp = models.PositiveBigIntegerField(
        default=0,
        help_text="Unix milliseconds when checkout created this record",
    )
    time_updated = models.PositiveBigIntegerField(
        default=0,
        help_text="Unix milliseconds of the latest status change",
    )

    objects = PaymentRecordQuerySet.as_manager()

    class Meta:
        ordering = ["-timestamp", "-id"]
        verbose_name = "Payment Record"
        verbose_name_plural = "Payment Records"
        indexes = [
            models.Index(
                fields=["user", "course", "instance", "reference", "-timestamp"],
                name="payrec_order_latest_idx",
            ),
        ]

    def __str__(self) -> str:
        return (
            f"PaymentRecord(user={self.user_id}, course={self.course_id}, "
            f"reference={self.reference!r}, {self.payment_status})"
        )

    @property
    def is_successful(self) -> bool:
        return self.payment_status == PaymentStatus.SUCCESS

    def mark_success(self, note: str, now_ms: int) -> None:
        """
        Mark the payment as successful.

        Note: Does not save - caller must save after calling.
        """
        self.payment_status = PaymentStatus.SUCCESS
        self.pending_reason = note
        self.time_updated = now_ms
