"""
Payment record persistence service.

Usage:
    from payments.services import PaymentRecordService

    record = PaymentRecordService.latest_for_order(7, 3, 2, "SID-1")
    PaymentRecordService.mark_success(record, note, now_ms)
"""

from __future__ import annotations

from core.services import BaseService

from payments.models import PaymentRecord


class PaymentRecordService(BaseService):
    """Lookup and update of PaymentRecord rows."""

    @classmethod
    def latest_for_order(
        cls,
        user_id: int,
        course_id: int,
        instance_id: int,
        reference: str | None,
    ) -> PaymentRecord | None:
        """
        Return the most recent record for the order.

        With no reference, the most recent record for the
        (user, course, instance) triple is returned.
        """
        return PaymentRecord.objects.latest_for_order(
            user_id=user_id,
            course_id=course_id,
            instance_id=instance_id,
            reference=reference,
        )

    @classmethod
    def mark_success(cls, record: PaymentRecord, note: str, now_ms: int) -> PaymentRecord:
        """Mark the record as successful and save the changed fields."""
        record.mark_success(note=note, now_ms=now_ms)
        record.save(
            update_fields=["payment_status", "pending_reason", "time_updated", "updated_at"]
        )

        cls.get_logger().info(
            "Payment record marked successful",
            extra={
                "payment_record_id": record.pk,
                "user_id": record.user_id,
                "course_id": record.course_id,
                "reference": record.reference,
            },
        )
        return record
