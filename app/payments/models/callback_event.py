"""
CallbackEvent model for the iPaymu callback journal.

One row is written per received callback, outside the enrolment
sequence, so a callback that fails partway leaves a row naming the step
that failed and whether the enrolment had already been granted. This
supports manual reconciliation; the journal is not used to deduplicate
callbacks.

Usage:
    from payments.models import CallbackEvent

    event = CallbackEvent.objects.create(payload=payload)
    ...
    event.mark_failed(CallbackStep.RECORD, exc)
    event.save()
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone

from core.models import BaseModel
from core.model_mixins import UUIDPrimaryKeyMixin

from payments.state_machines import CallbackEventStatus, CallbackStep


class CallbackEvent(UUIDPrimaryKeyMixin, BaseModel):
    """
    Journal entry for a received iPaymu callback.

    Fields:
        merchant_order_id: merchantOrderId as received (may be blank)
        reference: sid as received
        transaction_id: trx_id as received
        payload: Merged request parameters
        status: received, processed or failed
        failed_step: Step that raised, for failed callbacks
        enrolment_applied: Whether the enrolment was granted
        error_code: error_code of the raised exception
        error_message: Message of the raised exception
        processed_at: When processing finished (either way)
    """

    # ==========================================================================
    # Request
    # ==========================================================================

    merchant_order_id = models.CharField(max_length=255, blank=True, default="", db_index=True)
    reference = models.CharField(max_length=255, blank=True, default="")
    transaction_id = models.CharField(max_length=255, blank=True, default="", db_index=True)
    payload = models.JSONField(default=dict, blank=True)

    # ==========================================================================
    # Processing Status
    # ==========================================================================

    status = models.CharField(
        max_length=20,
        choices=CallbackEventStatus.choices,
        default=CallbackEventStatus.RECEIVED,
        db_index=True,
    )
    failed_step = models.CharField(
        max_length=20,
        choices=CallbackStep.choices,
        blank=True,
        default="",
    )
    enrolment_applied = models.BooleanField(default=False)
    error_code = models.CharField(max_length=100, blank=True, default="")
    error_message = models.TextField(blank=True, default="")
    processed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Callback Event"
        verbose_name_plural = "Callback Events"
        indexes = [
            models.Index(fields=["status", "created_at"], name="cbevent_status_created_idx"),
        ]

    def __str__(self) -> str:
        return f"CallbackEvent({self.merchant_order_id}, {self.status})"

    @property
    def is_failed(self) -> bool:
        return self.status == CallbackEventStatus.FAILED

    def mark_processed(self) -> None:
        """
        Mark the callback as fully processed.

        Note: Does not save - caller must save after calling.
        """
        self.status = CallbackEventStatus.PROCESSED
        self.processed_at = timezone.now()

    def mark_failed(self, step: str, error: Exception) -> None:
        """
        Record the step that failed and the error it raised.

        Note: Does not save - caller must save after calling.
        """
        self.status = CallbackEventStatus.FAILED
        self.failed_step = step
        self.error_code = getattr(error, "error_code", error.__class__.__name__)
        self.error_message = getattr(error, "message", str(error))
        self.processed_at = timezone.now()
