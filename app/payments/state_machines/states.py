"""
Status enums for payment models.

PaymentStatus values are stored verbatim in PaymentRecord.payment_status
and are shared with the checkout flow that creates the record, so the
stored strings are capitalised.
"""

from django.db import models


class PaymentStatus(models.TextChoices):
    """
    Status of a payment record.

    Transitions:
        PENDING -> SUCCESS (verified callback)
        PENDING -> FAILED (set by checkout when the provider rejects)
    """

    PENDING = "Pending", "Pending"
    SUCCESS = "Success", "Success"
    FAILED = "Failed", "Failed"


class CallbackEventStatus(models.TextChoices):
    """
    Processing status of a received callback.

    Transitions:
        RECEIVED -> PROCESSED (enrolment finalized)
        RECEIVED -> FAILED (any step raised)
    """

    RECEIVED = "received", "Received"
    PROCESSED = "processed", "Processed"
    FAILED = "failed", "Failed"


class CallbackStep(models.TextChoices):
    """Step of the callback sequence, recorded when a callback fails."""

    PARSE = "parse", "Parse request"
    VERIFY = "verify", "Verify transaction"
    RESOLVE = "resolve", "Resolve order"
    ENROL = "enrol", "Enrol user"
    RECORD = "record", "Update payment record"
    NOTIFY = "notify", "Notify stakeholders"
