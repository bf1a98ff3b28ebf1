"""
Payment domain models.

This module contains the models used by the iPaymu callback:
- PaymentRecord: A checkout's payment attempt, marked Success on callback
- CallbackEvent: Journal row per received callback
"""

from payments.models.callback_event import CallbackEvent
from payments.models.payment_record import PaymentRecord, PaymentRecordQuerySet

__all__ = [
    "CallbackEvent",
    "PaymentRecord",
    "PaymentRecordQuerySet",
]
