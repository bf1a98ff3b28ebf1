"""
Status enums for payment records and the callback journal.
"""

from payments.state_machines.states import (
    CallbackEventStatus,
    CallbackStep,
    PaymentStatus,
)

__all__ = [
    "CallbackEventStatus",
    "CallbackStep",
    "PaymentStatus",
]
