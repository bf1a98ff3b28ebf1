"""
Factory Boy factories for payment test data.

Usage:
    from payments.tests.factories import PaymentRecordFactory, paid_response

    record = PaymentRecordFactory(reference="SID-1")
    paid = PaymentRecordFactory(payment_status=PaymentStatus.SUCCESS)
    body = paid_response(paid_status="unpaid")
"""

from decimal import Decimal
from unittest.mock import MagicMock

import factory
import requests

from enrolments.tests.factories import EnrolmentInstanceFactory, UserFactory
from payments.models import CallbackEvent, PaymentRecord
from payments.state_machines import CallbackEventStatus, PaymentStatus


class PaymentRecordFactory(factory.django.DjangoModelFactory):
    """
    Factory for a pending PaymentRecord.

    course follows instance unless given explicitly.
    """

    class Meta:
        model = PaymentRecord

    user = factory.SubFactory(UserFactory)
    instance = factory.SubFactory(EnrolmentInstanceFactory)
    course = factory.LazyAttribute(lambda o: o.instance.course)
    reference = factory.Sequence(lambda n: f"SID-{n}")
    amount = Decimal("150000.00")
    currency = "IDR"
    payment_status = PaymentStatus.PENDING
    timestamp = factory.Sequence(lambda n: 1_700_000_000_000 + n)
    time_updated = 0


class CallbackEventFactory(factory.django.DjangoModelFactory):
    """Factory for a received CallbackEvent."""

    class Meta:
        model = CallbackEvent

    merchant_order_id = "abc-7-3-2"
    reference = "SID-1"
    transaction_id = factory.Sequence(lambda n: f"T{n}")
    payload = factory.LazyAttribute(
        lambda o: {
            "merchantOrderId": o.merchant_order_id,
            "sid": o.reference,
            "trx_id": o.transaction_id,
        }
    )
    status = CallbackEventStatus.RECEIVED


# =============================================================================
# iPaymu Response Builders
# =============================================================================


def paid_response(status=1, paid_status="paid", **data):
    """Build a decoded iPaymu check-transaction body."""
    return {
        "Status": status,
        "Success": True,
        "Message": "Success",
        "Data": {
            "TransactionId": 100,
            "StatusDesc": "Berhasil",
            "Amount": 150000,
            "PaidStatus": paid_status,
            **data,
        },
    }


def http_response(payload=None, status_code=200, json_error=None):
    """Build a fake requests.Response for requests.post."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error",
            response=response,
        )
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response
