"""
Pytest fixtures shared by the payments test packages.

Provides an order (student, course, enabled iPaymu instance and pending
payment record), a patched iPaymu transaction check and an API client.
Fixtures used by a single package live in that package's conftest.py.

Usage:
    from payments.tests.factories import paid_response

    def test_paid(order, mock_ipaymu):
        mock_ipaymu(paid_response())
        EnrolmentFinalizer().process(order.reference, "T100", order.sid)
"""

from dataclasses import dataclass
from unittest.mock import patch

import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from enrolments.models import CourseRole
from enrolments.tests.factories import (
    AdminUserFactory,
    CourseFactory,
    EnrolmentInstanceFactory,
    UserEnrolmentFactory,
    UserFactory,
)
from payments.order_reference import OrderReference
from payments.tests.factories import PaymentRecordFactory, http_response


# =============================================================================
# Provider Fixtures
# =============================================================================


@pytest.fixture
def mock_ipaymu():
    """
    Patch the HTTP call of IpaymuAdapter.

    Call the fixture with a decoded body to answer with it, or pass
    side_effect= to raise. Returns the requests.post mock.
    """
    with patch("payments.adapters.ipaymu_adapter.requests.post") as mock_post:

        def configure(payload=None, side_effect=None, **response_kwargs):
            if side_effect is not None:
                mock_post.side_effect = side_effect
            else:
                mock_post.return_value = http_response(payload, **response_kwargs)
            return mock_post

        yield configure


# =============================================================================
# Order Fixtures
# =============================================================================


@dataclass
class Order:
    """A checkout waiting for its callback."""

    student: object
    course: object
    instance: object
    record: object

    @property
    def sid(self) -> str:
        return self.record.reference

    @property
    def merchant_order_id(self) -> str:
        return f"abc-{self.student.pk}-{self.course.pk}-{self.instance.pk}"

    @property
    def reference(self) -> OrderReference:
        return OrderReference.parse(self.merchant_order_id)


@pytest.fixture
def student(db):
    return UserFactory(username="siti", first_name="Siti", last_name="Rahma")


@pytest.fixture
def course(db):
    return CourseFactory(full_name="Python Basics", short_name="PY101")


@pytest.fixture
def instance(db, course):
    """Enabled iPaymu instance with a 30 day period."""
    return EnrolmentInstanceFactory(course=course, enrol_period=30 * 24 * 3600)


@pytest.fixture
def teacher(db, course):
    """Editing teacher on the course."""
    user = UserFactory(username="budi", first_name="Budi", last_name="Santoso")
    UserEnrolmentFactory(
        instance=EnrolmentInstanceFactory(course=course, enrol="manual"),
        user=user,
        role=CourseRole.EDITING_TEACHER,
    )
    return user


@pytest.fixture
def admin_user(db):
    return AdminUserFactory(username="admin")


@pytest.fixture
def order(db, ipaymu_settings, student, course, instance):
    """A pending payment record for student/course/instance."""
    record = PaymentRecordFactory(
        user=student,
        course=course,
        instance=instance,
        reference="SID-1",
    )
    return Order(student=student, course=course, instance=instance, record=record)


@pytest.fixture
def callback_params(order):
    """Callback parameters as iPaymu sends them for the order."""
    return {
        "merchantOrderId": order.merchant_order_id,
        "sid": order.sid,
        "trx_id": "T100",
    }



# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client, as iPaymu calls the endpoint."""
    return APIClient()


@pytest.fixture
def callback_url():
    return reverse("payments:ipaymu_callback")
