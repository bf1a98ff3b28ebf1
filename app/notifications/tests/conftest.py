"""
Test configuration and fixtures for notification tests.

Provides a course with a student, an editing teacher and two admins.

Usage:
    def test_example(student, course, teacher, admins, ipaymu_settings):
        EnrolmentNotificationService.notify(...)
"""

from decimal import Decimal

import pytest

from enrolments.tests.factories import AdminUserFactory, CourseFactory, UserFactory


@pytest.fixture
def student(db):
    return UserFactory(username="siti", first_name="Siti", last_name="Rahma")


@pytest.fixture
def teacher(db):
    return UserFactory(username="budi", first_name="Budi", last_name="Santoso")


@pytest.fixture
def admins(db):
    """Main admin first, then a second admin."""
    return [
        AdminUserFactory(username="root", first_name="", last_name=""),
        AdminUserFactory(username="ops", first_name="", last_name=""),
    ]


@pytest.fixture
def course(db):
    return CourseFactory(full_name="Python Basics", short_name="PY101")


@pytest.fixture
def notify_kwargs(ipaymu_settings, student, course, teacher, admins):
    """Arguments for EnrolmentNotificationService.notify()."""
    return {
        "student": student,
        "course": course,
        "amount": Decimal("150000.00"),
        "currency": "IDR",
        "teacher": teacher,
        "admins": admins,
    }
