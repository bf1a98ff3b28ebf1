"""
Pytest fixtures for enrolment tests.

Usage:
    def test_enrol(instance, student):
        EnrolmentService.enrol_user(instance, student.id, instance.role)
"""

import pytest

from enrolments.models import CourseRole
from enrolments.tests.factories import (
    AdminUserFactory,
    CourseFactory,
    EnrolmentInstanceFactory,
    UserEnrolmentFactory,
    UserFactory,
)


# =============================================================================
# Course Fixtures
# =============================================================================


@pytest.fixture
def course(db):
    """Create a visible course."""
    return CourseFactory(full_name="Python Basics", short_name="PY101")


@pytest.fixture
def instance(db, course):
    """Create an enabled iPaymu instance with a 30 day period."""
    return EnrolmentInstanceFactory(course=course, enrol_period=30 * 24 * 3600)


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def student(db):
    """Create a paying student."""
    return UserFactory(username="student", first_name="Siti", last_name="Rahma")


@pytest.fixture
def teacher(db, course):
    """Create an editing teacher enrolled on the course."""
    user = UserFactory(username="teacher", first_name="Budi", last_name="Santoso")
    manual = EnrolmentInstanceFactory(course=course, enrol="manual")
    UserEnrolmentFactory(instance=manual, user=user, role=CourseRole.EDITING_TEACHER)
    return user


@pytest.fixture
def admin_user(db):
    """Create an active site administrator."""
    return AdminUserFactory(username="admin")
