"""
Enrolment lookup exceptions.

Exception Hierarchy:
    NotFoundError (core)
    ├── UserNotFoundError - User lookup failures
    ├── CourseNotFoundError - Course lookup failures
    └── EnrolmentInstanceNotFoundError - No enabled instance with that id/method

Usage:
    from enrolments.exceptions import CourseNotFoundError

    raise CourseNotFoundError(
        f"Course {course_id} not found",
        details={"course_id": course_id},
    )
"""

from __future__ import annotations

from core.exceptions import NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when the user referenced by an order does not exist."""

    default_error_code: str = "USER_NOT_FOUND"


class CourseNotFoundError(NotFoundError):
    """Raised when the course referenced by an order does not exist."""

    default_error_code: str = "COURSE_NOT_FOUND"


class EnrolmentInstanceNotFoundError(NotFoundError):
    """
    Raised when no enrolment instance matches the order.

    The instance must exist on the course, use the expected method
    and be enabled.
    """

    default_error_code: str = "ENROLMENT_INSTANCE_NOT_FOUND"
