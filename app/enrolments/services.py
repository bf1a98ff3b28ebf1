"""
Enrolment service for course, instance and user lookups and enrolment grants.

This module provides the EnrolmentService class which the payment callback
uses to resolve an order to concrete records and to grant the enrolment.

Usage:
    from enrolments.services import EnrolmentService

    user = EnrolmentService.get_user(7)
    course = EnrolmentService.get_course(3)
    instance = EnrolmentService.get_enrolment_instance(2, course, method="ipaymu")

    start, end = instance.get_enrolment_window(now)
    EnrolmentService.enrol_user(instance, user.id, instance.role, start, end)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth import get_user_model

from core.services import BaseService

from enrolments.exceptions import (
    CourseNotFoundError,
    EnrolmentInstanceNotFoundError,
    UserNotFoundError,
)
from enrolments.models import (
    COURSE_UPDATE_ROLES,
    Course,
    EnrolmentInstance,
    EnrolmentStatus,
    UserEnrolment,
)

if TYPE_CHECKING:
    from django.contrib.auth.models import AbstractBaseUser


class EnrolmentService(BaseService):
    """
    Lookups and enrolment grants on the host enrolment subsystem.

    All methods are classmethods; the service holds no state.
    """

    # =========================================================================
    # Lookups
    # =========================================================================

    @classmethod
    def get_user(cls, user_id: int) -> AbstractBaseUser:
        """
        Fetch a user by id.

        Raises:
            UserNotFoundError: No user with that id
        """
        user = get_user_model().objects.filter(pk=user_id).first()
        if user is None:
            raise UserNotFoundError(
                f"User {user_id} not found",
                details={"user_id": user_id},
            )
        return user

    @classmethod
    def get_course(cls, course_id: int) -> Course:
        """
        Fetch a course by id.

        Raises:
            CourseNotFoundError: No course with that id
        """
        course = Course.objects.filter(pk=course_id).first()
        if course is None:
            raise CourseNotFoundError(
                f"Course {course_id} not found",
                details={"course_id": course_id},
            )
        return course

    @classmethod
    def get_enrolment_instance(
        cls,
        instance_id: int,
        course: Course,
        method: str,
    ) -> EnrolmentInstance:
        """
        Fetch an enabled enrolment instance of the given method on a course.

        Raises:
            EnrolmentInstanceNotFoundError: Missing, other method, other
                course, or disabled
        """
        instance = (
            EnrolmentInstance.objects.select_related("course")
            .filter(
                pk=instance_id,
                course=course,
                enrol=method,
                status=EnrolmentStatus.ENABLED,
            )
            .first()
        )
        if instance is None:
            raise EnrolmentInstanceNotFoundError(
                f"No enabled '{method}' enrolment instance {instance_id} on course {course.pk}",
                details={
                    "instance_id": instance_id,
                    "course_id": course.pk,
                    "method": method,
                },
            )
        return instance

    @classmethod
    def get_course_teacher(cls, course: Course) -> AbstractBaseUser | None:
        """
        Return the highest-authority user who can update the course.

        Managers come before editing teachers; within a role the lowest
        user id wins. Inactive users are skipped.

        Returns:
            The teacher, or None if the course has nobody in those roles
        """
        enrolments = (
            UserEnrolment.objects.select_related("user")
            .filter(
                instance__course=course,
                role__in=COURSE_UPDATE_ROLES,
                user__is_active=True,
            )
            .order_by("user_id")
        )
        candidates = sorted(
            enrolments,
            key=lambda enrolment: COURSE_UPDATE_ROLES.index(enrolment.role),
        )
        if not candidates:
            return None
        return candidates[0].user

    @classmethod
    def get_admins(cls) -> list[AbstractBaseUser]:
        """Return all active site administrators, oldest account first."""
        return list(
            get_user_model()
            .objects.filter(is_superuser=True, is_active=True)
            .order_by("pk")
        )

    @classmethod
    def get_main_admin(cls) -> AbstractBaseUser | None:
        """Return the main site administrator (the first one), if any."""
        admins = cls.get_admins()
        return admins[0] if admins else None

    # =========================================================================
    # Enrolment
    # =========================================================================

    @classmethod
    def enrol_user(
        cls,
        instance: EnrolmentInstance,
        user_id: int,
        role: str,
        time_start: int = 0,
        time_end: int = 0,
    ) -> UserEnrolment:
        """
        Enrol a user through an instance, or refresh an existing enrolment.

        Re-enrolling an already enrolled user updates the role and window
        in place, so calling this twice with the same arguments leaves
        the same single enrolment behind.

        Args:
            instance: Enrolment instance to enrol through
            user_id: User to enrol
            role: Role to grant on the course
            time_start: Window start in unix seconds (0 = unbounded)
            time_end: Window end in unix seconds (0 = never)

        Returns:
            The created or refreshed UserEnrolment
        """
        logger = cls.get_logger()

        with cls.atomic():
            enrolment, created = UserEnrolment.objects.update_or_create(
                instance=instance,
                user_id=user_id,
                defaults={
                    "role": role,
                    "time_start": time_start,
                    "time_end": time_end,
                },
            )

        logger.info(
            "Enrolled user" if created else "Refreshed existing enrolment",
            extra={
                "user_id": user_id,
                "course_id": instance.course_id,
                "instance_id": instance.pk,
                "role": role,
                "time_start": time_start,
                "time_end": time_end,
            },
        )
        return enrolment
