"""
Course and enrolment models.

Models:
    Course: A course with full and short names
    EnrolmentInstance: An enrolment method configured on a course
    UserEnrolment: A user's enrolment through an instance

Enrolment windows are stored as unix timestamps in seconds, with 0
meaning "unbounded" on either side.

Usage:
    from enrolments.models import Course, EnrolmentInstance, CourseRole

    course = Course.objects.create(full_name="Python 101", short_name="PY101")
    instance = EnrolmentInstance.objects.create(
        course=course,
        enrol="ipaymu",
        role=CourseRole.STUDENT,
        enrol_period=30 * 24 * 3600,
        cost=Decimal("150000"),
    )
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.db import models

from core.models import BaseModel


class CourseRole(models.TextChoices):
    """
    Roles a user can hold on a course.

    Declared in order of authority: a manager outranks an editing
    teacher, who outranks a non-editing teacher, who outranks a student.
    """

    MANAGER = "manager", "Manager"
    EDITING_TEACHER = "editingteacher", "Teacher"
    TEACHER = "teacher", "Non-editing teacher"
    STUDENT = "student", "Student"


# Roles allowed to update a course, highest authority first
COURSE_UPDATE_ROLES = (CourseRole.MANAGER, CourseRole.EDITING_TEACHER)


class EnrolmentStatus(models.IntegerChoices):
    """Status of an enrolment instance. 0 is enabled."""

    ENABLED = 0, "Enabled"
    DISABLED = 1, "Disabled"


class Course(BaseModel):
    """
    A course users can enrol in.

    Fields:
        full_name: Display name used in emails
        short_name: Unique short code used in email subjects
        visible: Whether the course is shown to students
    """

    full_name = models.CharField(max_length=254)
    short_name = models.CharField(max_length=255, unique=True)
    visible = models.BooleanField(default=True)

    class Meta:
        ordering = ["id"]
        verbose_name = "Course"
        verbose_name_plural = "Courses"

    def __str__(self) -> str:
        return self.short_name


class EnrolmentInstance(BaseModel):
    """
    An enrolment method configured on a course.

    Fields:
        course: Course the method enrols into
        enrol: Method name (e.g. "ipaymu")
        name: Optional display name
        status: ENABLED (0) or DISABLED (1)
        role: Role granted to users enrolled through this instance
        enrol_period: Enrolment duration in seconds, 0 for no expiry
        cost: Price charged for enrolment
        currency: ISO 4217 currency code
    """

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name="enrolment_instances",
    )
    enrol = models.CharField(
        max_length=20,
        db_index=True,
        help_text="Enrolment method name (e.g. 'ipaymu')",
    )
    name = models.CharField(max_length=255, blank=True, default="")
    status = models.PositiveSmallIntegerField(
        choices=EnrolmentStatus.choices,
        default=EnrolmentStatus.ENABLED,
    )
    role = models.CharField(
        max_length=20,
        choices=CourseRole.choices,
        default=CourseRole.STUDENT,
    )
    enrol_period = models.PositiveIntegerField(
        default=0,
        help_text="Enrolment duration in seconds (0 = unlimited)",
    )
    cost = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0"),
    )
    currency = models.CharField(max_length=3, default="IDR")

    class Meta:
        ordering = ["id"]
        verbose_name = "Enrolment Instance"
        verbose_name_plural = "Enrolment Instances"
        indexes = [
            models.Index(
                fields=["course", "enrol", "status"],
                name="enrol_inst_course_method_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.enrol} on {self.course_id} ({self.get_status_display()})"

    @property
    def is_enabled(self) -> bool:
        return self.status == EnrolmentStatus.ENABLED

    def get_enrolment_window(self, now: int) -> tuple[int, int]:
        """
        Compute the (time_start, time_end) window for a new enrolment.

        Args:
            now: Current unix time in seconds

        Returns:
            (now, now + enrol_period) for a fixed period,
            (0, 0) when the instance has no expiry
        """
        if self.enrol_period:
            return now, now + self.enrol_period
        return 0, 0


class UserEnrolment(BaseModel):
    """
    A user's enrolment in a course through an enrolment instance.

    One row per (instance, user). Re-enrolling refreshes the role and
    window instead of creating a second row.

    Fields:
        instance: Enrolment instance used
        user: Enrolled user
        role: Role held on the course
        time_start: Unix seconds the enrolment starts (0 = unbounded)
        time_end: Unix seconds the enrolment ends (0 = never)
    """

    instance = models.ForeignKey(
        EnrolmentInstance,
        on_delete=models.CASCADE,
        related_name="user_enrolments",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="course_enrolments",
    )
    role = models.CharField(
        max_length=20,
        choices=CourseRole.choices,
        default=CourseRole.STUDENT,
    )
    time_start = models.PositiveBigIntegerField(default=0)
    time_end = models.PositiveBigIntegerField(default=0)

    class Meta:
        ordering = ["id"]
        verbose_name = "User Enrolment"
        verbose_name_plural = "User Enrolments"
        constraints = [
            models.UniqueConstraint(
                fields=["instance", "user"],
                name="unique_user_enrolment_per_instance",
            ),
        ]

    def __str__(self) -> str:
        return f"UserEnrolment(user={self.user_id}, instance={self.instance_id}, role={self.role})"

    def is_active_at(self, now: int) -> bool:
        """Check whether the window covers the given unix time."""
        if self.time_start and now < self.time_start:
            return False
        if self.time_end and now >= self.time_end:
            return False
        return True
