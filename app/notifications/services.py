"""
Enrolment notification service.

Emails the stakeholders of a new paid enrolment:
    - the student, sent from the course teacher (or the support user)
    - the course teacher, if the course has one, sent from the student
    - every site admin, sent from the student

Which of them are emailed is controlled by IPAYMU_MAIL_STUDENTS,
IPAYMU_MAIL_TEACHERS and IPAYMU_MAIL_ADMINS. Each body is either the
default template notifications/enrolment_<role>.html or, when
IPAYMU_<ROLE>_EMAIL is set, that custom HTML with $placeholders filled:

    $courseFullName, $courseShortName, $amount, $studentUsername,
    $teacherName, $adminUsername

Email delivery is best-effort: failures are logged and never raised.

Usage:
    from notifications.services import EnrolmentNotificationService

    EnrolmentNotificationService.notify(
        student=user,
        course=course,
        amount=record.amount,
        currency=record.currency,
        teacher=EnrolmentService.get_course_teacher(course),
        admins=EnrolmentService.get_admins(),
    )
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from email.utils import formataddr
from string import Template
from typing import TYPE_CHECKING, Any

from django.conf import settings
from django.utils.html import strip_tags

from core.services import BaseService
from toolkit.services.email import EmailService

if TYPE_CHECKING:
    from decimal import Decimal
    from typing import Sequence

    from enrolments.models import Course


STUDENT = "student"
TEACHER = "teacher"
ADMIN = "admin"

TEMPLATE_NAME = "notifications/enrolment_{role}"
OVERRIDE_SETTINGS = {
    STUDENT: "IPAYMU_STUDENT_EMAIL",
    TEACHER: "IPAYMU_TEACHER_EMAIL",
    ADMIN: "IPAYMU_ADMIN_EMAIL",
}


@dataclass(frozen=True)
class SupportUser:
    """Stand-in sender when a course has no teacher."""

    username: str
    email: str

    @classmethod
    def from_settings(cls) -> SupportUser:
        return cls(username=settings.SUPPORT_NAME, email=settings.SUPPORT_EMAIL)

    def get_full_name(self) -> str:
        return self.username


def display_name(user: Any) -> str:
    """Full name of a user, falling back to the username."""
    full_name = user.get_full_name() if hasattr(user, "get_full_name") else ""
    return full_name or user.username


def mailbox(user: Any) -> str:
    """Format a user as a "Name <address>" sender."""
    return formataddr((display_name(user), user.email))


def enrolment_subject(course: Course) -> str:
    return f"New enrolment in {course.short_name}"


class EnrolmentNotificationService(BaseService):
    """
    Sends the new-enrolment emails.

    All methods are classmethods; the service holds no state.
    """

    @classmethod
    def notify(
        cls,
        *,
        student: Any,
        course: Course,
        amount: Decimal | None,
        currency: str,
        teacher: Any | None,
        admins: Sequence[Any],
    ) -> None:
        """
        Email the student, teacher and admins per the mail settings.

        Args:
            student: The enrolled user
            course: Course enrolled in
            amount: Amount paid (None if unknown)
            currency: Currency of the amount
            teacher: Course teacher, or None
            admins: Site admins; the first is the main admin
        """
        logger = cls.get_logger()
        support = SupportUser.from_settings()
        main_admin = admins[0] if admins else None
        sender_for_student = teacher or support
        subject = enrolment_subject(course)

        context = {
            "course_full_name": course.full_name,
            "course_short_name": course.short_name,
            "amount": "" if amount is None else str(amount),
            "currency": currency,
            "student_name": display_name(student),
            "teacher_name": sender_for_student.username,
            "admin_username": main_admin.username if main_admin else "",
        }

        sent = []
        if settings.IPAYMU_MAIL_STUDENTS:
            cls._send_to(
                role=STUDENT,
                recipient=student,
                sender=sender_for_student,
                subject=subject,
                context=context,
            )
            sent.append(STUDENT)

        if settings.IPAYMU_MAIL_TEACHERS and teacher is not None:
            cls._send_to(
                role=TEACHER,
                recipient=teacher,
                sender=student,
                subject=subject,
                context=context,
            )
            sent.append(TEACHER)

        if settings.IPAYMU_MAIL_ADMINS:
            for admin in admins:
                cls._send_to(
                    role=ADMIN,
                    recipient=admin,
                    sender=student,
                    subject=subject,
                    context={**context, "admin_username": admin.username},
                )
            sent.append(ADMIN)

        logger.info(
            "Enrolment notifications dispatched",
            extra={
                "course_id": course.pk,
                "student_id": student.pk,
                "roles": sent,
                "admin_count": len(admins) if ADMIN in sent else 0,
            },
        )

    @staticmethod
    def placeholders(context: dict[str, str]) -> dict[str, str]:
        """Map the custom-email $placeholders to their values."""
        return {
            "courseFullName": context["course_full_name"],
            "courseShortName": context["course_short_name"],
            "amount": context["amount"],
            "studentUsername": context["student_name"],
            "teacherName": context["teacher_name"],
            "adminUsername": context["admin_username"],
        }

    @classmethod
    def render(cls, role: str, context: dict[str, str]) -> tuple[str, str]:
        """
        Build the (text, html) bodies for a role.

        A configured custom email wins over the default template.
        """
        override = getattr(settings, OVERRIDE_SETTINGS[role], "")
        if override:
            body_html = Template(html.unescape(override)).safe_substitute(
                cls.placeholders(context)
            )
            return strip_tags(body_html), body_html
        return EmailService.render(TEMPLATE_NAME.format(role=role), context)

    @classmethod
    def _send_to(
        cls,
        *,
        role: str,
        recipient: Any,
        sender: Any,
        subject: str,
        context: dict[str, str],
    ) -> None:
        logger = cls.get_logger()

        if not recipient.email:
            logger.warning(
                f"Skipping {role} enrolment email: recipient has no address",
                extra={"role": role, "username": recipient.username},
            )
            return

        body_text, body_html = cls.render(role, context)
        message = {
            "to": recipient.email,
            "subject": subject,
            "body_text": body_text,
            "body_html": body_html,
            "from_email": mailbox(sender),
        }

        if not settings.IPAYMU_EMAILS_ASYNC:
            EmailService.send_raw(**message)
            return

        try:
            EmailService.send_async(**message)
        except Exception as e:
            logger.error(
                f"Failed to queue {role} enrolment email: {type(e).__name__}",
                extra={"role": role, "to": recipient.email},
                exc_info=True,
            )
