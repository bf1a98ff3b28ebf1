"""
Email service for centralized email sending.

This module provides the EmailService class for sending emails with:
- Django template rendering for HTML and plain text
- Raw HTML/text content
- Async sending via Celery

Related files:
    - tasks.py: Async email task

Configuration:
    Email settings are read from Django settings:
    - EMAIL_BACKEND
    - EMAIL_HOST, EMAIL_PORT
    - DEFAULT_FROM_EMAIL

Usage:
    from toolkit.services.email import EmailService

    # Send email with template
    EmailService.send(
        to="student@example.com",
        subject="New enrolment in PY101",
        template_name="notifications/enrolment_student",
        context={"course_full_name": "Python Basics"},
    )

    # Send pre-rendered content, in the background
    EmailService.send_async(
        to="student@example.com",
        subject="New enrolment in PY101",
        body_text="You are enrolled.",
        body_html="<p>You are enrolled.</p>",
    )
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template import TemplateDoesNotExist
from django.template.loader import render_to_string
from django.utils.html import strip_tags

logger = logging.getLogger(__name__)


def _as_list(to: str | list[str]) -> list[str]:
    return [to] if isinstance(to, str) else list(to)


class EmailService:
    """
    Centralized email sending with template support.

    Sending never raises: transport failures are logged and reported
    through the boolean return value, so callers can treat email as
    best-effort.

    Usage:
        # Send template email
        success = EmailService.send(
            to="user@example.com",
            subject="Welcome!",
            template_name="welcome",
            context={"user_name": "John"}
        )

        # Send raw email
        success = EmailService.send_raw(
            to="user@example.com",
            subject="Quick note",
            body_text="Plain text content",
            body_html="<p>HTML content</p>"
        )
    """

    @staticmethod
    def render(template_name: str, context: dict) -> tuple[str, str]:
        """
        Render the HTML and plain text bodies of a template email.

        Looks for {template_name}.html, and {template_name}.txt for the
        text part; without a .txt template the HTML is stripped of tags.

        Returns:
            (body_text, body_html)
        """
        body_html = render_to_string(f"{template_name}.html", context)
        try:
            body_text = render_to_string(f"{template_name}.txt", context)
        except TemplateDoesNotExist:
            body_text = strip_tags(body_html)
        return body_text, body_html

    @staticmethod
    def send(
        to: str | list[str],
        subject: str,
        template_name: str,
        context: dict,
        from_email: str | None = None,
        reply_to: str | None = None,
    ) -> bool:
        """
        Send email using a template.

        Args:
            to: Recipient email address(es)
            subject: Email subject line
            template_name: Name of template (without extension)
            context: Template context variables
            from_email: Sender email (defaults to DEFAULT_FROM_EMAIL)
            reply_to: Reply-to address

        Returns:
            True if email was sent successfully
        """
        body_text, body_html = EmailService.render(template_name, context)
        return EmailService.send_raw(
            to=to,
            subject=subject,
            body_text=body_text,
            body_html=body_html,
            from_email=from_email,
            reply_to=reply_to,
        )

    @staticmethod
    def send_raw(
        to: str | list[str],
        subject: str,
        body_text: str,
        body_html: str | None = None,
        from_email: str | None = None,
        reply_to: str | None = None,
    ) -> bool:
        """
        Send email with raw content (no template).

        Args:
            to: Recipient email address(es)
            subject: Email subject line
            body_text: Plain text email body
            body_html: HTML email body (optional)
            from_email: Sender email (defaults to DEFAULT_FROM_EMAIL)
            reply_to: Reply-to address

        Returns:
            True if email was sent successfully
        """
        recipients = _as_list(to)

        email = EmailMultiAlternatives(
            subject=subject,
            body=body_text,
            from_email=from_email or settings.DEFAULT_FROM_EMAIL,
            to=recipients,
            reply_to=[reply_to] if reply_to else None,
        )
        if body_html:
            email.attach_alternative(body_html, "text/html")

        try:
            email.send(fail_silently=False)
        except Exception as e:
            logger.error(
                f"Failed to send email: {type(e).__name__}",
                extra={"to": recipients, "subject": subject},
                exc_info=True,
            )
            return False

        logger.info("Email sent", extra={"to": recipients, "subject": subject})
        return True

    @staticmethod
    def send_async(
        to: str | list[str],
        subject: str,
        body_text: str,
        body_html: str | None = None,
        from_email: str | None = None,
        reply_to: str | None = None,
    ) -> None:
        """
        Queue pre-rendered email for sending via Celery.

        This method returns immediately; email is sent in background.
        """
        from toolkit.tasks import send_email_task

        send_email_task.delay(
            to=_as_list(to),
            subject=subject,
            body_text=body_text,
            body_html=body_html,
            from_email=from_email,
            reply_to=reply_to,
        )
        logger.debug("Email queued", extra={"to": to, "subject": subject})
