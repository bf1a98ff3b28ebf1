"""
Celery tasks for the toolkit app.

Tasks:
    send_email_task: Send a pre-rendered email in the background

Usage:
    from toolkit.tasks import send_email_task

    send_email_task.delay(
        to=["student@example.com"],
        subject="New enrolment in PY101",
        body_text="...",
        body_html="<p>...</p>",
    )
"""

from __future__ import annotations

import logging

from celery import shared_task

from toolkit.services.email import EmailService

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
)
def send_email_task(
    self,
    to: list[str],
    subject: str,
    body_text: str,
    body_html: str | None = None,
    from_email: str | None = None,
    reply_to: str | None = None,
) -> bool:
    """
    Send an email, retrying when the transport fails.

    Returns:
        True once the email is sent, False after the last retry fails
    """
    sent = EmailService.send_raw(
        to=to,
        subject=subject,
        body_text=body_text,
        body_html=body_html,
        from_email=from_email,
        reply_to=reply_to,
    )
    if sent:
        return True

    if self.request.retries < self.max_retries:
        raise self.retry()

    logger.error(
        "Giving up on email after retries",
        extra={"to": to, "subject": subject, "retries": self.request.retries},
    )
    return False
