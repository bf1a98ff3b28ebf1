"""
Tests for toolkit Celery tasks.

The task body is run directly with a pushed request context, so retry
behaviour can be checked without a broker.
"""

from unittest.mock import patch

import pytest
from celery.exceptions import Retry

from toolkit.tasks import send_email_task

MESSAGE = {
    "to": ["siti@example.com"],
    "subject": "New enrolment in PY101",
    "body_text": "Welcome",
    "body_html": "<p>Welcome</p>",
}


@pytest.fixture
def task_request():
    """Push a request context with the given retry count."""
    pushed = []

    def push(retries=0):
        send_email_task.push_request(retries=retries)
        pushed.append(retries)

    yield push
    for _ in pushed:
        send_email_task.pop_request()


class TestSendEmailTask:
    """Tests for send_email_task."""

    def test_sends_email(self, mailoutbox, task_request):
        task_request()

        assert send_email_task.run(**MESSAGE) is True
        assert mailoutbox[0].to == ["siti@example.com"]

    def test_retries_on_failure(self, task_request):
        task_request(retries=0)

        with patch("toolkit.tasks.EmailService.send_raw", return_value=False), patch.object(
            send_email_task, "retry", side_effect=Retry()
        ) as retry:
            with pytest.raises(Retry):
                send_email_task.run(**MESSAGE)

        retry.assert_called_once()

    def test_gives_up_after_max_retries(self, task_request, caplog):
        task_request(retries=send_email_task.max_retries)

        with patch("toolkit.tasks.EmailService.send_raw", return_value=False), patch.object(
            send_email_task, "retry"
        ) as retry:
            result = send_email_task.run(**MESSAGE)

        assert result is False
        retry.assert_not_called()
        assert "Giving up on email after retries" in caplog.text
