"""
Celery configuration for the iPaymu enrolment service.

Celery only carries enrolment emails when IPAYMU_EMAILS_ASYNC is set;
callbacks themselves are always handled inside the request.

Tasks are auto-discovered from all installed Django apps.

Usage:
    from toolkit.tasks import send_email_task

    send_email_task.delay(to=["student@example.com"], subject="...", body_html="...")

For more information, see:
https://docs.celeryq.dev/en/stable/django/first-steps-with-django.html
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()
