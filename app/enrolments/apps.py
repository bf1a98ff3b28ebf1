"""
Enrolments app configuration.
"""

from django.apps import AppConfig


class EnrolmentsConfig(AppConfig):
    """Configuration for the enrolments application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "enrolments"
    verbose_name = "Enrolments"
