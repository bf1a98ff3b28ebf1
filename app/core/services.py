"""
Base service layer patterns for business logic encapsulation.

Services encapsulate business logic separate from views and models.
Views handle HTTP concerns, models handle data, services handle logic.
Failures are raised as core.exceptions subclasses and propagate to the
caller; services do not swallow them.

Usage:
    from core.services import BaseService

    class EnrolmentService(BaseService):
        @classmethod
        def enrol_user(cls, instance, user_id, role, time_start, time_end):
            with cls.atomic():
                enrolment, created = UserEnrolment.objects.update_or_create(...)

            cls.get_logger().info("Enrolled user", extra={"user_id": user_id})
            return enrolment
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state), unless the
          service takes collaborators through its constructor
        - Raise exceptions for failures; callers decide what to do
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        This is a thin wrapper around Django's transaction.atomic().
        Use it to make transaction boundaries explicit in service code.
        """
        with transaction.atomic():
            yield
