"""
Payments app configuration.

This app receives iPaymu payment callbacks and provides:
- Transaction verification against the iPaymu API
- Payment records marked successful on confirmed callbacks
- A journal of received callbacks
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """Configuration for the payments application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments"
