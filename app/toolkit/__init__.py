"""
Toolkit - shared services for the project's apps.

This app provides:
- EmailService: Centralized email sending with templates
- send_email_task: Celery task for background email delivery

Key components:
    - services/email.py: EmailService class
    - tasks.py: send_email_task

Usage:
    from toolkit.services.email import EmailService

Note:
    - This app has no models.
    - For base services, models and exceptions, see core/
"""
