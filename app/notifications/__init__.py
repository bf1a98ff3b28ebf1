"""
Notifications - emails sent after a paid enrolment.

Key components:
    - services.py: EnrolmentNotificationService
    - templates/notifications/: Default student, teacher and admin emails

Usage:
    from notifications.services import EnrolmentNotificationService
"""
