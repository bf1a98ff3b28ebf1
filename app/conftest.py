"""
Root pytest configuration for the Django project.

This module configures pytest-django and provides project-wide fixtures.
App-specific fixtures are defined in each app's tests/conftest.py.
"""

import os

import django
import pytest

# Ensure Django settings are configured before any tests run
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")


def pytest_configure():
    """Configure Django settings before tests run."""
    django.setup()

    from django.conf import settings

    # Use fast password hasher for tests (PBKDF2 is too slow with 870K iterations)
    settings.PASSWORD_HASHERS = [
        "django.contrib.auth.hashers.MD5PasswordHasher",
    ]


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_integration.py → e2e (full callback journeys through the URLconf)
    - test_views.py, test_services.py, test_handlers.py, etc. → integration
    - test_models.py, test_serializers.py, test_ipaymu_adapter.py, etc. → unit
    - Unmatched files → integration (safe default for Django)

    Explicit markers on test functions/classes take precedence.
    """
    e2e_patterns = ["test_integration.py"]

    integration_patterns = [
        "test_views.py",
        "test_services.py",
        "test_tasks.py",
        "test_handlers.py",
        "test_enrolment_finalizer.py",
        "test_verification.py",
        "test_payment_records.py",
    ]

    unit_patterns = [
        "test_models.py",
        "test_serializers.py",
        "test_ipaymu_adapter.py",
        "test_order_reference.py",
        "test_exceptions.py",
        "test_exception_handler.py",
    ]

    for item in items:
        # Skip if test already has unit/integration/e2e marker
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration", "e2e"}:
            continue

        filename = str(item.fspath).split("/")[-1]

        if any(pattern in filename for pattern in e2e_patterns):
            item.add_marker(pytest.mark.e2e)
        elif any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            # Default: integration (safe for Django where most tests hit DB)
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def ipaymu_settings(settings):
    """
    Configure iPaymu for tests: enabled, sandbox credentials, inline email.

    Returns the pytest-django settings fixture for further overrides.
    """
    settings.IPAYMU_ENABLED = True
    settings.IPAYMU_VA = "0000001234567890"
    settings.IPAYMU_API_KEY = "SANDBOX-KEY"
    settings.IPAYMU_SANDBOX = True
    settings.IPAYMU_BASE_URL = ""
    settings.IPAYMU_API_TIMEOUT_SECONDS = 10
    settings.IPAYMU_MAIL_STUDENTS = True
    settings.IPAYMU_MAIL_TEACHERS = True
    settings.IPAYMU_MAIL_ADMINS = False
    settings.IPAYMU_STUDENT_EMAIL = ""
    settings.IPAYMU_TEACHER_EMAIL = ""
    settings.IPAYMU_ADMIN_EMAIL = ""
    settings.IPAYMU_EMAILS_ASYNC = False
    settings.SUPPORT_EMAIL = "support@example.com"
    settings.SUPPORT_NAME = "Support"
    return settings
