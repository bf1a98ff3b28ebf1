"""
Pytest fixtures for payment service tests.
"""

import logging
from unittest.mock import MagicMock

import pytest

from payments.services import EnrolmentFinalizer


@pytest.fixture
def notifier():
    return MagicMock()


@pytest.fixture
def finalizer(notifier):
    """Finalizer with real services and a recording notifier."""
    return EnrolmentFinalizer(notifier=notifier)


@pytest.fixture
def audit_records(caplog):
    """
    Records emitted on the payments.audit logger.

    The audit logger does not propagate, so caplog's handler is attached
    to it directly and each record is captured exactly once.
    """
    audit_logger = logging.getLogger("payments.audit")
    audit_logger.addHandler(caplog.handler)
    try:
        yield lambda: [r for r in caplog.records if r.name == "payments.audit"]
    finally:
        audit_logger.removeHandler(caplog.handler)
