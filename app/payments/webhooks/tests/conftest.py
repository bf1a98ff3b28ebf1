"""
Pytest fixtures for callback endpoint tests.

The order, the patched iPaymu check and the API client come from
payments/conftest.py.
"""

from unittest.mock import MagicMock

import pytest

from payments.services import EnrolmentFinalizer


@pytest.fixture
def finalizer():
    """Finalizer with real services and no email delivery."""
    return EnrolmentFinalizer(notifier=MagicMock())
