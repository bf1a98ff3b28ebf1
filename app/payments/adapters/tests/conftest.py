"""
Pytest fixtures for iPaymu adapter tests.

The patched requests.post (mock_ipaymu) and the response builders are
shared with the other payments test packages; see payments/conftest.py
and payments/tests/factories.py.

Sections:
    - Test Data Fixtures
"""

import pytest


# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
def transaction_id():
    """iPaymu transaction id passed to check_transaction."""
    return "T100"
