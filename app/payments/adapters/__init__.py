"""
Payment adapters for external services.

All calls to the iPaymu API go through these adapters to ensure
consistent error handling, timeouts and observability.

Usage:
    from payments.adapters import IpaymuAdapter

    status = IpaymuAdapter.check_transaction("T100")
"""

from payments.adapters.ipaymu_adapter import (
    IpaymuAdapter,
    TransactionStatus,
    sign_request,
)

__all__ = [
    "IpaymuAdapter",
    "TransactionStatus",
    "sign_request",
]
