"""
Callback handling for iPaymu payment notifications.

Usage:
    # In urls.py
    from payments.webhooks.views import CallbackView

    urlpatterns = [
        path("callback/ipaymu/", CallbackView.as_view(), name="ipaymu_callback"),
    ]
"""

from payments.webhooks.handlers import handle_ipaymu_callback
from payments.webhooks.views import CallbackView

__all__ = [
    "CallbackView",
    "handle_ipaymu_callback",
]
