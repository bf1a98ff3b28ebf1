"""
URL configuration for the payments app.

Routes:
    - GET|POST /callback/ipaymu/ - iPaymu payment callback

All routes are prefixed with /api/v1/payments/ when included in the main URLconf.

Usage:
    # In config/urls.py
    api_v1_patterns = [
        path("payments/", include("payments.urls")),
    ]
"""

from django.urls import path

from payments.webhooks.views import CallbackView

app_name = "payments"

urlpatterns = [
    path("callback/ipaymu/", CallbackView.as_view(), name="ipaymu_callback"),
]
