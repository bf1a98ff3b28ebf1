"""
Callback endpoint view for iPaymu.

iPaymu calls this endpoint after a buyer pays. The view checks the
feature flag before touching the request, merges query and body
parameters, and hands them to handle_ipaymu_callback. Errors propagate
to the REST framework exception handler.

Usage:
    # In urls.py
    from payments.webhooks.views import CallbackView

    urlpatterns = [
        path("callback/ipaymu/", CallbackView.as_view(), name="ipaymu_callback"),
    ]
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.http import HttpResponse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.views import APIView

from payments.exceptions import FeatureDisabledError
from payments.webhooks.handlers import handle_ipaymu_callback
from payments.webhooks.serializers import CallbackRequestSerializer


logger = logging.getLogger(__name__)

SUCCESS_BODY = "Success"

CALLBACK_RESPONSES = {
    200: OpenApiResponse(
        response=OpenApiTypes.STR,
        description="Enrolment finalized; body is the literal text 'Success'",
    ),
    400: OpenApiResponse(description="Missing parameter or malformed merchantOrderId"),
    402: OpenApiResponse(description="iPaymu does not report the transaction as paid"),
    404: OpenApiResponse(description="User, course, instance or payment record not found"),
    502: OpenApiResponse(description="iPaymu transaction check unavailable"),
    503: OpenApiResponse(description="iPaymu enrolment is disabled"),
}


class CallbackView(APIView):
    """
    Receive iPaymu payment callbacks.

    GET|POST /api/v1/payments/callback/ipaymu/
        Finalize the enrolment for a paid transaction.

    Authentication:
        None. The transaction is verified against the iPaymu API
        instead of trusting the request.

    Request:
        Query parameters, form fields or a JSON body with
        merchantOrderId (required), trx_id (required), sid (optional).

    Response:
        200 OK: text/plain "Success"
        4xx/5xx: JSON error from the application exception handler
    """

    authentication_classes = []
    permission_classes = []
    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def initial(self, request, *args, **kwargs):
        # Checked before content negotiation and parsing
        if not settings.IPAYMU_ENABLED:
            raise FeatureDisabledError("iPaymu enrolment is disabled")
        super().initial(request, *args, **kwargs)

    @extend_schema(
        operation_id="ipaymu_callback",
        summary="iPaymu payment callback",
        description=(
            "Verify the transaction with iPaymu, enrol the paying user, mark "
            "the payment record successful and notify stakeholders."
        ),
        request=CallbackRequestSerializer,
        responses=CALLBACK_RESPONSES,
        tags=["Payments - Callbacks"],
    )
    def post(self, request):
        """Handle a callback delivered as a form post or JSON body."""
        return self._handle(request)

    @extend_schema(
        operation_id="ipaymu_callback_get",
        summary="iPaymu payment callback (query string)",
        parameters=[CallbackRequestSerializer],
        responses=CALLBACK_RESPONSES,
        tags=["Payments - Callbacks"],
    )
    def get(self, request):
        """Handle a callback delivered as query parameters."""
        return self._handle(request)

    def _handle(self, request) -> HttpResponse:
        serializer = CallbackRequestSerializer.from_request(request)
        handle_ipaymu_callback(serializer.initial_data)
        return HttpResponse(SUCCESS_BODY, content_type="text/plain")
