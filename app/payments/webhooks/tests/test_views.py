"""
API tests for the iPaymu callback endpoint.

Test Classes:
    TestCallbackSuccess: Paid callbacks over GET, form POST and JSON POST
    TestCallbackErrors: Error status codes and JSON error bodies
    TestFeatureDisabled: The IPAYMU_ENABLED switch
"""

from unittest.mock import patch

import pytest
import requests
from rest_framework import status

from enrolments.models import UserEnrolment
from payments.models import CallbackEvent
from payments.state_machines import CallbackEventStatus
from payments.tests.factories import paid_response
from payments.webhooks.serializers import CallbackRequestSerializer


class TestCallbackSuccess:
    """
    Tests for a paid callback.

    Verifies:
    - Literal text/plain "Success" body
    - Every delivery shape iPaymu uses
    """

    def test_form_post(self, api_client, callback_url, callback_params, mock_ipaymu, mailoutbox):
        mock_ipaymu(paid_response())

        response = api_client.post(callback_url, callback_params)

        assert response.status_code == status.HTTP_200_OK
        assert response.content == b"Success"
        assert response["Content-Type"].startswith("text/plain")

    def test_json_post(self, api_client, callback_url, callback_params, mock_ipaymu, mailoutbox):
        mock_ipaymu(paid_response())

        response = api_client.post(callback_url, callback_params, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert UserEnrolment.objects.filter(user__username="siti").exists()

    def test_query_string_get(self, api_client, callback_url, callback_params, mock_ipaymu, mailoutbox):
        mock_ipaymu(paid_response())

        response = api_client.get(callback_url, callback_params)

        assert response.status_code == status.HTTP_200_OK
        assert response.content == b"Success"

    def test_query_and_body_merge(self, api_client, callback_url, callback_params, mock_ipaymu, mailoutbox):
        mock_ipaymu(paid_response())
        url = f"{callback_url}?merchantOrderId={callback_params['merchantOrderId']}"

        response = api_client.post(url, {"trx_id": "T100", "sid": "SID-1"})

        assert response.status_code == status.HTTP_200_OK
        event = CallbackEvent.objects.get()
        assert event.merchant_order_id == callback_params["merchantOrderId"]

    def test_no_authentication_required(self, api_client, callback_url, callback_params, mock_ipaymu, mailoutbox):
        mock_ipaymu(paid_response())
        api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")

        response = api_client.post(callback_url, callback_params)

        assert response.status_code == status.HTTP_200_OK


class TestCallbackErrors:
    """
    Tests for failed callbacks.

    Verifies:
    - Status code follows the exception class
    - Body carries the error code
    """

    def test_missing_merchant_order_id(self, api_client, callback_url, ipaymu_settings, db):
        response = api_client.post(callback_url, {"trx_id": "T100"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "MISSING_PARAMETER"
        assert response.json()["error"] == "Missing merchantOrderId parameter"

    def test_missing_transaction_id(self, api_client, callback_url, callback_params, mock_ipaymu):
        mock_post = mock_ipaymu(paid_response())
        del callback_params["trx_id"]

        response = api_client.post(callback_url, callback_params)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"] == {"parameter": "trx_id"}
        mock_post.assert_not_called()

    def test_malformed_reference(self, api_client, callback_url, ipaymu_settings, db, mock_ipaymu):
        mock_post = mock_ipaymu(paid_response())

        response = api_client.post(
            callback_url,
            {"merchantOrderId": "abc-7-x-2", "trx_id": "T100"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "MALFORMED_REFERENCE"
        mock_post.assert_not_called()

    def test_unpaid_transaction(self, api_client, callback_url, callback_params, mock_ipaymu):
        mock_ipaymu(paid_response(paid_status="unpaid"))

        response = api_client.post(callback_url, callback_params)

        assert response.status_code == status.HTTP_402_PAYMENT_REQUIRED
        assert response.json()["error_code"] == "PAYMENT_NOT_CONFIRMED"
        assert response.json()["error"] == "Payment Failed"
        assert not UserEnrolment.objects.exists()

    def test_provider_timeout(self, api_client, callback_url, callback_params, mock_ipaymu):
        mock_ipaymu(side_effect=requests.Timeout("read timeout"))

        response = api_client.post(callback_url, callback_params)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()["error_code"] == "VERIFICATION_UNAVAILABLE"
        assert response.json()["details"]["reason"] == "timeout"

    def test_unknown_instance(self, api_client, callback_url, callback_params, order, mock_ipaymu):
        mock_ipaymu(paid_response())
        callback_params["merchantOrderId"] = (
            f"abc-{order.student.pk}-{order.course.pk}-{order.instance.pk + 100}"
        )

        response = api_client.post(callback_url, callback_params)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "ENROLMENT_INSTANCE_NOT_FOUND"

    def test_missing_payment_record(self, api_client, callback_url, callback_params, mock_ipaymu):
        mock_ipaymu(paid_response())
        callback_params["sid"] = "UNKNOWN"

        response = api_client.post(callback_url, callback_params)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "PAYMENT_RECORD_NOT_FOUND"
        # Enrolment is not rolled back
        assert UserEnrolment.objects.filter(user__username="siti").exists()

    def test_null_character_rejected(self, api_client, callback_url, callback_params, mock_ipaymu):
        mock_post = mock_ipaymu(paid_response())
        callback_params["merchantOrderId"] += "\x00"

        response = api_client.post(callback_url, callback_params, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "merchantOrderId" in response.json()
        mock_post.assert_not_called()
        assert "\x00" not in CallbackEvent.objects.get().merchant_order_id


class TestFeatureDisabled:
    """Tests for the IPAYMU_ENABLED switch."""

    @pytest.fixture(autouse=True)
    def disabled(self, ipaymu_settings):
        ipaymu_settings.IPAYMU_ENABLED = False

    @pytest.mark.parametrize("method", ["get", "post"])
    def test_returns_503(self, api_client, callback_url, callback_params, method):
        response = getattr(api_client, method)(callback_url, callback_params)

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["error_code"] == "FEATURE_DISABLED"

    def test_nothing_processed(self, api_client, callback_url, callback_params, mock_ipaymu):
        mock_post = mock_ipaymu(paid_response())

        api_client.post(callback_url, callback_params)

        mock_post.assert_not_called()
        assert not CallbackEvent.objects.exists()
        assert not UserEnrolment.objects.exists()

    def test_request_not_parsed(self, api_client, callback_url, db):
        with patch.object(CallbackRequestSerializer, "from_request") as from_request:
            response = api_client.post(
                callback_url,
                "{not json",
                content_type="application/json",
            )

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        from_request.assert_not_called()


def test_failed_callback_is_journalled(api_client, callback_url, callback_params, mock_ipaymu):
    mock_ipaymu(paid_response(paid_status="expired"))

    api_client.post(callback_url, callback_params)

    event = CallbackEvent.objects.get()
    assert event.status == CallbackEventStatus.FAILED
    assert event.failed_step == "verify"
