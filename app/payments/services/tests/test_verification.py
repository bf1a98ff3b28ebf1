"""
Tests for IpaymuVerificationService.
"""

from unittest.mock import patch

import pytest

from payments.adapters import TransactionStatus
from payments.exceptions import PaymentNotConfirmedError, VerificationUnavailableError
from payments.services import IpaymuVerificationService
from payments.tests.factories import paid_response


class TestIpaymuVerificationService:
    """Tests for verify."""

    def test_paid(self, ipaymu_settings, mock_ipaymu):
        mock_ipaymu(paid_response())

        status = IpaymuVerificationService.verify("T100")

        assert status.is_paid

    @pytest.mark.parametrize("paid_status", ["unpaid", "pending", "expired", "PAID"])
    def test_not_paid(self, ipaymu_settings, mock_ipaymu, paid_status):
        mock_ipaymu(paid_response(paid_status=paid_status))

        with pytest.raises(PaymentNotConfirmedError) as exc_info:
            IpaymuVerificationService.verify("T100")

        assert exc_info.value.paid_status == paid_status
        assert exc_info.value.http_status == 402

    def test_failed_status_code(self, ipaymu_settings, mock_ipaymu):
        mock_ipaymu(paid_response(status=0))

        with pytest.raises(VerificationUnavailableError):
            IpaymuVerificationService.verify("T100")

    def test_uses_adapter_class_attribute(self):
        status = TransactionStatus.from_response(paid_response())

        with patch.object(
            IpaymuVerificationService.adapter,
            "check_transaction",
            return_value=status,
        ) as mock_check:
            assert IpaymuVerificationService.verify("T9") is status

        mock_check.assert_called_once_with("T9")

