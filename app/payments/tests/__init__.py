"""
Tests for payments app.

This package contains test modules for:
- test_models.py: PaymentRecord and CallbackEvent model tests
- test_order_reference.py: merchantOrderId decoding tests
- test_integration.py: Full callback journeys through the URLconf

Sub-package tests live beside their code:
- payments/adapters/tests/: iPaymu adapter tests
- payments/services/tests/: Verification, finalizer and record tests
- payments/webhooks/tests/: Serializer, handler and view tests

Usage:
    pytest payments/
    pytest payments/services/tests/test_enrolment_finalizer.py
"""
