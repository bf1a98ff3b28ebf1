"""
Payments - iPaymu callback handling for course enrolments.

Key components:
    - order_reference.py: OrderReference, the decoded merchantOrderId
    - adapters/: IpaymuAdapter for the transaction status check
    - services/: Verification, payment records and EnrolmentFinalizer
    - webhooks/: Callback request normalisation, handler and view
    - models/: PaymentRecord, CallbackEvent
"""
