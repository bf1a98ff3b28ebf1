"""
Handler for iPaymu payment callbacks.

handle_ipaymu_callback journals the callback as a CallbackEvent, then
runs the parse, verify and finalize sequence. A failure at any step is
written to the journal with the step name and re-raised unchanged for
the exception handler to render.

Usage:
    from payments.webhooks.handlers import handle_ipaymu_callback

    result = handle_ipaymu_callback(merged_params)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from payments.models import CallbackEvent
from payments.order_reference import OrderReference
from payments.services import CallbackTrace, EnrolmentFinalizer
from payments.state_machines import CallbackStep
from payments.webhooks.serializers import CallbackRequestSerializer

if TYPE_CHECKING:
    from payments.services import FinalizeResult


logger = logging.getLogger(__name__)


def _as_text(value: Any) -> str:
    return "" if value is None else _strip_nul(str(value))[:255]


def _strip_nul(value: Any) -> Any:
    # PostgreSQL text and jsonb columns reject NUL characters
    if isinstance(value, str):
        return value.replace("\x00", "")
    if isinstance(value, dict):
        return {_strip_nul(key): _strip_nul(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_strip_nul(item) for item in value]
    return value


def handle_ipaymu_callback(
    params: dict[str, Any],
    finalizer: EnrolmentFinalizer | None = None,
) -> FinalizeResult:
    """
    Process one iPaymu callback.

    Args:
        params: Callback parameters merged from query and body
        finalizer: Finalizer to use (defaults to the Django-backed one)

    Returns:
        FinalizeResult of the completed enrolment

    Raises:
        BaseApplicationError: Whatever the failing step raised
    """
    finalizer = finalizer or EnrolmentFinalizer()

    event = CallbackEvent.objects.create(
        merchant_order_id=_as_text(params.get("merchantOrderId")),
        reference=_as_text(params.get("sid")),
        transaction_id=_as_text(params.get("trx_id")),
        payload=_strip_nul(params),
    )
    log_context = {
        "callback_event_id": str(event.pk),
        "merchant_order_id": event.merchant_order_id,
        "transaction_id": event.transaction_id,
        "reference": event.reference,
    }
    logger.info("Received iPaymu callback", extra=log_context)

    trace = CallbackTrace(step=CallbackStep.PARSE)
    try:
        callback = CallbackRequestSerializer(data=params).to_callback_request()
        order = OrderReference.parse(callback.merchant_order_id)
        result = finalizer.process(
            order,
            callback.transaction_id,
            callback.reference,
            trace,
        )
    except Exception as e:
        event.mark_failed(trace.step, e)
        event.enrolment_applied = trace.enrolment_applied
        event.save()

        log = logger.error if trace.enrolment_applied else logger.warning
        log(
            f"iPaymu callback failed at step {str(trace.step)}: {type(e).__name__}",
            extra={
                **log_context,
                "failed_step": str(trace.step),
                "enrolment_applied": trace.enrolment_applied,
                "error_code": event.error_code,
            },
        )
        raise

    event.enrolment_applied = True
    event.mark_processed()
    event.save()

    logger.info("iPaymu callback processed", extra=log_context)
    return result
